"""Relays buyer inquiries to artists by email."""

import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from app.exceptions import NotFound
from app.models.artwork import Artwork
from app.services.mail import MailSender, get_mail_sender, render_email

logger = logging.getLogger("atelier")


class ContactService:
    """Sends the inquiry to the artist and a confirmation copy to the inquirer."""

    def __init__(self, mail_sender: MailSender) -> None:
        self.mail_sender = mail_sender

    def send_inquiry(
        self,
        db: Session,
        name: str,
        email: str,
        message: str,
        artwork_id: int,
        phone: str | None = None,
    ) -> None:
        artwork = db.get(Artwork, artwork_id)
        artist = artwork.artist if artwork else None
        if not artist:
            raise NotFound("Artist not found")

        context = {
            "artist_name": artist.username,
            "artwork_title": artwork.title,
            "name": name,
            "email": email,
            "phone": phone,
            "message": message,
        }
        self.mail_sender.send(artist.email, "New Artwork Inquiry", render_email("inquiry_artist.txt", **context))
        self.mail_sender.send(
            email,
            f"Confirmation: Your message to {artist.username}",
            render_email("inquiry_confirmation.txt", **context),
        )
        logger.info("Inquiry about artwork %d relayed to user %d", artwork.id, artist.id)


def get_contact_service(mail_sender: MailSender = Depends(get_mail_sender)) -> ContactService:
    return ContactService(mail_sender)

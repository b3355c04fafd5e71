"""Outbound email: message rendering and transports."""

import logging
import smtplib
from abc import ABC, abstractmethod
from email.message import EmailMessage
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from app.config import Settings, get_settings
from app.exceptions import DeliveryError

logger = logging.getLogger("atelier")

_templates = Environment(
    loader=FileSystemLoader(Path(__file__).resolve().parent.parent / "templates" / "email"),
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    autoescape=False,
)


def render_email(template_name: str, **context: object) -> str:
    """Render a plain-text email body from app/templates/email."""
    return _templates.get_template(template_name).render(**context)


class MailSender(ABC):
    """Delivers a single plain-text message. Raises DeliveryError on failure."""

    @abstractmethod
    def send(self, to_address: str, subject: str, body: str) -> None: ...


class ConsoleMailSender(MailSender):
    """Writes messages to the application log instead of delivering them."""

    def send(self, to_address: str, subject: str, body: str) -> None:
        logger.info("EMAIL to=%s subject=%r\n%s", to_address, subject, body)


class SMTPMailSender(MailSender):
    """Delivers messages through an SMTP relay, one connection per message."""

    def __init__(self, settings: Settings) -> None:
        self.host = settings.SMTP_HOST
        self.port = settings.SMTP_PORT
        self.username = settings.SMTP_USERNAME
        self.password = settings.SMTP_PASSWORD
        self.use_tls = settings.SMTP_USE_TLS
        self.from_address = settings.MAIL_FROM

    def send(self, to_address: str, subject: str, body: str) -> None:
        message = EmailMessage()
        message["From"] = self.from_address
        message["To"] = to_address
        message["Subject"] = subject
        message.set_content(body)

        try:
            with smtplib.SMTP(self.host, self.port, timeout=30) as conn:
                if self.use_tls:
                    conn.starttls()
                if self.username:
                    conn.login(self.username, self.password)
                conn.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("SMTP delivery to %s failed: %s", to_address, e)
            raise DeliveryError() from e


_mail_sender: MailSender | None = None


def get_mail_sender() -> MailSender:
    """Get singleton mail sender for the configured MAIL_BACKEND."""
    global _mail_sender
    if _mail_sender is None:
        settings = get_settings()
        if settings.MAIL_BACKEND == "smtp":
            _mail_sender = SMTPMailSender(settings)
        else:
            _mail_sender = ConsoleMailSender()
    return _mail_sender

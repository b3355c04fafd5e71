"""Contact relay endpoint."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.rate_limit import limiter
from app.schemas.common import MessageResponse
from app.schemas.contact import ContactRequest
from app.services.contact import ContactService, get_contact_service

router = APIRouter(prefix="/api/contact", tags=["Contact"])


@router.post("/", response_model=MessageResponse)
@limiter.limit("5/minute")
def send_contact_message(
    request: Request,
    body: ContactRequest,
    db: Session = Depends(get_db),
    service: ContactService = Depends(get_contact_service),
) -> MessageResponse:
    """Email an inquiry about an artwork to its artist."""
    service.send_inquiry(db, body.name, body.email, body.message, body.artwork_id, phone=body.phone)
    return MessageResponse(message="Message sent successfully")

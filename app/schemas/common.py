"""Response envelopes shared by every endpoint."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    success: bool = True
    message: str

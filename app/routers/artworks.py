"""Artwork API endpoints."""

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import CurrentUser, get_current_user
from app.exceptions import ValidationError
from app.models.artwork import ArtworkStatus
from app.rate_limit import limiter
from app.schemas.artwork import ArtworkListResponse, ArtworkOut, ArtworkResponse, ArtworkUpdate
from app.schemas.common import MessageResponse
from app.services.artwork import ArtworkService, get_artwork_service

router = APIRouter(prefix="/api/artworks", tags=["Artworks"])


@router.get("/", response_model=ArtworkListResponse)
def list_artworks(
    db: Session = Depends(get_db),
    service: ArtworkService = Depends(get_artwork_service),
) -> ArtworkListResponse:
    """List all artworks, newest first."""
    return ArtworkListResponse(data=[ArtworkOut.model_validate(a) for a in service.list_artworks(db)])


@router.get("/artist/{artist_id}", response_model=ArtworkListResponse)
def list_artist_artworks(
    artist_id: int,
    db: Session = Depends(get_db),
    service: ArtworkService = Depends(get_artwork_service),
) -> ArtworkListResponse:
    """List one artist's artworks."""
    artworks = service.list_artist_artworks(db, artist_id)
    return ArtworkListResponse(data=[ArtworkOut.model_validate(a) for a in artworks])


@router.get("/{artwork_id}", response_model=ArtworkResponse)
def get_artwork(
    artwork_id: int,
    db: Session = Depends(get_db),
    service: ArtworkService = Depends(get_artwork_service),
) -> ArtworkResponse:
    """Get a single artwork by ID."""
    return ArtworkResponse(data=ArtworkOut.model_validate(service.get_artwork(db, artwork_id)))


@router.post("/", response_model=ArtworkResponse, status_code=201)
@limiter.limit("20/minute")
async def create_artwork(
    request: Request,
    title: str = Form(..., min_length=1, max_length=100),
    size: str = Form(..., min_length=1, max_length=50),
    description: str | None = Form(None),
    media: str | None = Form(None, max_length=100),
    print_number: str | None = Form(None, max_length=50),
    inventory_number: str | None = Form(None, max_length=50),
    status: ArtworkStatus = Form(ArtworkStatus.AVAILABLE),
    price: float | None = Form(None, ge=0),
    location: str | None = Form(None, max_length=255),
    notes: str | None = Form(None),
    category_id: int | None = Form(None),
    tags: str | None = Form(None, description="Comma-separated tags"),
    thumbnail: UploadFile | None = File(None),
    images: list[UploadFile] | None = File(None),
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    service: ArtworkService = Depends(get_artwork_service),
) -> ArtworkResponse:
    """Create an artwork owned by the caller, with an optional thumbnail and up to 10 images."""
    title, size = title.strip(), size.strip()
    if not title or not size:
        raise ValidationError("Title and size are required")
    fields = {
        "title": title,
        "size": size,
        "description": description,
        "media": media,
        "print_number": print_number,
        "inventory_number": inventory_number,
        "status": status.value,
        "sold": status == ArtworkStatus.SOLD,
        "price": price,
        "location": location,
        "notes": notes,
        "category_id": category_id,
        "tags": [t.strip() for t in tags.split(",") if t.strip()] if tags else None,
    }
    artwork = await service.create_artwork(db, user.user_id, fields, thumbnail=thumbnail, images=images)
    return ArtworkResponse(data=ArtworkOut.model_validate(artwork))


@router.put("/{artwork_id}", response_model=ArtworkResponse)
def update_artwork(
    artwork_id: int,
    body: ArtworkUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    service: ArtworkService = Depends(get_artwork_service),
) -> ArtworkResponse:
    """Update an artwork. Only its artist or a super admin may do this."""
    changes = body.model_dump(exclude_unset=True)
    if "status" in changes and changes["status"] is not None:
        changes["status"] = changes["status"].value
    artwork = service.update_artwork(db, artwork_id, user, changes)
    return ArtworkResponse(data=ArtworkOut.model_validate(artwork))


@router.delete("/{artwork_id}", response_model=MessageResponse)
def delete_artwork(
    artwork_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    service: ArtworkService = Depends(get_artwork_service),
) -> MessageResponse:
    """Delete an artwork and its images. Only its artist or a super admin may do this."""
    service.delete_artwork(db, artwork_id, user)
    return MessageResponse(message="Artwork deleted successfully")

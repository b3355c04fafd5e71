"""Authentication API endpoints."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import CurrentUser, get_current_user
from app.exceptions import NotFound
from app.models.user import User
from app.rate_limit import limiter
from app.schemas.auth import (
    ForgotPasswordRequest,
    LoginData,
    LoginRequest,
    LoginResponse,
    ProfileResponse,
    ProfileUpdateRequest,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    UserProfile,
)
from app.schemas.common import MessageResponse
from app.services.auth import AuthService, get_auth_service

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
@limiter.limit("5/minute")
def register(
    request: Request,
    body: RegisterRequest,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
) -> RegisterResponse:
    """Register a new artist account and send the verification email."""
    user = auth_service.register(db, body.username, body.email, body.password, body.bio)
    return RegisterResponse(
        message="Registration successful. Please check your email to verify your account.",
        data=UserProfile.model_validate(user),
    )


@router.post("/login", response_model=LoginResponse)
@limiter.limit("10/minute")
def login(
    request: Request,
    body: LoginRequest,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """Authenticate and receive a session token."""
    result = auth_service.login(db, body.email, body.password)
    return LoginResponse(data=LoginData(token=result.token, user=UserProfile.model_validate(result.user)))


@router.get("/verify-email/{token}", response_model=MessageResponse)
def verify_email(
    token: str,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Confirm ownership of the email address a verification link was sent to."""
    auth_service.verify_email(db, token)
    return MessageResponse(message="Email verified successfully")


@router.post("/forgot-password", response_model=MessageResponse)
@limiter.limit("3/minute")
def forgot_password(
    request: Request,
    body: ForgotPasswordRequest,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Email a 6-digit reset code."""
    auth_service.request_password_reset(db, body.email)
    return MessageResponse(message="Reset code sent to your email")


@router.put("/reset-password", response_model=MessageResponse)
@limiter.limit("5/minute")
def reset_password(
    request: Request,
    body: ResetPasswordRequest,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Set a new password using the emailed reset code."""
    auth_service.reset_password(db, body.email, body.code, body.password)
    return MessageResponse(message="Password reset successfully")


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ProfileResponse:
    """Return the caller's own profile."""
    account = db.get(User, user.user_id)
    if not account:
        raise NotFound("User not found")
    return ProfileResponse(data=UserProfile.model_validate(account))


@router.put("/profile", response_model=ProfileResponse)
def update_profile(
    body: ProfileUpdateRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
) -> ProfileResponse:
    """Update username, bio and contact info."""
    account = db.get(User, user.user_id)
    if not account:
        raise NotFound("User not found")
    account = auth_service.update_profile(db, account, body.model_dump(exclude_unset=True))
    return ProfileResponse(data=UserProfile.model_validate(account))

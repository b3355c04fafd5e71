"""One-time secrets for email verification and password reset."""

import secrets
from datetime import datetime, timedelta

EMAIL_VERIFICATION_TTL = timedelta(hours=24)
RESET_CODE_TTL = timedelta(minutes=10)
RESET_CODE_DIGITS = 6


def issue_email_verification_token() -> tuple[str, datetime]:
    """Return a URL-safe verification token (32 random bytes, hex) and its expiry."""
    return secrets.token_hex(32), datetime.utcnow() + EMAIL_VERIFICATION_TTL


def issue_reset_code() -> tuple[str, datetime]:
    """Return a zero-padded 6-digit reset code and its expiry."""
    code = str(secrets.randbelow(10**RESET_CODE_DIGITS)).zfill(RESET_CODE_DIGITS)
    return code, datetime.utcnow() + RESET_CODE_TTL

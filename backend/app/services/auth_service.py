"""
Identity service: registration, credential checks and bearer tokens.
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional
from email_validator import EmailNotValidError, validate_email
from app.core.errors import InvalidCredentials, InvalidInput, InvalidToken, NotFound
from app.core.security import (
    create_access_token,
    decode_access_token,
    dummy_password_hash,
    get_password_hash,
    verify_password,
)
from app.stores.base import UserStore

logger = logging.getLogger(__name__)

USERNAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 100


@dataclass(frozen=True)
class TokenPayload:
    """Identity carried by a verified access token."""
    user_id: int
    username: Optional[str] = None
    email: Optional[str] = None


def _require(value: Optional[str], field: str, max_length: int = None) -> str:
    if value is None or not str(value).strip():
        raise InvalidInput(f"{field} is required")
    value = str(value).strip()
    if max_length and len(value) > max_length:
        raise InvalidInput(f"{field} must be at most {max_length} characters")
    return value


def normalize_email(email: str) -> str:
    """
    Canonical form used for storing and looking up emails.

    Lower-cased as a whole so every backend compares the same way,
    whatever its collation. Raises EmailNotValidError for a malformed address.
    """
    return validate_email(email.strip(), check_deliverability=False).normalized.lower()


def register(store: UserStore, username: str, email: str, password: str) -> Any:
    """
    Create an account.

    Raises InvalidInput for a missing field and DuplicateIdentity when the
    username or email is already registered.
    """
    username = _require(username, "Username", USERNAME_MAX_LENGTH)
    email = _require(email, "Email")
    try:
        email = normalize_email(email)
    except EmailNotValidError:
        raise InvalidInput("Email is not valid")
    if len(email) > EMAIL_MAX_LENGTH:
        raise InvalidInput(f"Email must be at most {EMAIL_MAX_LENGTH} characters")
    if not password:
        raise InvalidInput("Password is required")

    user = store.add_user(username, email, get_password_hash(password))
    logger.info("Registered user id=%s username=%s", user.id, user.username)
    return user


def authenticate(store: UserStore, email: str, password: str) -> Any:
    """
    Check an email/password pair.

    Unknown email and wrong password raise the same InvalidCredentials.
    """
    if not email or not password:
        raise InvalidInput("Email and password are required")

    try:
        email = normalize_email(email)
    except EmailNotValidError:
        # Cannot match a stored address; still fails as InvalidCredentials below
        email = email.strip().lower()

    user = store.get_user_by_email(email)
    if user is None:
        # Same bcrypt cost as a real check
        verify_password(password, dummy_password_hash())
        logger.info("Failed login attempt")
        raise InvalidCredentials()
    if not verify_password(password, user.hashed_password):
        logger.info("Failed login attempt for user id=%s", user.id)
        raise InvalidCredentials()
    return user


def issue_token(user: Any) -> str:
    """Signed access token for the user, valid for ACCESS_TOKEN_EXPIRE_HOURS."""
    return create_access_token(
        data={"sub": str(user.id), "username": user.username, "email": user.email}
    )


def verify_token(token: Optional[str]) -> TokenPayload:
    """Validate signature and expiry. Raises InvalidToken on any problem."""
    if not token:
        raise InvalidToken("Not authenticated")

    payload = decode_access_token(token)
    if payload is None:
        logger.debug("Rejected bearer token")
        raise InvalidToken()

    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise InvalidToken()

    return TokenPayload(
        user_id=user_id,
        username=payload.get("username"),
        email=payload.get("email"),
    )


def get_user(store: UserStore, user_id: int) -> Any:
    """User behind a verified token. A deleted account makes the token invalid."""
    user = store.get_user(user_id)
    if user is None:
        raise InvalidToken()
    return user


def delete_user(store: UserStore, user_id: int) -> None:
    """Delete the account together with all of its tasks."""
    if not store.delete_user(user_id):
        raise NotFound("User not found")
    logger.info("Deleted user id=%s", user_id)

"""
Authentication routes for register, login, and logout.
"""
from fastapi import APIRouter, Depends, status
from app.api.dependencies import get_store, get_token_payload
from app.schemas.user import AuthResponse, MessageResponse, UserCreate, UserLogin, UserPublic
from app.services import auth_service
from app.services.auth_service import TokenPayload
from app.stores.base import Store

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_response(user, message: str) -> AuthResponse:
    return AuthResponse(
        message=message,
        token=auth_service.issue_token(user),
        user=UserPublic.model_validate(user)
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, store: Store = Depends(get_store)):
    """Register a new user and return a token for it."""
    user = auth_service.register(store, user_data.username, user_data.email, user_data.password)
    return _auth_response(user, "User registered successfully")


@router.post("/login", response_model=AuthResponse)
def login(credentials: UserLogin, store: Store = Depends(get_store)):
    """Login and get JWT token."""
    user = auth_service.authenticate(store, credentials.email, credentials.password)
    return _auth_response(user, "Login successful")


@router.post("/logout", response_model=MessageResponse)
def logout(payload: TokenPayload = Depends(get_token_payload)):
    """Logout. Tokens are stateless, so the client just discards it."""
    return MessageResponse(message="Logged out successfully")

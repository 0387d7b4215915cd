"""
Request dependencies: per-request store and bearer authentication.
"""
from typing import Iterator, Optional
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from app.services import auth_service
from app.services.auth_service import TokenPayload
from app.stores.base import Store

# auto_error=False: a missing header must be a 401 from InvalidToken, not FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


def get_store(request: Request) -> Iterator[Store]:
    """Dependency for getting the store selected at startup."""
    with request.app.state.store_provider.session() as store:
        yield store


def get_token_payload(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> TokenPayload:
    """Verify the Authorization: Bearer token."""
    token = credentials.credentials if credentials else None
    return auth_service.verify_token(token)


def get_current_user(
    payload: TokenPayload = Depends(get_token_payload),
    store: Store = Depends(get_store)
):
    """Resolve the authenticated caller."""
    return auth_service.get_user(store, payload.user_id)

"""
User account routes.
"""
from fastapi import APIRouter, Depends
from app.api.dependencies import get_current_user, get_store
from app.schemas.user import MessageResponse, UserResponse
from app.services import auth_service
from app.stores.base import Store

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
def get_current_user_info(current_user=Depends(get_current_user)):
    """Get current user information."""
    return UserResponse.model_validate(current_user)


@router.delete("/me", response_model=MessageResponse)
def delete_current_user(
    current_user=Depends(get_current_user),
    store: Store = Depends(get_store)
):
    """Delete the current account and all of its tasks."""
    auth_service.delete_user(store, current_user.id)
    return MessageResponse(message="Account deleted successfully")

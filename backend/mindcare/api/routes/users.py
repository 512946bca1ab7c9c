"""
User profile routes.
"""
from fastapi import APIRouter, Depends
from mindcare.api.dependencies import get_account_service
from mindcare.core.utils import format_response
from mindcare.schemas.user import UserResponse, UserUpdate
from mindcare.services.account_service import AccountService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, accounts: AccountService = Depends(get_account_service)):
    """Get user profile by ID."""
    return accounts.get(user_id)


@router.put("/{user_id}")
async def update_user(
    user_id: int,
    user_data: UserUpdate,
    accounts: AccountService = Depends(get_account_service)
):
    """Update the supplied profile fields."""
    accounts.update(user_id, user_data)
    return format_response({"user_id": user_id}, message="Profile updated successfully")

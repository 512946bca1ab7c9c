"""
Authentication routes for registration and login.
"""
from fastapi import APIRouter, Depends, status
from mindcare.api.dependencies import get_account_service
from mindcare.schemas.user import UserCreate, UserLogin, RegisterResponse, LoginResponse
from mindcare.services.account_service import AccountService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, accounts: AccountService = Depends(get_account_service)):
    """Register a new user."""
    user_id = accounts.create(
        username=user_data.username,
        email=user_data.email,
        password=user_data.password,
        emergency_phone=user_data.emergency_phone,
    )
    return RegisterResponse(message="User registered successfully", user_id=user_id)


@router.post("/login", response_model=LoginResponse)
async def login(credentials: UserLogin, accounts: AccountService = Depends(get_account_service)):
    """Check credentials and return the user's id and name."""
    user_id, username = accounts.verify(credentials.email, credentials.password)
    return LoginResponse(message="Login successful", user_id=user_id, username=username)

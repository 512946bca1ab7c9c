"""
Pydantic schemas for User entity.
"""
from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime


class UserCreate(BaseModel):
    """Schema for registration; emptiness is checked by the account service."""
    username: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    emergency_phone: Optional[str] = None


class UserUpdate(BaseModel):
    """Schema for partial profile update. An empty password keeps the old one."""
    username: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    emergency_phone: Optional[str] = None


class UserResponse(BaseModel):
    """Schema for user profile response."""
    id: int
    username: str
    email: str
    emergency_phone: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class UserLogin(BaseModel):
    """Schema for user login."""
    email: str
    password: str


class RegisterResponse(BaseModel):
    message: str
    user_id: int


class LoginResponse(BaseModel):
    message: str
    user_id: int
    username: str

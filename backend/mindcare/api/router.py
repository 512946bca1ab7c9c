"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from mindcare.api.routes import auth, users, diary, mood

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(diary.router)
api_router.include_router(mood.router)

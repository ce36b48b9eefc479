"""Authentication API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from ..core.services import AuthService
from ..core.storage import ImageStorage
from ..database import get_db_session
from ..middleware.auth import get_current_user_id, get_image_storage

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    name: str = Form("", max_length=255),
    email: str = Form("", max_length=255),
    password: str = Form("", max_length=128),
    profile_image: Optional[UploadFile] = File(None),
    session: AsyncSession = Depends(get_db_session),
    storage: ImageStorage = Depends(get_image_storage),
):
    """Register a new user, optionally with a profile image."""
    auth_service = AuthService(session, storage)
    request = RegisterRequest(name=name, email=email, password=password)
    return await auth_service.register_user(request, profile_image)


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, session: AsyncSession = Depends(get_db_session)):
    """Login user and get a JWT access token."""
    auth_service = AuthService(session)
    return await auth_service.authenticate_user(request)


@router.get("/me", response_model=UserResponse)
async def get_current_user(
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Get current user profile."""
    auth_service = AuthService(session)
    return await auth_service.get_current_user(current_user_id)

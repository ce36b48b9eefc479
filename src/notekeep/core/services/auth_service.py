"""Authentication service implementation."""

from typing import Optional

from fastapi import UploadFile
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ...security import (
    create_access_token,
    dummy_verify,
    get_user_id_from_token,
    hash_password,
    verify_password,
)
from ..exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    UnknownUserError,
    ValidationError,
)
from ..logging import get_logger
from ..repositories.user_repository import UserRepository
from ..schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from ..storage import PROFILES_FOLDER, ImageStorage, is_upload
from .interfaces import IAuthService

logger = get_logger("auth")


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class AuthService(IAuthService):
    """Authentication service implementation."""

    def __init__(self, session: AsyncSession, storage: Optional[ImageStorage] = None):
        self.session = session
        self.user_repo = UserRepository(session)
        self.settings = get_settings()
        self.storage = storage or ImageStorage.from_settings(self.settings)

    async def register_user(
        self, request: RegisterRequest, profile_image: Optional[UploadFile] = None
    ) -> UserResponse:
        """Register new user."""
        if _is_blank(request.name) or _is_blank(request.email) or _is_blank(request.password):
            raise ValidationError("All fields are required")

        if await self.user_repo.is_email_taken(request.email):
            raise DuplicateEmailError()

        image_ref = None
        if is_upload(profile_image):
            image_ref = await self.storage.save(profile_image, PROFILES_FOLDER)

        user_data = {
            "name": request.name,
            "email": request.email,
            "password_hash": hash_password(request.password),
            "profile_image": image_ref,
        }

        try:
            user = await self.user_repo.create_user(user_data)
        except IntegrityError:
            # lost a race with a concurrent registration of the same email
            await self.session.rollback()
            await self.storage.delete(image_ref)
            raise DuplicateEmailError()

        logger.info("User registered", extra={"user_id": user.id})
        return UserResponse.model_validate(user)

    async def authenticate_user(self, request: LoginRequest) -> TokenResponse:
        """Login user and return an access token."""
        if _is_blank(request.email) or _is_blank(request.password):
            raise ValidationError("Email and password are required")

        user = await self.user_repo.get_by_email(request.email)
        if user is None:
            dummy_verify(request.password)
            logger.info("Login failed: unknown email")
            raise InvalidCredentialsError()

        if not verify_password(request.password, user.password_hash):
            logger.info("Login failed: password mismatch", extra={"user_id": user.id})
            raise InvalidCredentialsError()

        access_token = create_access_token(data={"sub": str(user.id)})
        logger.info("User logged in", extra={"user_id": user.id})

        return TokenResponse(
            access_token=access_token,
            token_type="bearer",
            expires_in=self.settings.access_token_expire_minutes * 60,
            user=UserResponse.model_validate(user),
        )

    async def authenticate(self, token: Optional[str]) -> UserResponse:
        """Resolve a bearer token to the user it was issued for."""
        if not token:
            raise MissingTokenError()

        user_id = get_user_id_from_token(token)
        if user_id is None:
            raise InvalidTokenError()

        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise UnknownUserError()

        return UserResponse.model_validate(user)

    async def get_current_user(self, user_id: int) -> UserResponse:
        """Get user by ID."""
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise UnknownUserError()

        return UserResponse.model_validate(user)

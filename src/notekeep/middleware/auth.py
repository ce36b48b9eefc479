"""Authentication dependencies."""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import InvalidTokenError, MissingTokenError
from ..core.schemas.auth import UserResponse
from ..core.services import AuthService
from ..core.storage import ImageStorage
from ..database import get_db_session


class JWTBearer(HTTPBearer):
    """JWT Bearer token extraction.

    Answers 401 on its own terms instead of HTTPBearer's 403: no header at all
    is a missing token, any other scheme is an invalid one.
    """

    def __init__(self):
        super().__init__(auto_error=False)

    async def __call__(self, request: Request) -> str:
        authorization = request.headers.get("Authorization")
        if not authorization:
            raise MissingTokenError()

        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)
        if credentials is None or not credentials.credentials:
            raise InvalidTokenError()

        return credentials.credentials


def get_image_storage(request: Request) -> ImageStorage:
    """Process-wide image storage set up in the app lifespan."""
    return request.app.state.image_storage


async def get_current_user(
    token: str = Depends(JWTBearer()),
    session: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    """Resolve the bearer token to the acting user."""
    auth_service = AuthService(session)
    return await auth_service.authenticate(token)


# Dependency for getting current user ID from JWT
async def get_current_user_id(user: UserResponse = Depends(get_current_user)) -> int:
    """Get current authenticated user ID."""
    return user.id

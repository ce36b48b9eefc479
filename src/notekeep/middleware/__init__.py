"""Request dependencies for authentication and shared resources."""

from .auth import JWTBearer, get_current_user, get_current_user_id, get_image_storage

__all__ = ["JWTBearer", "get_current_user", "get_current_user_id", "get_image_storage"]

"""
Database models for Notekeep.

SQLAlchemy ORM models for the two tables of the application:
    - User: account with email/password authentication
    - Note: user-owned note with color, image and pin/archive flags
"""

from .base import BaseModel
from .note import Note
from .user import User

__all__ = [
    "BaseModel",
    "User",
    "Note",
]

"""
Service interfaces for Notekeep.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from fastapi import UploadFile

from ..schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from ..schemas.common import HealthCheckResponse
from ..schemas.notes import NoteCreate, NoteResponse, NoteUpdate


class IAuthService(ABC):
    """Registration, login and token validation."""

    @abstractmethod
    async def register_user(
        self, request: RegisterRequest, profile_image: Optional[UploadFile] = None
    ) -> UserResponse:
        """Register new user."""

    @abstractmethod
    async def authenticate_user(self, request: LoginRequest) -> TokenResponse:
        """Check credentials and issue an access token."""

    @abstractmethod
    async def authenticate(self, token: Optional[str]) -> UserResponse:
        """Resolve a bearer token to its user."""

    @abstractmethod
    async def get_current_user(self, user_id: int) -> UserResponse:
        """Get user by ID."""


class INoteService(ABC):
    """Owner-scoped note operations."""

    @abstractmethod
    async def create_note(
        self, user_id: int, request: NoteCreate, image: Optional[UploadFile] = None
    ) -> NoteResponse:
        """Create new note."""

    @abstractmethod
    async def list_user_notes(self, user_id: int) -> List[NoteResponse]:
        """List all notes of a user."""

    @abstractmethod
    async def get_note(self, note_id: int, user_id: int) -> NoteResponse:
        """Get note by ID."""

    @abstractmethod
    async def update_note(
        self,
        note_id: int,
        user_id: int,
        request: NoteUpdate,
        image: Optional[UploadFile] = None,
    ) -> NoteResponse:
        """Partially update a note."""

    @abstractmethod
    async def toggle_pin(self, note_id: int, user_id: int) -> NoteResponse:
        """Flip the pinned flag."""

    @abstractmethod
    async def toggle_archive(self, note_id: int, user_id: int) -> NoteResponse:
        """Flip the archived flag."""

    @abstractmethod
    async def delete_note(self, note_id: int, user_id: int) -> None:
        """Delete note and its image."""


class IHealthService(ABC):
    """Health checks."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Get overall health."""

    @abstractmethod
    async def check_database_health(self) -> Dict[str, Any]:
        """Check database connectivity."""

"""Note service implementation."""

from typing import Any, Dict, List, Optional

from fastapi import UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ..exceptions import NotFoundError, ValidationError
from ..logging import get_logger
from ..models.note import Note
from ..repositories.note_repository import NoteRepository
from ..schemas.notes import NoteCreate, NoteResponse, NoteUpdate
from ..storage import NOTES_FOLDER, ImageStorage, is_upload
from .interfaces import INoteService

logger = get_logger("notes")


class NoteService(INoteService):
    """Note service implementation.

    Every operation on an existing note goes through ``_get_owned_note``: a
    note owned by someone else is reported exactly like a missing one.
    """

    def __init__(self, session: AsyncSession, storage: Optional[ImageStorage] = None):
        self.session = session
        self.note_repo = NoteRepository(session)
        self.settings = get_settings()
        self.storage = storage or ImageStorage.from_settings(self.settings)

    async def create_note(
        self, user_id: int, request: NoteCreate, image: Optional[UploadFile] = None
    ) -> NoteResponse:
        """Create new note."""
        self._check_title(request.title)

        image_ref = None
        if is_upload(image):
            image_ref = await self.storage.save(image, NOTES_FOLDER)

        note_data = {
            "owner_id": user_id,
            "title": request.title,
            "body": request.body or "",
            "color": request.color or self.settings.default_note_color,
            "image": image_ref,
            "pinned": False,
            "archived": False,
        }

        try:
            note = await self.note_repo.create_note(note_data)
        except SQLAlchemyError:
            await self.session.rollback()
            await self.storage.delete(image_ref)
            raise

        logger.info("Note created", extra={"note_id": note.id, "user_id": user_id})
        return NoteResponse.model_validate(note)

    async def list_user_notes(self, user_id: int) -> List[NoteResponse]:
        """All of the user's notes, archived ones included."""
        notes = await self.note_repo.list_user_notes(user_id)
        return [NoteResponse.model_validate(note) for note in notes]

    async def get_note(self, note_id: int, user_id: int) -> NoteResponse:
        """Get note by ID."""
        note = await self._get_owned_note(note_id, user_id)
        return NoteResponse.model_validate(note)

    async def update_note(
        self,
        note_id: int,
        user_id: int,
        request: NoteUpdate,
        image: Optional[UploadFile] = None,
    ) -> NoteResponse:
        """Change only the fields present in the request.

        ``updated_at`` moves forward even when nothing else is supplied. An
        uploaded image replaces the stored one; ``image=None`` removes it.
        """
        note = await self._get_owned_note(note_id, user_id)
        update_data = self._prepare_update(request.model_dump(exclude_unset=True))

        old_image = note.image
        new_image = None
        if is_upload(image):
            new_image = await self.storage.save(image, NOTES_FOLDER)
            update_data["image"] = new_image

        try:
            updated = await self.note_repo.update_note(note, update_data)
        except SQLAlchemyError:
            await self.session.rollback()
            await self.storage.delete(new_image)
            raise

        # replaced or removed
        if "image" in update_data and old_image and old_image != updated.image:
            await self.storage.delete(old_image)

        logger.info(
            "Note updated",
            extra={"note_id": note_id, "user_id": user_id, "fields": sorted(update_data)},
        )
        return NoteResponse.model_validate(updated)

    async def toggle_pin(self, note_id: int, user_id: int) -> NoteResponse:
        """Flip the pinned flag."""
        note = await self._get_owned_note(note_id, user_id)
        updated = await self.note_repo.update_note(note, {"pinned": not note.pinned})
        return NoteResponse.model_validate(updated)

    async def toggle_archive(self, note_id: int, user_id: int) -> NoteResponse:
        """Flip the archived flag."""
        note = await self._get_owned_note(note_id, user_id)
        updated = await self.note_repo.update_note(note, {"archived": not note.archived})
        return NoteResponse.model_validate(updated)

    async def delete_note(self, note_id: int, user_id: int) -> None:
        """Delete the note row, then try to remove its image file."""
        note = await self._get_owned_note(note_id, user_id)
        image_ref = note.image

        await self.note_repo.delete_note(note)
        logger.info("Note deleted", extra={"note_id": note_id, "user_id": user_id})

        if image_ref:
            await self.storage.delete(image_ref)

    async def _get_owned_note(self, note_id: int, user_id: int) -> Note:
        note = await self.note_repo.get_by_id(note_id)
        if note is None or not note.is_owned_by(user_id):
            raise NotFoundError()
        return note

    def _prepare_update(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Map explicit nulls to stored values; a supplied title must not be blank."""
        if "title" in fields:
            self._check_title(fields["title"])
        if "body" in fields and fields["body"] is None:
            fields["body"] = ""
        if "color" in fields and not fields["color"]:
            fields["color"] = self.settings.default_note_color
        for flag in ("pinned", "archived"):
            if flag in fields and fields[flag] is None:
                raise ValidationError(f"{flag} must be true or false")
        if fields.get("image") is not None:
            raise ValidationError("Image can only be removed here; upload a file to replace it")
        return fields

    @staticmethod
    def _check_title(title: Optional[str]) -> None:
        if title is None or not title.strip():
            raise ValidationError("Title is required")

"""Note repository for database operations."""

from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.base import utcnow
from ..models.note import Note


class NoteRepository:
    """Repository for note database operations.

    Ownership is not checked here; callers load a note and compare
    ``owner_id`` themselves.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_note(self, note_data: dict) -> Note:
        """Create new note."""
        note = Note(**note_data)
        self.session.add(note)
        await self.session.commit()
        await self.session.refresh(note)
        return note

    async def get_by_id(self, note_id: int) -> Optional[Note]:
        """Get note by ID."""
        stmt = select(Note).where(Note.id == note_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_user_notes(self, user_id: int) -> List[Note]:
        """All notes of a user, pinned first, then newest first."""
        stmt = (
            select(Note)
            .where(Note.owner_id == user_id)
            .order_by(desc(Note.pinned), desc(Note.created_at), desc(Note.id))
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update_note(self, note: Note, update_data: dict) -> Note:
        """Apply changed fields and bump updated_at, even when nothing changed."""
        for key, value in update_data.items():
            setattr(note, key, value)
        note.updated_at = utcnow()

        await self.session.commit()
        await self.session.refresh(note)
        return note

    async def delete_note(self, note: Note) -> None:
        """Delete note row."""
        await self.session.delete(note)
        await self.session.commit()

"""Unit tests for the Note model."""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from notekeep.core.models.note import DEFAULT_NOTE_COLOR, Note


class TestNoteModel:
    """Column defaults, constraints and helpers."""

    async def test_defaults_applied_on_insert(self, test_session, test_user):
        note = Note(owner_id=test_user.id, title="Groceries")
        test_session.add(note)
        await test_session.commit()
        await test_session.refresh(note)

        assert note.id is not None
        assert note.body == ""
        assert note.color == DEFAULT_NOTE_COLOR
        assert note.image is None
        assert note.pinned is False
        assert note.archived is False
        assert note.created_at is not None
        assert note.updated_at == note.created_at

    async def test_owner_must_exist(self, test_session):
        test_session.add(Note(owner_id=9999, title="Orphan"))
        with pytest.raises(IntegrityError):
            await test_session.commit()
        await test_session.rollback()

    async def test_empty_title_rejected_by_database(self, test_session, test_user):
        test_session.add(Note(owner_id=test_user.id, title=""))
        with pytest.raises(IntegrityError):
            await test_session.commit()
        await test_session.rollback()

    async def test_is_owned_by(self, test_note, test_user, other_user):
        assert test_note.is_owned_by(test_user.id)
        assert not test_note.is_owned_by(other_user.id)

    async def test_repr_truncates_long_titles(self, test_user):
        note = Note(owner_id=test_user.id, title="x" * 40)
        assert repr(note) == f"<Note(title='{'x' * 30}...', owner_id={test_user.id})>"

    async def test_notes_table_roundtrip(self, test_session, test_note):
        result = await test_session.execute(select(Note).where(Note.id == test_note.id))
        assert result.scalar_one().title == "Test Note"

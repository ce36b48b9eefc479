"""Unit tests for NoteRepository against SQLite."""

from datetime import datetime, timedelta, timezone

from notekeep.core.repositories.note_repository import NoteRepository


def _at(minutes: int) -> datetime:
    return datetime(2025, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=minutes)


class TestNoteRepository:
    """CRUD and ordering."""

    async def test_list_orders_pinned_then_newest(self, test_session, test_user):
        repo = NoteRepository(test_session)
        a = await repo.create_note(
            {"owner_id": test_user.id, "title": "A", "pinned": True, "created_at": _at(1)}
        )
        b = await repo.create_note(
            {"owner_id": test_user.id, "title": "B", "pinned": False, "created_at": _at(2)}
        )
        c = await repo.create_note(
            {"owner_id": test_user.id, "title": "C", "pinned": True, "created_at": _at(3)}
        )

        notes = await repo.list_user_notes(test_user.id)
        assert [n.id for n in notes] == [c.id, a.id, b.id]

    async def test_list_includes_archived_and_excludes_others(
        self, test_session, test_user, other_user
    ):
        repo = NoteRepository(test_session)
        mine = await repo.create_note({"owner_id": test_user.id, "title": "old", "archived": True})
        await repo.create_note({"owner_id": other_user.id, "title": "theirs"})

        notes = await repo.list_user_notes(test_user.id)
        assert [n.id for n in notes] == [mine.id]

    async def test_list_for_user_without_notes(self, test_session, test_user):
        assert await NoteRepository(test_session).list_user_notes(test_user.id) == []

    async def test_update_bumps_updated_at_even_without_changes(self, test_session, test_user):
        repo = NoteRepository(test_session)
        note = await repo.create_note(
            {"owner_id": test_user.id, "title": "T", "created_at": _at(0), "updated_at": _at(0)}
        )

        updated = await repo.update_note(note, {})
        assert updated.title == "T"
        assert updated.updated_at > updated.created_at

    async def test_update_changes_only_given_fields(self, test_session, test_user):
        repo = NoteRepository(test_session)
        note = await repo.create_note({"owner_id": test_user.id, "title": "T", "body": "b"})

        updated = await repo.update_note(note, {"color": "#000000"})
        assert updated.color == "#000000"
        assert updated.title == "T"
        assert updated.body == "b"

    async def test_delete(self, test_session, test_note):
        repo = NoteRepository(test_session)
        await repo.delete_note(test_note)
        assert await repo.get_by_id(test_note.id) is None

    async def test_get_missing(self, test_session):
        assert await NoteRepository(test_session).get_by_id(12345) is None

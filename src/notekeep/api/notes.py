"""Notes API endpoints.

Create and the multipart update take form fields so an image can ride
along; ``PATCH`` takes the same partial update as JSON.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.notes import NoteCreate, NoteResponse, NoteUpdate
from ..core.services import NoteService
from ..core.storage import ImageStorage
from ..database import get_db_session
from ..middleware.auth import get_current_user_id, get_image_storage

router = APIRouter(prefix="/notes", tags=["notes"])

_TEXT_FIELDS = ("title", "body", "color")


@router.post("/", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    title: str = Form("", max_length=255),
    body: str = Form(""),
    color: Optional[str] = Form(None, max_length=20),
    image: Optional[UploadFile] = File(None),
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
    storage: ImageStorage = Depends(get_image_storage),
):
    """Create a new note."""
    note_service = NoteService(session, storage)
    request = NoteCreate(title=title, body=body, color=color)
    return await note_service.create_note(current_user_id, request, image)


@router.get("/", response_model=List[NoteResponse])
async def list_notes(
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
    storage: ImageStorage = Depends(get_image_storage),
):
    """List all notes of the user, pinned first, newest first."""
    note_service = NoteService(session, storage)
    return await note_service.list_user_notes(current_user_id)


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: int,
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
    storage: ImageStorage = Depends(get_image_storage),
):
    """Get a specific note."""
    note_service = NoteService(session, storage)
    return await note_service.get_note(note_id, current_user_id)


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    http_request: Request,
    note_id: int,
    title: Optional[str] = Form(None, max_length=255),
    body: Optional[str] = Form(None),
    color: Optional[str] = Form(None, max_length=20),
    pinned: Optional[bool] = Form(None),
    archived: Optional[bool] = Form(None),
    remove_image: bool = Form(False),
    image: Optional[UploadFile] = File(None),
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
    storage: ImageStorage = Depends(get_image_storage),
):
    """Update a note from form fields.

    Only fields present in the form change. A field sent empty still counts:
    a blank title is rejected, a blank body or color is stored as cleared.
    """
    note_service = NoteService(session, storage)

    # empty form values arrive as None; the raw form still lists their keys
    form = await http_request.form()
    parsed = {"title": title, "body": body, "color": color, "pinned": pinned, "archived": archived}
    sent = {}
    for key, value in parsed.items():
        if key in form:
            sent[key] = "" if value is None and key in _TEXT_FIELDS else value
    if remove_image:
        sent["image"] = None

    request = NoteUpdate(**sent)
    return await note_service.update_note(note_id, current_user_id, request, image)


@router.patch("/{note_id}", response_model=NoteResponse)
async def patch_note(
    note_id: int,
    request: NoteUpdate,
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
    storage: ImageStorage = Depends(get_image_storage),
):
    """Update a note from a JSON document."""
    note_service = NoteService(session, storage)
    return await note_service.update_note(note_id, current_user_id, request)


@router.put("/{note_id}/pin", response_model=NoteResponse)
async def toggle_pin(
    note_id: int,
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
    storage: ImageStorage = Depends(get_image_storage),
):
    """Pin or unpin a note."""
    note_service = NoteService(session, storage)
    return await note_service.toggle_pin(note_id, current_user_id)


@router.put("/{note_id}/archive", response_model=NoteResponse)
async def toggle_archive(
    note_id: int,
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
    storage: ImageStorage = Depends(get_image_storage),
):
    """Archive or unarchive a note."""
    note_service = NoteService(session, storage)
    return await note_service.toggle_archive(note_id, current_user_id)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: int,
    current_user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
    storage: ImageStorage = Depends(get_image_storage),
):
    """Delete a note and its image."""
    note_service = NoteService(session, storage)
    await note_service.delete_note(note_id, current_user_id)

"""
Note schemas.

``NoteUpdate`` is a partial document: only the keys a client actually sent
count, which the service reads back with ``model_dump(exclude_unset=True)``.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class NoteCreate(BaseModel):
    """Note creation request schema."""

    title: str = Field(max_length=255, description="Note title, must not be blank")
    body: str = Field(default="", description="Note body (supports Markdown)")
    color: Optional[str] = Field(
        default=None, max_length=20, description="Color tag; server default when omitted"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Shopping",
                "body": "- milk\n- eggs",
                "color": "#FFDD57",
            }
        }
    )


class NoteUpdate(BaseModel):
    """Partial note update; absent keys leave the stored value alone."""

    title: Optional[str] = Field(default=None, max_length=255, description="Note title")
    body: Optional[str] = Field(default=None, description="Note body")
    color: Optional[str] = Field(default=None, max_length=20, description="Color tag")
    pinned: Optional[bool] = Field(default=None, description="Pinned flag")
    archived: Optional[bool] = Field(default=None, description="Archived flag")
    image: Optional[str] = Field(
        default=None, description="Only null is accepted: removes the stored image"
    )

    model_config = ConfigDict(
        json_schema_extra={"example": {"color": "#000000"}}
    )


class NoteResponse(BaseModel):
    """Note response schema."""

    id: int = Field(description="Note identifier")
    owner_id: int = Field(description="Owning user")
    title: str = Field(description="Note title")
    body: str = Field(description="Note body")
    color: str = Field(description="Color tag")
    image: Optional[str] = Field(default=None, description="Stored image reference")
    pinned: bool = Field(description="Pinned flag")
    archived: bool = Field(description="Archived flag")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 7,
                "owner_id": 1,
                "title": "Shopping",
                "body": "- milk\n- eggs",
                "color": "#ffffff",
                "image": "notes/9f86d081.png",
                "pinned": True,
                "archived": False,
                "created_at": "2025-09-13T10:30:00Z",
                "updated_at": "2025-09-13T11:00:00Z",
            }
        },
    )

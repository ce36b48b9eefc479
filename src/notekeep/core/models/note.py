# Note model for user content
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel

if TYPE_CHECKING:
    from .user import User

DEFAULT_NOTE_COLOR = "#ffffff"


class Note(BaseModel):
    """A user's note: text body, color tag, optional image, pin/archive flags."""

    __tablename__ = "notes"

    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False, default="")
    color: Mapped[str] = mapped_column(String(20), nullable=False, default=DEFAULT_NOTE_COLOR)
    image: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)  # storage ref

    pinned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    owner: Mapped["User"] = relationship("User", back_populates="notes")

    __table_args__ = (
        # matches the list ordering: pinned first, newest first
        Index("idx_notes_owner_pinned_created", "owner_id", "pinned", "created_at"),
        CheckConstraint("length(title) > 0", name="ck_notes_title_not_empty"),
    )

    def __repr__(self) -> str:
        truncated = self.title if len(self.title) <= 30 else (self.title[:30] + "...")
        return f"<Note(title='{truncated}', owner_id={self.owner_id})>"

    def is_owned_by(self, user_id: int) -> bool:
        """Check if this note belongs to the given user."""
        return self.owner_id == user_id

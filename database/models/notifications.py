"""Append-only notification feed."""

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from core.utils.datetime import now
from database.engine import Base

DEFAULT_TITLE = "Untitled"
DEFAULT_STATUS = "No status"
DEFAULT_BODY = "No body"


class Notification(Base):
    """
    A message for everyone (no principal) or for one principal.

    ``principal_id`` and ``principal_kind`` are either both set or both null.
    """

    __tablename__: str = "notifications"
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    principal_id: Mapped[int | None] = mapped_column(
        ForeignKey("principals.id", ondelete="CASCADE"), nullable=True
    )
    principal_kind: Mapped[str | None] = mapped_column(String(20), nullable=True)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[str | None] = mapped_column(String(100), nullable=True)
    body: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=now, nullable=False, index=True
    )

    __table_args__ = (
        CheckConstraint(
            "(principal_id IS NULL AND principal_kind IS NULL) OR "
            "(principal_id IS NOT NULL AND principal_kind IS NOT NULL)",
            name="ck_notifications_target",
        ),
        Index("idx_notifications_target", "principal_id", "principal_kind"),
    )

    def to_feed_item(self) -> dict:
        """Render with the sentinel strings for absent fields."""
        return {
            "id": self.id,
            "title": self.title or DEFAULT_TITLE,
            "status": self.status or DEFAULT_STATUS,
            "body": self.body or DEFAULT_BODY,
            "date": self.created_at,
        }

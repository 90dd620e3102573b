"""Hiring requests between a hirer and a talent."""

from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.utils.datetime import now
from database.engine import Base
from database.models.principals import Hirer, Talent


class HiringStatus(str, PyEnum):
    """
    Statuses a hiring request can be moved to.

    Only PENDING and ACCEPTED are ever stored; REJECTED deletes the row.
    """
    PENDING = "Pending"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


class HiringRequest(Base):
    """A hirer's proposal to engage a talent. One per (hirer, talent) pair."""

    __tablename__: str = "hiring_requests"
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    hirer_id: Mapped[int] = mapped_column(
        ForeignKey("principals.id", ondelete="CASCADE"), nullable=False, index=True
    )
    talent_id: Mapped[int] = mapped_column(
        ForeignKey("principals.id", ondelete="CASCADE"), nullable=False, index=True
    )
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), default=HiringStatus.PENDING.value, nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=now, onupdate=now, nullable=False
    )

    hirer: Mapped[Hirer] = relationship(Hirer, foreign_keys=[hirer_id], lazy="raise")
    talent: Mapped[Talent] = relationship(Talent, foreign_keys=[talent_id], lazy="raise")

    __table_args__ = (
        UniqueConstraint("hirer_id", "talent_id", name="uq_hiring_requests_pair"),
        CheckConstraint(
            "status IN ('Pending', 'Accepted')", name="ck_hiring_requests_status"
        ),
        Index("idx_hiring_requests_hirer_status", "hirer_id", "status"),
    )

"""
Identity store: hirers and talents share one table.

The ``kind`` column is the single-table-inheritance discriminator, so a
principal id is unique across both kinds and resolves to exactly one of
them. Email is unique within a kind only.
"""

from datetime import datetime
from enum import Enum as PyEnum
from typing import Any

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    DateTime,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from core.utils.datetime import now
from database.engine import Base


# ==================== Enums ===================== #
class PrincipalKind(str, PyEnum):
    HIRER = "Hirer"
    TALENT = "Talent"


class Gender(str, PyEnum):
    MALE = "Male"
    FEMALE = "Female"


class HirerRole(str, PyEnum):
    DIRECTOR = "Director"
    ASSISTANT_DIRECTOR = "Assistant Director"
    CASTING_DIRECTOR = "Casting Director"
    EVENT_MANAGER = "Event Manager"
    OTHER = "Other"


class TalentRole(str, PyEnum):
    ACTOR = "Actor"
    MODEL = "Model"
    ACTOR_MODEL = "Actor/Model"
    MAKEUP_ARTIST = "MakeupArtist"
    CINEMATOGRAPHER = "Cinematographer"


class BodyType(str, PyEnum):
    SLIM = "Slim"
    AVERAGE = "Average"
    ATHLETIC = "Athletic"
    PLUS_SIZE = "PlusSize"


class SkinTone(str, PyEnum):
    FAIR = "Fair"
    WHEATISH = "Wheatish"
    DUSKY = "Dusky"


class TalentSkill(str, PyEnum):
    DANCE = "Dance"
    COMEDY = "Comedy"
    ACTION = "Action"


ROLES_BY_KIND: dict[PrincipalKind, type[PyEnum]] = {
    PrincipalKind.HIRER: HirerRole,
    PrincipalKind.TALENT: TalentRole,
}


# ==================== Principal ===================== #
class Principal(Base):
    """Common identity, credential and verification state."""

    __tablename__: str = "principals"
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    kind: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    gender: Mapped[str] = mapped_column(String(10), nullable=False)
    role: Mapped[str] = mapped_column(String(50), nullable=False)

    # Credentials / verification
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    otp: Mapped[str | None] = mapped_column(String(12), nullable=True)
    otp_expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    reset_token_hash: Mapped[str | None] = mapped_column(
        String(64), nullable=True, index=True
    )
    reset_token_expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    device_token: Mapped[str | None] = mapped_column(String(512), nullable=True)

    # Profile fields shared by both kinds
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    profile_pic_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    profile_pic_key: Mapped[str | None] = mapped_column(String(512), nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=now, onupdate=now, nullable=False
    )

    __table_args__ = (
        UniqueConstraint("kind", "email", name="uq_principals_kind_email"),
    )
    # Base-class loads include subclass columns; async sessions cannot lazy load
    __mapper_args__ = {"polymorphic_on": "kind", "with_polymorphic": "*"}

    def public_summary(self) -> dict[str, Any]:
        """Fields returned on login and OTP verification."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "role": self.role,
            "kind": self.kind,
        }

    def __repr__(self):
        return f"<{self.kind} {self.id} {self.email}>"


class Hirer(Principal):
    """Casting-side principal."""

    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)

    __mapper_args__ = {"polymorphic_identity": PrincipalKind.HIRER.value}


class Talent(Principal):
    """Performer-side principal with physical attributes and media."""

    height: Mapped[str | None] = mapped_column(String(20), nullable=True)
    weight: Mapped[str | None] = mapped_column(String(20), nullable=True)
    body_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    skin_tone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    language: Mapped[str | None] = mapped_column(String(255), nullable=True)
    skills: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)

    front_image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    front_image_key: Mapped[str | None] = mapped_column(String(512), nullable=True)
    left_image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    left_image_key: Mapped[str | None] = mapped_column(String(512), nullable=True)
    right_image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    right_image_key: Mapped[str | None] = mapped_column(String(512), nullable=True)
    video_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    video_key: Mapped[str | None] = mapped_column(String(512), nullable=True)

    about_yourself: Mapped[str | None] = mapped_column(Text, nullable=True)
    makeover_needed: Mapped[bool | None] = mapped_column(
        Boolean, default=False, nullable=True
    )
    willing_to_work_as_extra: Mapped[bool | None] = mapped_column(
        Boolean, default=False, nullable=True
    )

    __mapper_args__ = {"polymorphic_identity": PrincipalKind.TALENT.value}


MODEL_BY_KIND: dict[PrincipalKind, type[Principal]] = {
    PrincipalKind.HIRER: Hirer,
    PrincipalKind.TALENT: Talent,
}

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Double, ForeignKey, Index, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from app.auth.models import User


class Address(UUIDMixin, TimestampMixin, Base):
    """A visited destination. One row per (user, exact lat, exact lng)."""
    __tablename__ = "addresses"
    __table_args__ = (
        UniqueConstraint("user_id", "lat", "lng", name="uq_address_user_coords"),
        Index("ix_addresses_user_created", "user_id", "created_at"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    address: Mapped[str] = mapped_column(Text, nullable=False)
    lat: Mapped[float] = mapped_column(Double, nullable=False)
    lng: Mapped[float] = mapped_column(Double, nullable=False)
    # created_at (from TimestampMixin) is refreshed on every repeat visit,
    # so it is really "last touched".

    user: Mapped["User"] = relationship(back_populates="addresses")

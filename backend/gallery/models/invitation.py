"""Invitation ORM: a purchasable design card shown in the public gallery.

Invariants:
    - id is UUID primary key (client never supplies it)
    - title, description, image_url are non-nullable text; price is a non-negative integer
    - created_at is set once at insert and is the listing order key
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, Integer, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from gallery.db.base import Base


class Invitation(Base):
    """Invitation card listed in the gallery."""
    __tablename__ = "invitations"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_invitations_price_non_negative"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

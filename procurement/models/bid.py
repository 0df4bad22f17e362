#procurement/models/bid.py
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    String,
    DateTime,
    Integer,
    Numeric,
    ForeignKey,
    UniqueConstraint,
    CheckConstraint,
    Index,
    Uuid,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from procurement.db.base import Base
from procurement.models.enums import BidState


def _now():
    return datetime.now(timezone.utc)


class Bid(Base):
    """
    A supplier's offer against one project.

    Amount and supplier never change after insert; only `state` moves when
    the project accepts one of its bids.
    """

    __tablename__ = "bids"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )

    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )

    # insertion order within the project, starting at 1
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    supplier: Mapped[str] = mapped_column(String(128), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(20, 2), nullable=False)

    state: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=BidState.OPEN.value,
        server_default=text(f"'{BidState.OPEN.value}'"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, server_default=func.now()
    )

    project = relationship("Project", back_populates="bids")

    __table_args__ = (
        UniqueConstraint("project_id", "position", name="uq_bid_project_position"),
        CheckConstraint("amount > 0", name="ck_bid_amount_positive"),
        Index("ix_bid_supplier", "supplier"),
    )

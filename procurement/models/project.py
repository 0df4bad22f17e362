# /procurement/models/project.py
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import String, DateTime, Index, Uuid, func, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from procurement.db.base import Base
from procurement.models.enums import ProjectState


def _now():
    return datetime.now(timezone.utc)


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    # public key: names are used directly in URL paths
    name: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    buyer: Mapped[str] = mapped_column(String(128), nullable=False, index=True)

    state: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=ProjectState.OPEN.value,
        server_default=text(f"'{ProjectState.OPEN.value}'"),
    )

    description: Mapped[Optional[str]] = mapped_column(String(2000), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, server_default=func.now()
    )

    bids: Mapped[List["Bid"]] = relationship(
        "Bid",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="Bid.position",
    )

    __table_args__ = (Index("ix_projects_buyer_state", "buyer", "state"),)

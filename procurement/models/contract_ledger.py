# procurement/models/contract_ledger.py
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import (
    String,
    DateTime,
    Integer,
    ForeignKey,
    Index,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from procurement.db.base import Base, JSONType


def _now():
    return datetime.now(timezone.utc)


class ContractLedgerEntry(Base):
    """
    Append-only hash-chained ledger entries, one chain per project.

    entry_hash = SHA256(prev_hash + canonical(payload_json))
    """

    __tablename__ = "contract_ledger_entries"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )

    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )

    seq: Mapped[int] = mapped_column(Integer, nullable=False)  # monotonic per project
    entry_type: Mapped[str] = mapped_column(String(64), nullable=False)

    prev_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    entry_hash: Mapped[str] = mapped_column(String(128), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, server_default=func.now()
    )
    payload_json: Mapped[Dict[str, Any]] = mapped_column(JSONType, nullable=False)

    __table_args__ = (
        UniqueConstraint("project_id", "seq", name="uq_contract_ledger_seq"),
        Index("ix_contract_ledger_project", "project_id"),
    )

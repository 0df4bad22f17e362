#procurement/services/ledger_service.py
from __future__ import annotations

import logging
import uuid
from typing import Dict, Any, Optional
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from procurement.core.hashing import GENESIS_HASH, hash_chain
from procurement.models.contract_ledger import ContractLedgerEntry

logger = logging.getLogger(__name__)


def _now():
    return datetime.now(timezone.utc)


class LedgerEntryType:
    PROJECT_CREATED = "PROJECT_CREATED"
    BID_PLACED = "BID_PLACED"
    BID_ACCEPTED = "BID_ACCEPTED"
    PROJECT_EVENT = "PROJECT_EVENT"


class LedgerService:
    """
    Append-only contract ledger.
    Stands in for the on-chain record of every project write.
    """

    GENESIS_HASH = GENESIS_HASH

    # ─────────────────────────────────────────────
    # INTERNAL HELPERS
    # ─────────────────────────────────────────────

    def _get_last_entry(
        self,
        db: Session,
        *,
        project_id: uuid.UUID,
    ) -> Optional[ContractLedgerEntry]:
        return db.execute(
            select(ContractLedgerEntry)
            .where(ContractLedgerEntry.project_id == project_id)
            .order_by(ContractLedgerEntry.seq.desc())
            .limit(1)
        ).scalar_one_or_none()

    # ─────────────────────────────────────────────
    # PUBLIC API
    # ─────────────────────────────────────────────

    def append_entry(
        self,
        db: Session,
        *,
        project_id: uuid.UUID,
        entry_type: str,
        payload: Dict[str, Any],
    ) -> ContractLedgerEntry:
        """
        Stage a single immutable ledger entry.

        The entry is flushed, not committed: it lands in the same
        transaction as the write it records, and the caller commits both.
        `payload` must already be JSON-safe.
        """
        last = self._get_last_entry(db, project_id=project_id)

        prev_hash = last.entry_hash if last else self.GENESIS_HASH
        seq = 1 if not last else last.seq + 1

        entry_payload = {
            "project_id": str(project_id),
            "seq": seq,
            "entry_type": entry_type,
            "payload": payload,
            "created_at": _now().isoformat(),
        }

        row = ContractLedgerEntry(
            project_id=project_id,
            seq=seq,
            entry_type=entry_type,
            prev_hash=prev_hash,
            entry_hash=hash_chain(prev_hash, entry_payload),
            payload_json=entry_payload,
        )

        db.add(row)
        db.flush()

        logger.debug("[ledger] staged %s seq=%d project=%s", entry_type, seq, project_id)
        return row

    # ─────────────────────────────────────────────
    # READ-ONLY HELPERS (AUDIT)
    # ─────────────────────────────────────────────

    def list_entries(
        self,
        db: Session,
        *,
        project_id: uuid.UUID,
    ) -> list[ContractLedgerEntry]:
        return (
            db.execute(
                select(ContractLedgerEntry)
                .where(ContractLedgerEntry.project_id == project_id)
                .order_by(ContractLedgerEntry.seq.asc())
            )
            .scalars()
            .all()
        )

    def verify_chain(
        self,
        db: Session,
        *,
        project_id: uuid.UUID,
    ) -> bool:
        """
        Recomputes the hash chain from genesis.
        False on the first broken link or sequence gap.
        """
        entries = self.list_entries(db, project_id=project_id)

        prev_hash = self.GENESIS_HASH

        for expected_seq, e in enumerate(entries, start=1):
            if e.seq != expected_seq or e.prev_hash != prev_hash:
                logger.warning("[ledger] broken link at seq=%d project=%s", e.seq, project_id)
                return False
            if e.entry_hash != hash_chain(prev_hash, e.payload_json):
                logger.warning("[ledger] hash mismatch at seq=%d project=%s", e.seq, project_id)
                return False
            prev_hash = e.entry_hash

        return True

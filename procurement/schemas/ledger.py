from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel


class LedgerEntryResponse(BaseModel):
    seq: int
    entry_type: str
    prev_hash: str
    entry_hash: str
    created_at: str
    payload: Dict[str, Any]


class LedgerData(BaseModel):
    projectName: str
    valid: bool
    entries: List[LedgerEntryResponse]

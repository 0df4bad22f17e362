# procurement/api/v1/ledger.py

from __future__ import annotations

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from procurement.api.v1.common import ERROR_RESPONSES, http_error, ok
from procurement.db.session import get_db
from procurement.schemas.envelope import Envelope
from procurement.schemas.ledger import LedgerData
from procurement.services.errors import ProcurementError
from procurement.services.ledger_service import LedgerService
from procurement.services.projects_service import ProjectsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects/{name}/ledger", tags=["ledger"], responses=ERROR_RESPONSES)


@router.get("", response_model=Envelope[LedgerData])
async def list_ledger_entries(
    name: str,
    db: Session = Depends(get_db),
):
    """
    Read-only ledger view with chain verification.
    """
    try:
        project = ProjectsService().require(db, name=name)
    except ProcurementError as e:
        raise http_error(e)

    svc = LedgerService()
    entries = svc.list_entries(db, project_id=project.id)
    valid = svc.verify_chain(db, project_id=project.id)

    logger.info("[ledger] project=%s entries=%d valid=%s", name, len(entries), valid)

    return ok(
        {
            "projectName": project.name,
            "valid": valid,
            "entries": [
                {
                    "seq": e.seq,
                    "entry_type": e.entry_type,
                    "prev_hash": e.prev_hash,
                    "entry_hash": e.entry_hash,
                    "created_at": e.created_at.isoformat(),
                    "payload": e.payload_json,
                }
                for e in entries
            ],
        }
    )

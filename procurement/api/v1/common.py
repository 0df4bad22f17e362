# procurement/api/v1/common.py
from __future__ import annotations

from typing import Any, Dict

from fastapi import HTTPException

from procurement.models.bid import Bid
from procurement.models.project import Project
from procurement.schemas.envelope import ErrorEnvelope
from procurement.services.errors import ProcurementError

# Documented failure shapes; rendered by procurement.core.errors.
ERROR_RESPONSES = {
    400: {"model": ErrorEnvelope, "description": "Invalid request"},
    404: {"model": ErrorEnvelope, "description": "Project or bid not found"},
    409: {"model": ErrorEnvelope, "description": "Conflicts with the project state"},
    500: {"model": ErrorEnvelope, "description": "Internal server error"},
}


def _iso(dt):
    return dt.isoformat() if dt else None


def ok(data: Dict[str, Any]) -> Dict[str, Any]:
    return {"success": True, "data": data}


def http_error(exc: ProcurementError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=str(exc))


def project_resp(p: Project) -> dict:
    return {
        "projectId": str(p.id),
        "name": p.name,
        "buyer": p.buyer,
        "state": p.state,
        "description": p.description,
        "createdAtIso": _iso(p.created_at),
        "updatedAtIso": _iso(p.updated_at),
    }


def bid_resp(b: Bid, project_name: str) -> dict:
    return {
        "bidId": str(b.id),
        "projectName": project_name,
        "supplier": b.supplier,
        "amount": float(b.amount),
        "state": b.state,
        "createdAtIso": _iso(b.created_at),
    }

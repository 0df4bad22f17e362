import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from procurement.core.config import get_settings
from procurement.db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health(request: Request, db: Session = Depends(get_db)):
    """Liveness plus a database round-trip; 503 when the database is unreachable."""
    settings = get_settings()
    rid = getattr(request.state, "request_id", None)
    body = {
        "status": "ok",
        "request_id": rid,
        "environment": settings.environment,
        "database": "ok",
    }
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("[health] database check failed: %s", exc, extra={"request_id": rid})
        body.update(status="degraded", database="unavailable")
        return JSONResponse(status_code=503, content=body)
    return body

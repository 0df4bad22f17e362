# procurement/api/v1/projects.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from procurement.api.v1.common import ERROR_RESPONSES, http_error, ok, project_resp
from procurement.core.config import get_settings
from procurement.db.session import get_db
from procurement.models.enums import ProjectEvent, ProjectState, parse_enum
from procurement.schemas.envelope import Envelope
from procurement.schemas.projects import (
    ProjectCreateRequest,
    ProjectData,
    ProjectEventRequest,
    ProjectListData,
)
from procurement.services.errors import ProcurementError
from procurement.services.projects_service import ProjectsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", responses=ERROR_RESPONSES)

LIST_FILTERS = ("buyer", "state", "supplier")


def _normalize_state(raw: Optional[str]) -> ProjectState:
    """
    Accept a state name in any case or its numeric ordinal (1 == OPEN).
    Raises HTTPException(400) on anything else.
    """
    if not raw:
        raise HTTPException(status_code=400, detail="Missing state parameter.")
    try:
        return parse_enum(ProjectState, raw)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid state value: {raw}")


@router.post("", response_model=Envelope[ProjectData])
async def create_project(
    body: ProjectCreateRequest,
    db: Session = Depends(get_db),
):
    svc = ProjectsService()
    try:
        p = svc.create(db, name=body.name, buyer=body.buyer, description=body.description)
    except ProcurementError as e:
        raise http_error(e)

    return ok({"project": project_resp(p)})


@router.get("", response_model=Envelope[ProjectListData])
async def list_projects(
    filter_: Optional[str] = Query(default=None, alias="filter"),
    buyer: Optional[str] = Query(default=None),
    state: Optional[str] = Query(default=None),
    supplier: Optional[str] = Query(default=None),
    limit: Optional[int] = Query(default=None, ge=1),
    db: Session = Depends(get_db),
):
    settings = get_settings()
    limit = min(limit or settings.default_page_limit, settings.max_page_limit)

    criteria = {}
    if filter_ is not None:
        kind = filter_.strip().lower()
        if kind not in LIST_FILTERS:
            raise HTTPException(
                status_code=400,
                detail=f"Unknown filter: {filter_}. Expected one of {', '.join(LIST_FILTERS)}.",
            )
        if kind == "buyer":
            if not buyer:
                raise HTTPException(status_code=400, detail="Missing buyer parameter.")
            criteria["buyer"] = buyer
        elif kind == "state":
            criteria["state"] = _normalize_state(state)
        elif kind == "supplier":
            if not supplier:
                raise HTTPException(status_code=400, detail="Missing supplier parameter.")
            criteria["supplier"] = supplier

    rows = ProjectsService().list(db, limit=limit, **criteria)
    logger.debug("[projects] list filter=%s -> %d rows", filter_, len(rows))
    return ok({"projects": [project_resp(p) for p in rows]})


@router.get("/{name}", response_model=Envelope[ProjectData])
@router.get("/{name}/", response_model=Envelope[ProjectData], include_in_schema=False)
async def get_project(
    name: str,
    db: Session = Depends(get_db),
):
    try:
        p = ProjectsService().require(db, name=name)
    except ProcurementError as e:
        raise http_error(e)
    return ok({"project": project_resp(p)})


@router.post("/{name}/events", response_model=Envelope[ProjectData])
async def handle_project_event(
    name: str,
    body: ProjectEventRequest,
    db: Session = Depends(get_db),
):
    # ACCEPT carries a bid choice, so it only goes through the bid-accept route
    if body.event == ProjectEvent.ACCEPT:
        raise HTTPException(
            status_code=400,
            detail="ACCEPT must be sent through /projects/{name}/bids/{bidId}/accept.",
        )

    try:
        p = ProjectsService().handle_event(db, name=name, event=body.event)
    except ProcurementError as e:
        raise http_error(e)
    return ok({"project": project_resp(p)})

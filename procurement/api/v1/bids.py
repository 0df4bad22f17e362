# procurement/api/v1/bids.py
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from procurement.api.v1.common import ERROR_RESPONSES, bid_resp, http_error, ok, project_resp
from procurement.db.session import get_db
from procurement.schemas.bids import BidAcceptData, BidCreateRequest, BidData, BidListData
from procurement.schemas.envelope import Envelope
from procurement.services.bids_service import BidService
from procurement.services.errors import ProcurementError

router = APIRouter(prefix="/projects/{name}/bids", responses=ERROR_RESPONSES)


@router.post("", response_model=Envelope[BidData])
async def place_bid(
    name: str,
    body: BidCreateRequest,
    db: Session = Depends(get_db),
):
    try:
        bid = BidService().place(
            db, project_name=name, supplier=body.supplier, amount=body.amount
        )
    except ProcurementError as e:
        raise http_error(e)
    return ok({"bid": bid_resp(bid, name)})


@router.get("", response_model=Envelope[BidListData])
async def list_bids(
    name: str,
    db: Session = Depends(get_db),
):
    try:
        rows = BidService().list_for_project(db, project_name=name)
    except ProcurementError as e:
        raise http_error(e)
    return ok({"bids": [bid_resp(b, name) for b in rows]})


@router.post("/{bidId}/accept", response_model=Envelope[BidAcceptData])
async def accept_bid(
    name: str,
    bidId: str,
    db: Session = Depends(get_db),
):
    try:
        bid_uuid = uuid.UUID(bidId)
    except ValueError:
        raise HTTPException(status_code=400, detail="bidId must be UUID.")

    try:
        project, bid = BidService().accept(db, project_name=name, bid_id=bid_uuid)
    except ProcurementError as e:
        raise http_error(e)
    return ok({"project": project_resp(project), "bid": bid_resp(bid, name)})

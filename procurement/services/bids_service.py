#procurement/services/bids_service.py
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from procurement.models.bid import Bid
from procurement.models.enums import BidState, ProjectEvent, ProjectState
from procurement.models.project import Project
from procurement.services.errors import BidNotFound, ProjectNotOpen
from procurement.services.ledger_service import LedgerEntryType, LedgerService
from procurement.services.projects_service import ProjectsService

logger = logging.getLogger(__name__)


CENTS = Decimal("0.01")


def _now():
    return datetime.now(timezone.utc)


class BidService:
    def __init__(
        self,
        projects: Optional[ProjectsService] = None,
        ledger: Optional[LedgerService] = None,
    ):
        self.ledger = ledger or LedgerService()
        self.projects = projects or ProjectsService(ledger=self.ledger)

    def _ensure_open(self, project: Project) -> None:
        if project.state != ProjectState.OPEN.value:
            raise ProjectNotOpen(project.name, project.state)

    def _next_position(self, db: Session, project_id: uuid.UUID) -> int:
        last = db.execute(
            select(func.max(Bid.position)).where(Bid.project_id == project_id)
        ).scalar_one()
        return (last or 0) + 1

    # -----------------------------------------------------------------
    # writes
    # -----------------------------------------------------------------

    def place(
        self,
        db: Session,
        *,
        project_name: str,
        supplier: str,
        amount: Decimal,
    ) -> Bid:
        project = self.projects.require(db, name=project_name, for_update=True)
        self._ensure_open(project)

        bid = Bid(
            project_id=project.id,
            position=self._next_position(db, project.id),
            supplier=supplier,
            amount=Decimal(amount).quantize(CENTS),
            state=BidState.OPEN.value,
            created_at=_now(),
        )
        with self.projects.write_guard(db, name=project_name):
            db.add(bid)
            db.flush()

            self.ledger.append_entry(
                db,
                project_id=project.id,
                entry_type=LedgerEntryType.BID_PLACED,
                payload={
                    "bid_id": str(bid.id),
                    "supplier": supplier,
                    # string keeps the exact decimal in the hashed payload
                    "amount": str(bid.amount),
                },
            )
        db.refresh(bid)

        logger.info("[bids] placed project=%s supplier=%s position=%d", project_name, supplier, bid.position)
        return bid

    def accept(
        self,
        db: Session,
        *,
        project_name: str,
        bid_id: uuid.UUID,
    ) -> Tuple[Project, Bid]:
        """
        Accept one bid: it becomes ACCEPTED, every other bid on the project
        REJECTED, and the project handles ACCEPT (OPEN -> PRODUCTION).
        """
        project = self.projects.require(db, name=project_name, for_update=True)

        bid = db.execute(
            select(Bid).where(Bid.project_id == project.id, Bid.id == bid_id)
        ).scalar_one_or_none()
        if bid is None:
            raise BidNotFound(bid_id)

        self._ensure_open(project)

        with self.projects.write_guard(db, name=project_name):
            for other in self.list_for(db, project):
                other.state = (
                    BidState.ACCEPTED.value if other.id == bid.id else BidState.REJECTED.value
                )
                db.add(other)
            db.flush()

            self.ledger.append_entry(
                db,
                project_id=project.id,
                entry_type=LedgerEntryType.BID_ACCEPTED,
                payload={
                    "bid_id": str(bid.id),
                    "supplier": bid.supplier,
                    "amount": str(bid.amount),
                },
            )
            self.projects.transition(
                db, project, ProjectEvent.ACCEPT, details={"bid_id": str(bid.id)}
            )
        db.refresh(project)
        db.refresh(bid)

        logger.info("[bids] accepted project=%s bid=%s supplier=%s", project_name, bid.id, bid.supplier)
        return project, bid

    # -----------------------------------------------------------------
    # reads
    # -----------------------------------------------------------------

    def list_for(self, db: Session, project: Project) -> List[Bid]:
        return list(
            db.execute(
                select(Bid)
                .where(Bid.project_id == project.id)
                .order_by(Bid.position.asc())
            )
            .scalars()
            .all()
        )

    def list_for_project(self, db: Session, *, project_name: str) -> List[Bid]:
        project = self.projects.require(db, name=project_name)
        return self.list_for(db, project)

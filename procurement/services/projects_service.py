# procurement/services/projects_service.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Optional, List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from procurement.models.bid import Bid
from procurement.models.enums import ProjectEvent, ProjectState
from procurement.models.project import Project
from procurement.services.errors import ConflictingWrite, DuplicateProject, ProjectNotFound
from procurement.services.ledger_service import LedgerEntryType, LedgerService
from procurement.services.lifecycle import next_state

logger = logging.getLogger(__name__)


def _now():
    return datetime.now(timezone.utc)


class ProjectsService:
    def __init__(self, ledger: Optional[LedgerService] = None):
        self.ledger = ledger or LedgerService()

    def create(
        self,
        db: Session,
        *,
        name: str,
        buyer: str,
        description: Optional[str] = None,
    ) -> Project:
        if self.get_by_name(db, name=name) is not None:
            raise DuplicateProject(name)

        now = _now()
        p = Project(
            name=name,
            buyer=buyer,
            state=ProjectState.OPEN.value,
            description=description,
            created_at=now,
            updated_at=now,
        )
        db.add(p)
        try:
            db.flush()
            self.ledger.append_entry(
                db,
                project_id=p.id,
                entry_type=LedgerEntryType.PROJECT_CREATED,
                payload={"name": name, "buyer": buyer, "state": p.state},
            )
            db.commit()
        except IntegrityError:
            # lost a race with a concurrent create of the same name
            db.rollback()
            raise DuplicateProject(name)
        db.refresh(p)

        logger.info("[projects] created name=%s buyer=%s", name, buyer)
        return p

    def get_by_name(
        self, db: Session, *, name: str, for_update: bool = False
    ) -> Optional[Project]:
        stmt = select(Project).where(Project.name == name)
        if for_update:
            # serializes writers on one project (no-op on SQLite)
            stmt = stmt.with_for_update()
        return db.execute(stmt).scalar_one_or_none()

    def require(self, db: Session, *, name: str, for_update: bool = False) -> Project:
        p = self.get_by_name(db, name=name, for_update=for_update)
        if p is None:
            raise ProjectNotFound(name)
        return p

    def list(
        self,
        db: Session,
        *,
        buyer: Optional[str] = None,
        state: Optional[ProjectState] = None,
        supplier: Optional[str] = None,
        limit: int = 200,
    ) -> List[Project]:
        stmt = select(Project)

        if buyer is not None:
            stmt = stmt.where(Project.buyer == buyer)
        if state is not None:
            stmt = stmt.where(Project.state == ProjectState(state).value)
        if supplier is not None:
            stmt = stmt.where(
                Project.id.in_(select(Bid.project_id).where(Bid.supplier == supplier))
            )

        stmt = stmt.order_by(Project.created_at.asc(), Project.name.asc()).limit(limit)
        return list(db.execute(stmt).scalars().all())

    def transition(
        self,
        db: Session,
        project: Project,
        event: ProjectEvent,
        *,
        details: Optional[dict] = None,
    ) -> Project:
        """
        Move `project` along its lifecycle and stage the ledger entry.
        Does not commit.
        """
        before = project.state
        after = next_state(ProjectState(before), event)

        project.state = after.value
        project.updated_at = _now()
        db.add(project)
        db.flush()

        payload = {"event": ProjectEvent(event).value, "from": before, "to": after.value}
        if details:
            payload.update(details)
        self.ledger.append_entry(
            db,
            project_id=project.id,
            entry_type=LedgerEntryType.PROJECT_EVENT,
            payload=payload,
        )
        return project

    @contextmanager
    def write_guard(self, db: Session, *, name: str) -> Iterator[None]:
        """
        Run a write on project `name` and commit it. A unique-constraint
        violation (bid position, ledger seq) means another writer got there
        first and surfaces as ConflictingWrite.
        """
        try:
            yield
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning("[projects] conflicting write on %s", name)
            raise ConflictingWrite(name) from None

    def handle_event(self, db: Session, *, name: str, event: ProjectEvent) -> Project:
        p = self.require(db, name=name, for_update=True)
        with self.write_guard(db, name=name):
            self.transition(db, p, event)
        db.refresh(p)

        logger.info("[projects] %s event=%s state=%s", name, ProjectEvent(event).value, p.state)
        return p

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from procurement.services.bids_service import BidService
from procurement.services.projects_service import ProjectsService

DEMO_PROJECTS = {
    "Seed Project Steel": ("Buyer1", [("Supplier1", "1200.00"), ("Supplier2", "1150.50")]),
    "Seed Project Cement": ("Buyer1", [("Supplier2", "800.00")]),
    "Seed Project Timber": ("Buyer2", []),
}


def seed(db: Optional[Session] = None) -> int:
    """Create the demo projects and bids that are missing. Returns how many projects were created."""
    owns_session = db is None
    if owns_session:
        from procurement.db.session import SessionLocal

        db = SessionLocal()

    projects = ProjectsService()
    bids = BidService(projects=projects)
    created = 0
    try:
        for name, (buyer, offers) in DEMO_PROJECTS.items():
            if projects.get_by_name(db, name=name) is not None:
                continue
            projects.create(db, name=name, buyer=buyer, description="demo data")
            for supplier, amount in offers:
                bids.place(db, project_name=name, supplier=supplier, amount=Decimal(amount))
            created += 1
    finally:
        if owns_session:
            db.close()
    return created


if __name__ == "__main__":
    seed()

#procurement/services/errors.py
from __future__ import annotations


class ProcurementError(ValueError):
    """Base for domain failures. `status_code` is the HTTP status routers map it to."""

    status_code = 400


class ProjectNotFound(ProcurementError):
    status_code = 404

    def __init__(self, name: str):
        super().__init__(f"Project not found: {name}")
        self.name = name


class BidNotFound(ProcurementError):
    status_code = 404

    def __init__(self, bid_id):
        super().__init__(f"Bid not found: {bid_id}")
        self.bid_id = bid_id


class DuplicateProject(ProcurementError):
    status_code = 409

    def __init__(self, name: str):
        super().__init__(f"Project already exists: {name}")
        self.name = name


class ProjectNotOpen(ProcurementError):
    status_code = 409

    def __init__(self, name: str, state: str):
        super().__init__(f"Project is not open for bids: {name} is {state}")
        self.name = name
        self.state = state


class InvalidTransition(ProcurementError):
    status_code = 409

    def __init__(self, state: str, event: str, allowed=()):
        expected = ", ".join(sorted(allowed)) or "none, state is final"
        super().__init__(
            f"Invalid transition: {event} is not allowed in state {state} (allowed: {expected})"
        )
        self.state = state
        self.event = event
        self.allowed = tuple(sorted(allowed))


class ConflictingWrite(ProcurementError):
    status_code = 409

    def __init__(self, name: str):
        super().__init__(f"Conflicting write on project {name}; retry the request")
        self.name = name

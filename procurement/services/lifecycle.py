# procurement/services/lifecycle.py
from __future__ import annotations

from typing import Dict, Set, Tuple

from procurement.models.enums import ProjectEvent, ProjectState
from procurement.services.errors import InvalidTransition


TRANSITIONS: Dict[Tuple[ProjectState, ProjectEvent], ProjectState] = {
    (ProjectState.OPEN, ProjectEvent.ACCEPT): ProjectState.PRODUCTION,
    (ProjectState.PRODUCTION, ProjectEvent.DELIVER): ProjectState.INTRANSIT,
    (ProjectState.INTRANSIT, ProjectEvent.RECEIVE): ProjectState.RECEIVED,
}


def next_state(state: ProjectState, event: ProjectEvent) -> ProjectState:
    """
    Project lifecycle: OPEN -ACCEPT-> PRODUCTION -DELIVER-> INTRANSIT -RECEIVE-> RECEIVED.
    """
    state = ProjectState(state)
    event = ProjectEvent(event)
    try:
        return TRANSITIONS[(state, event)]
    except KeyError:
        allowed = [ev.value for ev in allowed_events(state)]
        raise InvalidTransition(state.value, event.value, allowed) from None


def allowed_events(state: ProjectState) -> Set[ProjectEvent]:
    state = ProjectState(state)
    return {ev for (st, ev) in TRANSITIONS if st == state}
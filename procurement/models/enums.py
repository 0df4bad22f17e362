#procurement/models/enums.py
from __future__ import annotations
from enum import Enum
from typing import Type, TypeVar

E = TypeVar("E", bound=Enum)


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    BUYER = "BUYER"
    SUPPLIER = "SUPPLIER"


class ProjectState(str, Enum):
    # lifecycle order matters: ordinals are 1-based
    OPEN = "OPEN"
    PRODUCTION = "PRODUCTION"
    INTRANSIT = "INTRANSIT"
    RECEIVED = "RECEIVED"


class ProjectEvent(str, Enum):
    ACCEPT = "ACCEPT"
    DELIVER = "DELIVER"
    RECEIVE = "RECEIVE"


class BidState(str, Enum):
    OPEN = "OPEN"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


def parse_enum(enum_cls: Type[E], raw) -> E:
    """
    Accept a member name/value in any case, or its 1-based ordinal
    ("1" == first member). Raises ValueError on anything else.
    """
    if isinstance(raw, enum_cls):
        return raw
    text = str(raw).strip() if raw is not None else ""
    if not text:
        raise ValueError(f"Missing {enum_cls.__name__} value.")
    try:
        return enum_cls(text.upper())
    except ValueError:
        pass
    if text.isdigit():
        members = list(enum_cls)
        idx = int(text)
        if 1 <= idx <= len(members):
            return members[idx - 1]
    raise ValueError(f"Invalid {enum_cls.__name__} value: {text}")

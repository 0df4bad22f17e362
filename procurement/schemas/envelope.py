from typing import Generic, Literal, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """
    Success wrapper shared by every resource endpoint.
    Failures never pass through here; see procurement.core.errors.
    """

    success: Literal[True] = True
    data: T


class ErrorEnvelope(BaseModel):
    success: Literal[False] = False
    error: str

from __future__ import annotations

from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field, field_validator

from procurement.models.enums import BidState
from procurement.schemas.projects import ProjectResponse


class BidCreateRequest(BaseModel):
    """
    Supplier-side bid payload.
    Amount is money: positive, at most two decimal places, and at most 15
    significant digits so a JSON number round-trips through float exactly.
    """

    supplier: str = Field(..., min_length=1, max_length=128)
    amount: Decimal = Field(..., gt=0, max_digits=15, decimal_places=2)

    @field_validator("supplier")
    @classmethod
    def _supplier_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("supplier must not be blank")
        return v


class BidResponse(BaseModel):
    bidId: str
    projectName: str
    supplier: str
    amount: float
    state: BidState
    createdAtIso: str


class BidData(BaseModel):
    bid: BidResponse


class BidListData(BaseModel):
    bids: List[BidResponse]


class BidAcceptData(BaseModel):
    project: ProjectResponse
    bid: BidResponse

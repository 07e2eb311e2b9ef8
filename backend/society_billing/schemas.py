# backend/society_billing/schemas.py
from __future__ import annotations

from typing import Any, Optional, List

from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel

from .domain.billing import BillingResult


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -------------------- Billing --------------------

class BillingIn(_CamelModel):
    """
    Loosely typed on purpose: required/negative/integral checks live in
    parse_billing_input so every caller gets the same field-named error.
    """
    monthly_rent: Optional[float] = None
    maintenance_charges: Optional[float] = None
    parking_slots: Optional[float] = None

    water_usage: Optional[float] = None
    water_rate: Optional[float] = None
    electricity_usage: Optional[float] = None
    electricity_rate: Optional[float] = None
    additional_charges: Optional[float] = None
    discount: Optional[float] = None

    month: Any = None
    last_month_status: Any = None
    previous_balance: Optional[float] = None

    def to_billing_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class BillOut(_CamelModel):
    rent: int
    maintenance: int
    parking: int
    water: int
    electricity: int
    additional_charges: int
    late_fee: int
    discount: int
    subtotal: int
    total: int
    breakdown: str
    source: str

    @classmethod
    def from_result(cls, r: BillingResult) -> "BillOut":
        return cls(
            rent=r.rent,
            maintenance=r.maintenance,
            parking=r.parking,
            water=r.water,
            electricity=r.electricity,
            additional_charges=r.additional_charges,
            late_fee=r.late_fee,
            discount=r.discount,
            subtotal=r.subtotal,
            total=r.total,
            breakdown=r.breakdown,
            source=r.source,
        )


class BillBatchIn(BaseModel):
    items: List[BillingIn] = Field(default_factory=list)


class BillBatchErrorRow(BaseModel):
    index: int
    field: str
    error: str


class BillBatchOut(BaseModel):
    attempted: int
    computed: int
    # null where the item at that index was rejected
    results: List[Optional[BillOut]] = Field(default_factory=list)
    errors: List[BillBatchErrorRow] = Field(default_factory=list)


class BillingRulesOut(_CamelModel):
    parking_slot_rate: int
    late_fee_rate: float
    default_water_rate: int
    default_electricity_rate: int
    rounding: str
    negative_total: str
    enrichment_enabled: bool

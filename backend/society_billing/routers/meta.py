# backend/society_billing/routers/meta.py
from __future__ import annotations

from fastapi import APIRouter

from ..config import settings
from ..domain.billing import (
    DEFAULT_ELECTRICITY_RATE,
    DEFAULT_WATER_RATE,
    LATE_FEE_RATE,
    PARKING_SLOT_RATE,
)
from ..schemas import BillingRulesOut

router = APIRouter(tags=["meta"])


@router.get("/health", response_model=dict)
def health():
    return {"ok": True, "version": settings.billing_version}


@router.get("/meta/billing-rules", response_model=BillingRulesOut)
def billing_rules():
    return BillingRulesOut(
        parking_slot_rate=PARKING_SLOT_RATE,
        late_fee_rate=float(LATE_FEE_RATE),
        default_water_rate=DEFAULT_WATER_RATE,
        default_electricity_rate=DEFAULT_ELECTRICITY_RATE,
        rounding="each line item to the nearest whole unit, halves rounded up",
        negative_total="passed through",
        enrichment_enabled=bool(settings.billing_enrichment_enabled and settings.gemini_api_key),
    )

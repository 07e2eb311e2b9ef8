# backend/society_billing/domain/billing/ai_response.py
from __future__ import annotations

import json
import math
import re
from typing import Any

from .calculator import SOURCE_AI, BillingResult, round_currency
from .errors import EnrichmentUnavailableError

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)

# response key -> BillingResult attribute
_NUMERIC_KEYS: dict[str, str] = {
    "rent": "rent",
    "maintenance": "maintenance",
    "parking": "parking",
    "water": "water",
    "electricity": "electricity",
    "additionalCharges": "additional_charges",
    "lateFee": "late_fee",
    "discount": "discount",
    "subtotal": "subtotal",
    "total": "total",
}


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text or "").strip()


def _is_number(x: Any) -> bool:
    if isinstance(x, bool):
        return False
    if isinstance(x, int):
        # ints of any size are exact; float(x) would overflow past ~1e308
        return True
    return isinstance(x, float) and math.isfinite(x)


def parse_bill_response(text: str) -> BillingResult:
    """
    Turn a raw model completion into a BillingResult, or raise
    EnrichmentUnavailableError.

    The completion is never trusted as-is: it must be a JSON object (after
    removing markdown fences) with a numeric `total`. Other numeric keys,
    when present, must be numbers; absent ones read as 0.
    """
    cleaned = strip_code_fences(text)
    if not cleaned:
        raise EnrichmentUnavailableError("empty_response")

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise EnrichmentUnavailableError(f"invalid_json:{e.msg}")
    except (ValueError, RecursionError) as e:
        # digit-limit ints, pathologically nested arrays
        raise EnrichmentUnavailableError(f"invalid_json:{type(e).__name__}")

    if not isinstance(data, dict):
        raise EnrichmentUnavailableError(f"expected_object:{type(data).__name__}")

    if "total" not in data:
        raise EnrichmentUnavailableError("missing_total")
    if not _is_number(data["total"]):
        raise EnrichmentUnavailableError("non_numeric_total")

    values: dict[str, int] = {}
    for key, attr in _NUMERIC_KEYS.items():
        raw = data.get(key, 0)
        if raw is None:
            raw = 0
        if not _is_number(raw):
            raise EnrichmentUnavailableError(f"non_numeric_{attr}")
        values[attr] = round_currency(raw)

    breakdown = data.get("breakdown") or ""
    if not isinstance(breakdown, str):
        raise EnrichmentUnavailableError("non_string_breakdown")

    return BillingResult(breakdown=breakdown.strip(), source=SOURCE_AI, **values)

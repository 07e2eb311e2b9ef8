# backend/society_billing/domain/billing/__init__.py
from .errors import EnrichmentUnavailableError, InvalidInputError
from .inputs import BillingInput, LastMonthStatus, parse_billing_input
from .calculator import (
    PARKING_SLOT_RATE,
    LATE_FEE_RATE,
    DEFAULT_WATER_RATE,
    DEFAULT_ELECTRICITY_RATE,
    BillingResult,
    compute_deterministic,
    round_currency,
)
from .prompt import build_bill_prompt
from .ai_response import parse_bill_response, strip_code_fences

__all__ = [
    "EnrichmentUnavailableError",
    "InvalidInputError",
    "BillingInput",
    "LastMonthStatus",
    "parse_billing_input",
    "PARKING_SLOT_RATE",
    "LATE_FEE_RATE",
    "DEFAULT_WATER_RATE",
    "DEFAULT_ELECTRICITY_RATE",
    "BillingResult",
    "compute_deterministic",
    "round_currency",
    "build_bill_prompt",
    "parse_bill_response",
    "strip_code_fences",
]

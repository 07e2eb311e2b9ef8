# backend/society_billing/domain/billing/inputs.py
from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Mapping, Optional

from .errors import InvalidInputError


class LastMonthStatus(str, Enum):
    paid = "paid"
    overdue = "overdue"
    pending = "pending"


# wire name -> attribute name
_WIRE_TO_ATTR: dict[str, str] = {
    "monthlyRent": "monthly_rent",
    "maintenanceCharges": "maintenance_charges",
    "parkingSlots": "parking_slots",
    "waterUsage": "water_usage",
    "waterRate": "water_rate",
    "electricityUsage": "electricity_usage",
    "electricityRate": "electricity_rate",
    "additionalCharges": "additional_charges",
    "discount": "discount",
    "month": "month",
    "lastMonthStatus": "last_month_status",
    "previousBalance": "previous_balance",
}

# Upper bound for any amount, usage or rate. Products of two bounded values
# stay well inside Decimal's exponent range and print as ordinary ints.
MAX_AMOUNT = Decimal("1e100")

# optional amount -> default used when absent or null
_OPTIONAL_AMOUNTS: dict[str, Decimal] = {
    "waterUsage": Decimal("0"),
    "waterRate": Decimal("5"),
    "electricityUsage": Decimal("0"),
    "electricityRate": Decimal("8"),
    "additionalCharges": Decimal("0"),
    "discount": Decimal("0"),
    "previousBalance": Decimal("0"),
}


@dataclass(frozen=True)
class BillingInput:
    monthly_rent: Decimal
    maintenance_charges: Decimal
    parking_slots: int
    month: str

    water_usage: Decimal = Decimal("0")
    water_rate: Decimal = Decimal("5")
    electricity_usage: Decimal = Decimal("0")
    electricity_rate: Decimal = Decimal("8")
    additional_charges: Decimal = Decimal("0")
    discount: Decimal = Decimal("0")

    last_month_status: LastMonthStatus = LastMonthStatus.paid
    previous_balance: Decimal = Decimal("0")

    def to_wire(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for wire, attr in _WIRE_TO_ATTR.items():
            v = getattr(self, attr)
            if isinstance(v, LastMonthStatus):
                v = v.value
            elif isinstance(v, Decimal):
                v = _plain_number(v)
            out[wire] = v
        return out


def _plain_number(v: Decimal) -> int | float:
    # 15000 stays 15000, 12.5 stays 12.5
    if v == v.to_integral_value():
        return int(v)
    return float(v)


def _lookup(data: Mapping[str, Any], wire: str) -> tuple[bool, Any]:
    if wire in data:
        return True, data[wire]
    attr = _WIRE_TO_ATTR[wire]
    if attr in data:
        return True, data[attr]
    return False, None


def _to_amount(wire: str, raw: Any) -> Decimal:
    if isinstance(raw, bool):
        raise InvalidInputError(wire, "must be a number, not a boolean")

    if isinstance(raw, int) and raw > MAX_AMOUNT:
        raise InvalidInputError(wire, "must be <= 1e100")

    if isinstance(raw, Decimal):
        v = raw
    elif isinstance(raw, (int, float)):
        if isinstance(raw, float) and not math.isfinite(raw):
            raise InvalidInputError(wire, "must be finite")
        # str() keeps 0.1 as 0.1 instead of its binary expansion
        v = Decimal(str(raw))
    elif isinstance(raw, str) and raw.strip():
        try:
            v = Decimal(raw.strip())
        except InvalidOperation:
            raise InvalidInputError(wire, f"must be numeric; got {raw!r}")
    else:
        raise InvalidInputError(wire, f"must be numeric; got {type(raw).__name__}")

    if not v.is_finite():
        raise InvalidInputError(wire, "must be finite")
    if v < 0:
        raise InvalidInputError(wire, "must be >= 0")
    if v > MAX_AMOUNT:
        raise InvalidInputError(wire, "must be <= 1e100")
    return v


def _required_amount(data: Mapping[str, Any], wire: str) -> Decimal:
    present, raw = _lookup(data, wire)
    if not present or raw is None:
        raise InvalidInputError(wire, "is required")
    return _to_amount(wire, raw)


def _optional_amount(data: Mapping[str, Any], wire: str) -> Decimal:
    present, raw = _lookup(data, wire)
    if not present or raw is None:
        return _OPTIONAL_AMOUNTS[wire]
    return _to_amount(wire, raw)


def _parking_slots(data: Mapping[str, Any]) -> int:
    v = _required_amount(data, "parkingSlots")
    if v != v.to_integral_value():
        raise InvalidInputError("parkingSlots", "must be a whole number")
    return int(v)


def _month(data: Mapping[str, Any]) -> str:
    present, raw = _lookup(data, "month")
    if not present or raw is None:
        raise InvalidInputError("month", "is required")
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidInputError("month", "must be a non-empty label")
    return raw.strip()


def _status(data: Mapping[str, Any]) -> LastMonthStatus:
    present, raw = _lookup(data, "lastMonthStatus")
    if not present or raw is None or raw == "":
        return LastMonthStatus.paid
    if isinstance(raw, LastMonthStatus):
        return raw
    s = str(raw).strip().lower()
    try:
        return LastMonthStatus(s)
    except ValueError:
        allowed = ", ".join(x.value for x in LastMonthStatus)
        raise InvalidInputError("lastMonthStatus", f"must be one of: {allowed}; got {raw!r}")


def parse_billing_input(data: Optional[Mapping[str, Any]]) -> BillingInput:
    """
    Build a validated BillingInput from a loosely typed mapping.

    Keys may be camelCase (as stored by the society app) or snake_case.
    A null optional field falls back to its default. Any violation raises
    InvalidInputError naming the camelCase field.
    """
    if data is None or not isinstance(data, Mapping):
        raise InvalidInputError("input", "must be an object")

    return BillingInput(
        monthly_rent=_required_amount(data, "monthlyRent"),
        maintenance_charges=_required_amount(data, "maintenanceCharges"),
        parking_slots=_parking_slots(data),
        month=_month(data),
        water_usage=_optional_amount(data, "waterUsage"),
        water_rate=_optional_amount(data, "waterRate"),
        electricity_usage=_optional_amount(data, "electricityUsage"),
        electricity_rate=_optional_amount(data, "electricityRate"),
        additional_charges=_optional_amount(data, "additionalCharges"),
        discount=_optional_amount(data, "discount"),
        last_month_status=_status(data),
        previous_balance=_optional_amount(data, "previousBalance"),
    )

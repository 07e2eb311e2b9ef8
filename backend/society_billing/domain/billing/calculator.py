# backend/society_billing/domain/billing/calculator.py
from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from .inputs import BillingInput, LastMonthStatus

PARKING_SLOT_RATE = 500
LATE_FEE_RATE = Decimal("0.02")
DEFAULT_WATER_RATE = 5
DEFAULT_ELECTRICITY_RATE = 8

CURRENCY_SYMBOL = "₹"

SOURCE_DETERMINISTIC = "deterministic"
SOURCE_AI = "ai"

# Numeric fields of a bill, in itemization order.
AMOUNT_FIELDS = (
    "rent",
    "maintenance",
    "parking",
    "water",
    "electricity",
    "additional_charges",
    "late_fee",
    "discount",
    "subtotal",
    "total",
)


@dataclass(frozen=True)
class BillingResult:
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
    source: str = SOURCE_DETERMINISTIC

    def amounts(self) -> dict[str, int]:
        return {k: getattr(self, k) for k in AMOUNT_FIELDS}

    def with_breakdown(self, breakdown: str, *, source: str) -> "BillingResult":
        return replace(self, breakdown=breakdown, source=source)

    def to_wire(self) -> dict[str, Any]:
        return {
            "rent": self.rent,
            "maintenance": self.maintenance,
            "parking": self.parking,
            "water": self.water,
            "electricity": self.electricity,
            "additionalCharges": self.additional_charges,
            "lateFee": self.late_fee,
            "discount": self.discount,
            "subtotal": self.subtotal,
            "total": self.total,
            "breakdown": self.breakdown,
            "source": self.source,
        }


def round_currency(x: Decimal | int | float) -> int:
    """
    Round to the nearest whole currency unit, halves away from zero.

    Python's round() uses banker's rounding (200.5 -> 200); bills use the
    schoolbook rule (200.5 -> 201).
    """
    d = x if isinstance(x, Decimal) else Decimal(str(x))
    return int(d.to_integral_value(rounding=ROUND_HALF_UP))


def compute_late_fee(inp: BillingInput) -> int:
    if inp.last_month_status == LastMonthStatus.overdue and inp.previous_balance > 0:
        return round_currency(inp.previous_balance * LATE_FEE_RATE)
    return 0


def _units(v: Decimal) -> str:
    return str(int(v)) if v == v.to_integral_value() else str(v.normalize())


def format_breakdown(
    *,
    rent: int,
    maintenance: int,
    parking_slots: int,
    parking: int,
    water_usage: Decimal,
    water: int,
    electricity_usage: Decimal,
    electricity: int,
    additional_charges: int,
    late_fee: int,
    discount: int,
    total: int,
) -> str:
    c = CURRENCY_SYMBOL
    parts = [
        f"Rent: {c}{rent}",
        f" + Maintenance: {c}{maintenance}",
        f" + Parking ({parking_slots} slots): {c}{parking}",
        f" + Water ({_units(water_usage)} units): {c}{water}",
        f" + Electricity ({_units(electricity_usage)} units): {c}{electricity}",
    ]
    if additional_charges > 0:
        parts.append(f" + Additional: {c}{additional_charges}")
    if late_fee > 0:
        parts.append(f" + Late Fee: {c}{late_fee}")
    if discount > 0:
        parts.append(f" - Discount: {c}{discount}")
    parts.append(f" = Total: {c}{total}")
    return "".join(parts)


def compute_deterministic(inp: BillingInput) -> BillingResult:
    """
    Network-free monthly bill.

    Every line item is rounded to a whole currency unit before it is summed,
    so subtotal always equals the sum of the printed items and
    total == subtotal - discount. A discount larger than the subtotal yields a
    negative total; it is not clamped.
    """
    rent = round_currency(inp.monthly_rent)
    maintenance = round_currency(inp.maintenance_charges)
    parking = int(inp.parking_slots) * PARKING_SLOT_RATE
    water = round_currency(inp.water_usage * inp.water_rate)
    electricity = round_currency(inp.electricity_usage * inp.electricity_rate)
    additional = round_currency(inp.additional_charges)
    late_fee = compute_late_fee(inp)
    discount = round_currency(inp.discount)

    subtotal = rent + maintenance + parking + water + electricity + additional + late_fee
    total = subtotal - discount

    return BillingResult(
        rent=rent,
        maintenance=maintenance,
        parking=parking,
        water=water,
        electricity=electricity,
        additional_charges=additional,
        late_fee=late_fee,
        discount=discount,
        subtotal=subtotal,
        total=total,
        breakdown=format_breakdown(
            rent=rent,
            maintenance=maintenance,
            parking_slots=inp.parking_slots,
            parking=parking,
            water_usage=inp.water_usage,
            water=water,
            electricity_usage=inp.electricity_usage,
            electricity=electricity,
            additional_charges=additional,
            late_fee=late_fee,
            discount=discount,
            total=total,
        ),
        source=SOURCE_DETERMINISTIC,
    )

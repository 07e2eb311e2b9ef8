# backend/tests/test_billing_input_validation.py
from __future__ import annotations

from decimal import Decimal

import pytest

from society_billing.domain.billing import InvalidInputError, LastMonthStatus, parse_billing_input


@pytest.mark.parametrize("missing", ["monthlyRent", "maintenanceCharges", "parkingSlots", "month"])
def test_missing_required_field_is_named(base_input, missing):
    data = dict(base_input)
    data.pop(missing)
    with pytest.raises(InvalidInputError) as ei:
        parse_billing_input(data)
    assert ei.value.field == missing


@pytest.mark.parametrize(
    "field",
    ["maintenanceCharges", "parkingSlots", "waterUsage", "waterRate", "electricityUsage",
     "electricityRate", "additionalCharges", "discount", "previousBalance"],
)
def test_negative_amounts_rejected(base_input, field):
    with pytest.raises(InvalidInputError) as ei:
        parse_billing_input({**base_input, field: -1})
    assert ei.value.field == field


@pytest.mark.parametrize("bad", [True, "abc", float("inf"), float("nan"), [], {}])
def test_non_numeric_values_rejected(base_input, bad):
    with pytest.raises(InvalidInputError) as ei:
        parse_billing_input({**base_input, "waterUsage": bad})
    assert ei.value.field == "waterUsage"


def test_fractional_parking_slots_rejected(base_input):
    with pytest.raises(InvalidInputError) as ei:
        parse_billing_input({**base_input, "parkingSlots": 1.5})
    assert ei.value.field == "parkingSlots"


def test_blank_month_rejected(base_input):
    with pytest.raises(InvalidInputError) as ei:
        parse_billing_input({**base_input, "month": "   "})
    assert ei.value.field == "month"


def test_unknown_status_rejected(base_input):
    with pytest.raises(InvalidInputError) as ei:
        parse_billing_input({**base_input, "lastMonthStatus": "late"})
    assert ei.value.field == "lastMonthStatus"


def test_non_mapping_input_rejected():
    with pytest.raises(InvalidInputError):
        parse_billing_input(None)
    with pytest.raises(InvalidInputError):
        parse_billing_input([1, 2, 3])  # type: ignore[arg-type]


def test_defaults_and_snake_case_keys():
    inp = parse_billing_input(
        {"monthly_rent": "15000", "maintenance_charges": 2000, "parking_slots": 2.0, "month": " Oct 2026 "}
    )
    assert inp.monthly_rent == Decimal("15000")
    assert inp.parking_slots == 2
    assert inp.month == "Oct 2026"
    assert inp.water_rate == Decimal("5")
    assert inp.electricity_rate == Decimal("8")
    assert inp.last_month_status is LastMonthStatus.paid
    assert inp.previous_balance == 0


def test_status_is_case_insensitive(base_input):
    inp = parse_billing_input({**base_input, "lastMonthStatus": "OVERDUE"})
    assert inp.last_month_status is LastMonthStatus.overdue


def test_to_wire_uses_camel_case(base_input):
    w = parse_billing_input({**base_input, "waterUsage": 12.5}).to_wire()
    assert w["monthlyRent"] == 15000
    assert w["waterUsage"] == 12.5
    assert w["lastMonthStatus"] == "paid"
    assert w["waterRate"] == 5


@pytest.mark.parametrize("bad", [10**200, 1e101, "1e999999", Decimal("1e101")])
def test_amounts_above_upper_bound_rejected(base_input, bad):
    with pytest.raises(InvalidInputError) as ei:
        parse_billing_input({**base_input, "monthlyRent": bad})
    assert ei.value.field == "monthlyRent"
    assert ei.value.reason == "must be <= 1e100"


def test_upper_bound_itself_is_accepted(base_input):
    inp = parse_billing_input({**base_input, "electricityUsage": 10**100})
    assert inp.electricity_usage == Decimal(10**100)


@pytest.mark.parametrize("bad", [202610, ["Oct"], {"m": 10}])
def test_non_string_month_rejected(base_input, bad):
    with pytest.raises(InvalidInputError) as ei:
        parse_billing_input({**base_input, "month": bad})
    assert ei.value.field == "month"

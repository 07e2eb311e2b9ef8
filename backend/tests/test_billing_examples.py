# backend/tests/test_billing_examples.py
from __future__ import annotations

import pytest

from society_billing.domain.billing import InvalidInputError, compute_deterministic, parse_billing_input


def _bill(data):
    return compute_deterministic(parse_billing_input(data))


def test_paid_last_month_has_no_late_fee(base_input):
    r = _bill(base_input)
    assert r.rent == 15000
    assert r.maintenance == 2000
    assert r.parking == 500
    assert r.water == 0
    assert r.electricity == 0
    assert r.late_fee == 0
    assert r.subtotal == 17500
    assert r.total == 17500
    assert r.source == "deterministic"


def test_overdue_previous_balance_adds_two_percent(base_input):
    r = _bill({**base_input, "lastMonthStatus": "overdue", "previousBalance": 10000})
    assert r.late_fee == 200
    assert r.subtotal == 17700
    assert r.total == 17700


def test_usage_charges_raise_subtotal(base_input):
    r = _bill({**base_input, "waterUsage": 10, "waterRate": 5, "electricityUsage": 50, "electricityRate": 8})
    assert r.water == 50
    assert r.electricity == 400
    assert r.subtotal == 17500 + 450


def test_negative_rent_names_the_field(base_input):
    with pytest.raises(InvalidInputError) as ei:
        _bill({**base_input, "monthlyRent": -100})
    assert ei.value.field == "monthlyRent"
    assert "monthlyRent" in str(ei.value)

# backend/society_billing/domain/billing/prompt.py
from __future__ import annotations

from .calculator import CURRENCY_SYMBOL, LATE_FEE_RATE, PARKING_SLOT_RATE
from .inputs import BillingInput

RESPONSE_KEYS = (
    "rent",
    "maintenance",
    "parking",
    "water",
    "electricity",
    "additionalCharges",
    "lateFee",
    "discount",
    "subtotal",
    "total",
    "breakdown",
)


def build_bill_prompt(inp: BillingInput) -> str:
    """
    Prompt for the language-model itemization.

    The rules listed here are the same ones compute_deterministic applies;
    the model is asked for numbers too, but those are only used as a
    cross-check.
    """
    w = inp.to_wire()
    rent, maintenance, slots = w["monthlyRent"], w["maintenanceCharges"], w["parkingSlots"]
    water_usage, water_rate = w["waterUsage"], w["waterRate"]
    elec_usage, elec_rate = w["electricityUsage"], w["electricityRate"]
    additional, discount = w["additionalCharges"], w["discount"]
    month, status, balance = w["month"], w["lastMonthStatus"], w["previousBalance"]
    c = CURRENCY_SYMBOL
    late_pct = int(LATE_FEE_RATE * 100)

    schema_lines = ",\n".join(
        f'  "{k}": {"string" if k == "breakdown" else "number"}' for k in RESPONSE_KEYS
    )

    return f"""
You are an expert billing assistant for residential properties in India. Calculate the monthly bill accurately.

PROPERTY DETAILS:
- Monthly Rent: {c}{rent}
- Maintenance Charges: {c}{maintenance}
- Number of Parking Slots: {slots} ({c}{PARKING_SLOT_RATE} per slot)
- Water Usage: {water_usage} units @ {c}{water_rate}/unit
- Electricity Usage: {elec_usage} units @ {c}{elec_rate}/unit
- Additional Charges: {c}{additional}
- Discount: {c}{discount}

BILLING PERIOD: {month}
PREVIOUS MONTH STATUS: {status}
PREVIOUS BALANCE: {c}{balance}

CALCULATION RULES:
1. If last month payment was late (overdue) and the previous balance is above zero, add a {late_pct}% late fee on the previous balance
2. Round every amount to the nearest rupee (no decimals)
3. GST is already included in maintenance charges
4. Calculate parking as: parkingSlots x {PARKING_SLOT_RATE}
5. Water charges: waterUsage x waterRate
6. Electricity charges: electricityUsage x electricityRate
7. subtotal = rent + maintenance + parking + water + electricity + additionalCharges + lateFee
8. total = subtotal - discount

Return ONLY a valid JSON object (no markdown, no extra text):
{{
{schema_lines}
}}
The "breakdown" value is a detailed itemized description of all charges.
""".strip()

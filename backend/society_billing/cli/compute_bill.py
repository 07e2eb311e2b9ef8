# backend/society_billing/cli/compute_bill.py
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from society_billing.domain.billing import InvalidInputError
from society_billing.services.bill_service import BillCalculator, build_calculator


@dataclass(frozen=True)
class ComputeResult:
    ok: bool
    bills: list[Optional[dict[str, Any]]]
    errors: list[dict[str, Any]]


def load_requests(path: Path) -> list[dict[str, Any]]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InvalidInputError("input", f"not valid JSON: {e.msg} (line {e.lineno}, column {e.colno})")
    except ValueError as e:
        raise InvalidInputError("input", f"not valid JSON: {e}")
    if isinstance(raw, dict):
        return [raw]
    if isinstance(raw, list):
        return raw
    raise InvalidInputError("input", "file must hold a JSON object or a list of objects")


def compute_from_file(path: Path, *, use_ai: bool = True, calc: Optional[BillCalculator] = None) -> ComputeResult:
    calc = calc or build_calculator(enrichment=None if use_ai else False)
    items = load_requests(path)

    if len(items) == 1:
        bill = calc.compute_bill(items[0])
        return ComputeResult(ok=True, bills=[bill.to_wire()], errors=[])

    out = calc.compute_bills(items)
    return ComputeResult(
        ok=not out.errors,
        bills=[r.to_wire() if r is not None else None for r in out.results],
        errors=[{"index": e.index, "field": e.field, "error": e.error} for e in out.errors],
    )

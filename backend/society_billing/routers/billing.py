# backend/society_billing/routers/billing.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ..domain.billing import InvalidInputError
from ..schemas import BillBatchErrorRow, BillBatchIn, BillBatchOut, BillingIn, BillOut
from ..services.bill_service import BillCalculator, build_calculator

router = APIRouter(prefix="/billing", tags=["billing"])


def get_calculator() -> BillCalculator:
    return build_calculator()


@router.post("/compute", response_model=BillOut)
def compute(payload: BillingIn, calc: BillCalculator = Depends(get_calculator)):
    try:
        result = calc.compute_bill(payload.to_billing_payload())
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail={"field": e.field, "error": e.reason})
    return BillOut.from_result(result)


@router.post("/compute-batch", response_model=BillBatchOut)
def compute_batch(payload: BillBatchIn, calc: BillCalculator = Depends(get_calculator)):
    out = calc.compute_bills([x.to_billing_payload() for x in payload.items])
    return BillBatchOut(
        attempted=out.attempted,
        computed=out.computed,
        results=[BillOut.from_result(r) if r is not None else None for r in out.results],
        errors=[BillBatchErrorRow(index=e.index, field=e.field, error=e.error) for e in out.errors],
    )

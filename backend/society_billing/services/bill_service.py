# backend/society_billing/services/bill_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Union

from ..domain.billing import (
    BillingInput,
    BillingResult,
    EnrichmentUnavailableError,
    InvalidInputError,
    build_bill_prompt,
    compute_deterministic,
    parse_billing_input,
    parse_bill_response,
)
from ..domain.billing.calculator import SOURCE_AI
from ..integrations.gemini_client import GeminiClient, GeminiConfig, TextGenerator

log = logging.getLogger("society_billing.billing")

BillRequest = Union[BillingInput, Mapping[str, Any]]


@dataclass(frozen=True)
class BatchBillError:
    index: int
    field: str
    error: str


@dataclass(frozen=True)
class BatchBillOutcome:
    attempted: int
    results: list[Optional[BillingResult]] = field(default_factory=list)
    errors: list[BatchBillError] = field(default_factory=list)

    @property
    def computed(self) -> int:
        return sum(1 for r in self.results if r is not None)


class BillCalculator:
    """
    Monthly bill computation with an optional language-model itemization.

    The arithmetic result is always computed and owns every number on the
    bill. When a generator is configured, its completion is parsed and
    cross-checked; if it agrees on every amount, its narrative breakdown is
    kept. Anything else (no generator, network failure, timeout, junk output,
    disagreeing numbers) returns the arithmetic result unchanged.
    """

    def __init__(self, generator: Optional[TextGenerator] = None, *, enrichment_enabled: bool = True):
        self.generator = generator
        self.enrichment_enabled = bool(enrichment_enabled)

    def enrichment_active(self) -> bool:
        if not self.enrichment_enabled or self.generator is None:
            return False
        enabled = getattr(self.generator, "enabled", None)
        return bool(enabled()) if callable(enabled) else True

    def compute_bill(self, data: BillRequest) -> BillingResult:
        inp = data if isinstance(data, BillingInput) else parse_billing_input(data)
        base = compute_deterministic(inp)

        if not self.enrichment_active():
            return base

        try:
            ai = self._enrich(inp)
        except EnrichmentUnavailableError as e:
            log.warning(
                "bill enrichment unavailable; using deterministic result",
                extra={"month": inp.month, "reason": e.reason, "bill_source": base.source},
            )
            return base

        mismatched = [k for k, v in base.amounts().items() if ai.amounts()[k] != v]
        if mismatched:
            log.warning(
                "bill enrichment disagrees with arithmetic; using deterministic result",
                extra={"month": inp.month, "fields": mismatched, "bill_source": base.source},
            )
            return base

        if not ai.breakdown:
            return base

        return base.with_breakdown(ai.breakdown, source=SOURCE_AI)

    def _enrich(self, inp: BillingInput) -> BillingResult:
        text = self.generator.generate(build_bill_prompt(inp))
        return parse_bill_response(text)

    def compute_bills(self, items: Iterable[BillRequest]) -> BatchBillOutcome:
        """
        Bills are independent; one invalid item is reported and skipped
        without aborting the rest.
        """
        results: list[Optional[BillingResult]] = []
        errors: list[BatchBillError] = []
        for i, item in enumerate(items):
            try:
                results.append(self.compute_bill(item))
            except InvalidInputError as e:
                results.append(None)
                errors.append(BatchBillError(index=i, field=e.field, error=e.reason))
        return BatchBillOutcome(attempted=len(results), results=results, errors=errors)


def build_calculator(cfg: Any = None, *, enrichment: Optional[bool] = None) -> BillCalculator:
    """
    Wire a BillCalculator from application settings.
    `enrichment=False` forces the arithmetic-only path regardless of settings.
    """
    if cfg is None:
        from ..config import settings as cfg

    enabled = bool(cfg.billing_enrichment_enabled) if enrichment is None else bool(enrichment)
    if not enabled or not cfg.gemini_api_key:
        return BillCalculator(None, enrichment_enabled=False)

    client = GeminiClient(
        GeminiConfig(
            api_key=cfg.gemini_api_key,
            model=cfg.gemini_model,
            base_url=cfg.gemini_base_url,
            timeout_seconds=float(cfg.gemini_timeout_seconds),
            temperature=float(cfg.gemini_temperature),
        )
    )
    return BillCalculator(client, enrichment_enabled=True)

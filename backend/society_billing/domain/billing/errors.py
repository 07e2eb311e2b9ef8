# backend/society_billing/domain/billing/errors.py
from __future__ import annotations


class InvalidInputError(ValueError):
    """
    Billing parameters failed validation.

    `field` is the wire (camelCase) name of the offending parameter so callers
    can point a user straight at it.
    """

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class EnrichmentUnavailableError(RuntimeError):
    """The language-model path produced nothing usable; fall back to arithmetic."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)

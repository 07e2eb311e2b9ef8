# backend/tests/conftest.py
from __future__ import annotations

from typing import Any, Callable

import pytest

from society_billing.domain.billing import EnrichmentUnavailableError
from society_billing.integrations.gemini_client import TextGenerator


class ScriptedGenerator(TextGenerator):
    """Returns a canned completion (or raises) and records every prompt."""

    def __init__(self, reply: str | Callable[[str], str] | Exception):
        self.reply = reply
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if isinstance(self.reply, Exception):
            raise self.reply
        if callable(self.reply):
            return self.reply(prompt)
        return self.reply


@pytest.fixture
def base_input() -> dict[str, Any]:
    return {
        "monthlyRent": 15000,
        "maintenanceCharges": 2000,
        "parkingSlots": 1,
        "waterUsage": 0,
        "electricityUsage": 0,
        "month": "2026-10",
        "lastMonthStatus": "paid",
        "previousBalance": 0,
    }


@pytest.fixture
def failing_generator() -> ScriptedGenerator:
    return ScriptedGenerator(EnrichmentUnavailableError("gemini_transport:ConnectError"))


@pytest.fixture
def scripted_generator() -> Callable[..., ScriptedGenerator]:
    return ScriptedGenerator

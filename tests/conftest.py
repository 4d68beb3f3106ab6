"""Shared fixtures and Hypothesis profiles."""

from __future__ import annotations

import os

import pytest
from hypothesis import settings

from contract import NumContract, build_contract

settings.register_profile("ci", max_examples=1_000)
settings.register_profile("dev", max_examples=100)
settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "dev"))


@pytest.fixture(scope="session")
def contract() -> NumContract:
    return build_contract()

"""Pytest configuration and fixtures for contextual validation tests."""

from __future__ import annotations

import sys
from pathlib import Path

# Add parent directory to Python path so we can import contextual_validation
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from contextual_validation.engine import VoluptuousValidationEngine
from tests.doubles import FakeValidationEngine


@pytest.fixture
def person_input() -> dict[str, str]:
    """Return submitted person form data."""
    return {
        "first_name": "Chris",
        "last_name": "Hayes",
        "website": "http://www.chrishayes.ca",
    }


@pytest.fixture
def person_rules() -> dict[str, dict[str, str]]:
    """Return contextual rules for a person form."""
    return {
        "default": {
            "first_name": "required",
            "last_name": "required",
            "website": "required|url",
        },
        "create": {"first_name": "required|max:255"},
        "edit": {"website": "url"},
    }


@pytest.fixture
def fake_engine() -> FakeValidationEngine:
    """Return a fake engine under which every validation passes."""
    return FakeValidationEngine()


@pytest.fixture
def engine() -> VoluptuousValidationEngine:
    """Return the real voluptuous engine."""
    return VoluptuousValidationEngine()

"""Test doubles for unit testing.

Test doubles are fake implementations of interfaces used for testing.
They're faster and more reliable than mocking, and they implement the
actual interface contracts.

Types of test doubles:
- Fake: Lightweight working implementation (e.g., recording engine)
- Stub: Returns predetermined values

Example:
    >>> from tests.doubles import FakeValidationEngine
    >>> engine = FakeValidationEngine(errors={"name": ["The name field is required."]})
    >>> validator = ContextualValidator({}, rules={"name": "required"}, engine=engine)
    >>> assert validator.fails()
"""

from .fake_validation_engine import FakeEngineSession, FakeValidationEngine
from .stub_validator import StubValidator

__all__ = [
    "FakeEngineSession",
    "FakeValidationEngine",
    "StubValidator",
]

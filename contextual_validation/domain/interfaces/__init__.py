"""Interfaces for contextual validation.

The validators depend on these contracts only, so the bundled voluptuous
engine can be swapped for any other implementation (or a fake in tests).
"""

from .i_engine_session import IEngineSession
from .i_validation_engine import IValidationEngine
from .validatable_protocol import ValidatableProtocol

__all__ = [
    "IEngineSession",
    "IValidationEngine",
    "ValidatableProtocol",
]

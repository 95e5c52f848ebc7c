"""Voluptuous-backed validation engine.

The contextual validators treat the engine as an external collaborator;
this package is the default implementation used when none is injected.
"""

from .rule_factories import DEFAULT_RULE_FACTORIES, RuleFactory
from .voluptuous_engine import VoluptuousValidationEngine
from .voluptuous_session import VoluptuousEngineSession

__all__ = [
    "DEFAULT_RULE_FACTORIES",
    "RuleFactory",
    "VoluptuousEngineSession",
    "VoluptuousValidationEngine",
]

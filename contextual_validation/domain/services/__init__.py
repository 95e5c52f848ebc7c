"""Domain services for contextual validation."""

from .context_rule_resolver import ContextRuleResolver
from .replacement_binder import ReplacementBinder

__all__ = [
    "ContextRuleResolver",
    "ReplacementBinder",
]

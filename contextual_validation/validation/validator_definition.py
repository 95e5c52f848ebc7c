"""Validator definition loaded from configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from ..domain.interfaces import IValidationEngine
from .contextual_validator import ConditionalRules, ContextualValidator


@dataclass(frozen=True)
class ValidatorDefinition:
    """Named rule table with its custom messages.

    Attributes:
        name: Validator name, reported by ContextNotFoundError
        rules: Flat or contextual rule definitions
        messages: Custom messages keyed by ``field.rule`` or ``rule``
    """

    name: str
    rules: Mapping[str, Any]
    messages: Mapping[str, str] = field(default_factory=dict)

    def build(
        self,
        attributes: Mapping[str, Any],
        context: str | Sequence[str] | None = None,
        *,
        conditional_rules: ConditionalRules | None = None,
        engine: IValidationEngine | None = None,
    ) -> ContextualValidator:
        """Create a ContextualValidator for this definition."""
        return ContextualValidator(
            attributes,
            context,
            rules=self.rules,
            messages=self.messages,
            conditional_rules=conditional_rules,
            engine=engine,
            name=self.name,
        )

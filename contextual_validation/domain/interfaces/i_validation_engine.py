"""IValidationEngine interface for field-rule interpreters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from .i_engine_session import IEngineSession


class IValidationEngine(ABC):
    """Interface for the engine that interprets rule expressions.

    Contextual validators never interpret rules themselves; they resolve the
    rule set for the selected contexts and hand it to an engine.
    """

    @abstractmethod
    def make(
        self,
        attributes: Mapping[str, Any],
        rules: Mapping[str, Any],
        messages: Mapping[str, str] | None = None,
    ) -> IEngineSession:
        """Create a validation session.

        Args:
            attributes: Field -> value mapping under validation
            rules: Field -> rule expression mapping
            messages: Custom messages keyed by ``field.rule`` or ``rule``

        Returns:
            An unevaluated engine session

        Raises:
            UnknownRuleError: If a rule name has no implementation
        """

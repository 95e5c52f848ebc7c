"""IEngineSession interface for one validation run of the engine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Mapping

from ..value_objects.message_bag import MessageBag


class IEngineSession(ABC):
    """Interface for a validation engine session.

    A session is created by ``IValidationEngine.make`` with the attributes,
    the static rules and the custom messages. Dynamic rules may be attached
    (``sometimes`` / ``after``) until the session is evaluated.

    Example:
        >>> session = engine.make({"age": 17}, {"age": "integer"})
        >>> session.sometimes("guardian", "required", lambda data: data["age"] < 18)
        >>> session.passes()
        False
    """

    @abstractmethod
    def passes(self) -> bool:
        """Evaluate every rule and return True if none failed."""

    def fails(self) -> bool:
        """Return True if any rule failed."""
        return not self.passes()

    @abstractmethod
    def messages(self) -> MessageBag:
        """Return the messages of the last evaluation."""

    @abstractmethod
    def sometimes(
        self,
        fields: str | Iterable[str],
        rules: Any,
        predicate: Callable[[Mapping[str, Any]], bool],
    ) -> IEngineSession:
        """Attach rules to fields when ``predicate(attributes)`` is true.

        Args:
            fields: Field name or names
            rules: Rule expression to attach
            predicate: Receives the attributes at evaluation time

        Returns:
            The session, for chaining
        """

    @abstractmethod
    def after(self, callback: Callable[[IEngineSession], None]) -> IEngineSession:
        """Register a callback run after rule evaluation.

        The callback may call ``add_error`` to report cross-field problems.
        """

    @abstractmethod
    def add_error(self, field: str, message: str) -> None:
        """Record an extra message for a field during evaluation."""

    @abstractmethod
    def get_attributes(self) -> Mapping[str, Any]:
        """Return the attributes under validation."""

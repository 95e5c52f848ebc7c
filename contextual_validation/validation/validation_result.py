"""Validation Result data class.

Outcome of a validation run with the messages it produced.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..domain.value_objects import MessageBag


@dataclass
class ValidationResult:
    """Result of a validation operation.

    Attributes:
        valid: Whether validation passed
        messages: Field -> messages produced by failing rules
    """

    valid: bool
    messages: MessageBag = field(default_factory=MessageBag)

    def __bool__(self) -> bool:
        return self.valid

    def __str__(self) -> str:
        """Return string representation of validation result."""
        if self.valid:
            return "Valid"
        return " | ".join(
            f"{key}: {', '.join(messages)}" for key, messages in self.messages.items()
        )

"""ValidatableProtocol for anything that can join a grouped validation.

Uses Protocol suffix to distinguish structural contracts from the
abstract engine interfaces.
"""

from __future__ import annotations

from typing import Mapping, Protocol, Sequence, runtime_checkable


@runtime_checkable
class ValidatableProtocol(Protocol):
    """Protocol for a validator that reports pass/fail and its messages.

    This uses structural typing (Protocol) rather than inheritance, so a
    ContextualValidator, a NativeValidatorAdapter or any third-party object
    with these two methods can be grouped.
    """

    def passes(self) -> bool:
        """Run validation and return True if every rule passed."""
        ...

    def errors(self) -> Mapping[str, Sequence[str]]:
        """Return field -> messages produced by the last run."""
        ...

"""Service for binding replacement values into rule placeholders."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ...const import PLACEHOLDER_PATTERN
from ..exceptions import ReplacementBindingError

_LOGGER = logging.getLogger(__name__)


class ReplacementBinder:
    """Substitutes ``@token`` placeholders in rule expressions.

    Replacement values are bound per field; a token in a field's rule is
    replaced with the string form of the value bound to that token name.

    Example:
        >>> binder = ReplacementBinder()
        >>> binder.bind("email", {"id": 42})
        >>> binder.apply({"email": "required|unique:users,email,@id"})
        {'email': 'required|unique:users,email,42'}
    """

    def __init__(self) -> None:
        """Initialize binder with no replacements."""
        self._replacements: dict[str, dict[str, Any]] = {}

    def bind(self, field: str, replacement: Mapping[str, Any]) -> None:
        """Register (or overwrite) the replacement values for a field."""
        self._replacements[field] = dict(replacement)

    def get(self, field: str) -> dict[str, Any]:
        """Return the replacement values bound to a field (empty if none)."""
        return dict(self._replacements.get(field, {}))

    def apply(self, rules: Mapping[str, Any]) -> dict[str, Any]:
        """Return a copy of the rules with every placeholder substituted.

        Args:
            rules: Field -> rule expression mapping

        Returns:
            New field -> rule expression mapping

        Raises:
            ReplacementBindingError: If a placeholder has no bound value
        """
        bound = {}
        for field, expression in rules.items():
            replacements = self._replacements.get(field, {})

            if isinstance(expression, str):
                bound[field] = self._substitute(expression, field, replacements)
            elif isinstance(expression, (list, tuple)):
                bound[field] = type(expression)(
                    self._substitute(item, field, replacements)
                    if isinstance(item, str)
                    else item
                    for item in expression
                )
            else:
                bound[field] = expression

        return bound

    @staticmethod
    def _substitute(rule: str, field: str, replacements: Mapping[str, Any]) -> str:
        tokens = PLACEHOLDER_PATTERN.findall(rule)
        if not tokens:
            return rule

        if any(token not in replacements for token in tokens):
            raise ReplacementBindingError(rule, field, len(tokens))

        result = PLACEHOLDER_PATTERN.sub(
            lambda match: str(replacements[match.group(1)]), rule
        )
        _LOGGER.debug("Bound %d replacements for field '%s'", len(tokens), field)
        return result

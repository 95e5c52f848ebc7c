"""Service for resolving the rule set of the selected contexts."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from ...const import DEFAULT_CONTEXT
from ..exceptions import ContextNotFoundError, InvalidRuleDefinitionError

_LOGGER = logging.getLogger(__name__)


class ContextRuleResolver:
    """Service for layering contextual rule fragments.

    Rule definitions are either flat (field -> rule expression) or contextual
    (context name -> fragment). The ``default`` fragment is applied first and
    every selected context is overlaid on top of it in selection order, a
    later fragment replacing the whole rule expression of a field.

    Example:
        >>> resolver = ContextRuleResolver({
        ...     "default": {"first_name": "required", "last_name": "required"},
        ...     "create": {"first_name": "required|max:255"},
        ... })
        >>> resolver.resolve(["create"])
        {'first_name': 'required|max:255', 'last_name': 'required'}
    """

    def __init__(self, rules: Mapping[str, Any], owner: str = "ContextualValidator"):
        """Initialize resolver.

        Args:
            rules: Flat or contextual rule definitions
            owner: Validator name reported by ContextNotFoundError
        """
        self._rules = rules
        self._owner = owner

    def has_context(self, contexts: Sequence[str]) -> bool:
        """Return True if the definitions must be read contextually.

        Args:
            contexts: Contexts selected at runtime

        Returns:
            True if any context was selected or a default fragment exists
        """
        return bool(contexts) or DEFAULT_CONTEXT in self._rules

    def resolve(self, contexts: Sequence[str]) -> dict[str, Any]:
        """Resolve the field -> rule expression mapping for the contexts.

        Args:
            contexts: Context names in the order they were added

        Returns:
            New dict of resolved rules

        Raises:
            ContextNotFoundError: If a context has no fragment
            InvalidRuleDefinitionError: If a fragment is not a mapping
        """
        if not self.has_context(contexts):
            return dict(self._rules)

        resolved = dict(self._fragment(DEFAULT_CONTEXT, required=False))

        for context in contexts:
            resolved.update(self._fragment(context, required=True))

        _LOGGER.debug(
            "Resolved %d rules for '%s' in contexts %s",
            len(resolved),
            self._owner,
            list(contexts),
        )
        return resolved

    def _fragment(self, context: str, required: bool) -> Mapping[str, Any]:
        if context not in self._rules:
            if required:
                raise ContextNotFoundError(self._owner, context)
            return {}

        fragment = self._rules[context]
        if fragment is None:
            return {}
        if not isinstance(fragment, Mapping):
            raise InvalidRuleDefinitionError(
                f"Context '{context}' of '{self._owner}' must map fields to rules, "
                f"got {type(fragment).__name__}"
            )
        return fragment

"""Contextual validator.

Resolves the rule set of the selected contexts, binds placeholder
replacements and delegates evaluation to a validation engine.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, ClassVar, Mapping, Sequence

from ..domain.interfaces import IEngineSession, IValidationEngine
from ..domain.services import ContextRuleResolver, ReplacementBinder
from ..domain.value_objects import MessageBag
from ..engine import VoluptuousValidationEngine
from .validation_result import ValidationResult

_LOGGER = logging.getLogger(__name__)

ConditionalRules = Callable[[IEngineSession], None]


class ContextualValidator:
    """Validator whose rules depend on the contexts it runs in.

    Rules are either flat (field -> rule expression) or keyed by context,
    with ``default`` always applied first and every added context overlaid
    in the order it was added.

    Rules, messages and the conditional-rule callback are normally passed to
    the constructor; a subclass may instead declare ``rules`` and
    ``messages`` as class attributes.

    Example:
        >>> validator = ContextualValidator(
        ...     {"first_name": "Chris"},
        ...     "create",
        ...     rules={
        ...         "default": {"first_name": "required", "last_name": "required"},
        ...         "create": {"first_name": "required|max:255"},
        ...     },
        ... )
        >>> validator.get_rules_in_context()
        {'first_name': 'required|max:255', 'last_name': 'required'}
        >>> validator.passes()
        False
        >>> validator.errors()["last_name"]
        ['The last name field is required.']
    """

    rules: ClassVar[Mapping[str, Any]] = {}
    messages: ClassVar[Mapping[str, str]] = {}

    def __init__(
        self,
        attributes: Mapping[str, Any],
        context: str | Sequence[str] | None = None,
        *,
        rules: Mapping[str, Any] | None = None,
        messages: Mapping[str, str] | None = None,
        conditional_rules: ConditionalRules | None = None,
        engine: IValidationEngine | None = None,
        name: str | None = None,
    ) -> None:
        """Initialize validator.

        Args:
            attributes: Field -> value mapping to validate
            context: Context name or names to add
            rules: Flat or contextual rule definitions
            messages: Custom messages keyed by ``field.rule`` or ``rule``
            conditional_rules: Receives the engine session before evaluation
            engine: Validation engine (voluptuous engine by default)
            name: Name reported in errors (class name by default)
        """
        self._attributes = dict(attributes)
        self._rules: Mapping[str, Any] = type(self).rules if rules is None else rules
        self._messages: Mapping[str, str] = (
            type(self).messages if messages is None else messages
        )
        self._conditional_rules = conditional_rules
        self._engine = engine if engine is not None else VoluptuousValidationEngine()
        self._contexts: list[str] = []
        self._binder = ReplacementBinder()
        self._name = name or type(self).__name__
        self._resolver = ContextRuleResolver(self._rules, self._name)
        self._result: ValidationResult | None = None

        if context:
            self.add_context(context)

    @classmethod
    def make(
        cls,
        attributes: Mapping[str, Any],
        context: str | Sequence[str] | None = None,
        **kwargs: Any,
    ) -> ContextualValidator:
        """Static shorthand for creating a new validator."""
        return cls(attributes, context, **kwargs)

    def set_attributes(self, attributes: Mapping[str, Any]) -> ContextualValidator:
        """Replace the attributes under validation."""
        self._attributes = dict(attributes)
        self._invalidate()
        return self

    def get_attributes(self) -> dict[str, Any]:
        return dict(self._attributes)

    def add_context(self, context: str | Sequence[str]) -> ContextualValidator:
        """Append one or more contexts, keeping insertion order.

        Unknown contexts are only detected when the rules are resolved.
        """
        for name in _as_context_list(context):
            if name in self._contexts:
                _LOGGER.warning(
                    "Context '%s' added more than once to '%s'",
                    name,
                    self._name,
                )
            self._contexts.append(name)
        self._invalidate()
        return self

    def set_context(self, context: str | Sequence[str]) -> ContextualValidator:
        """Replace every previously added context."""
        self._contexts = _as_context_list(context)
        self._invalidate()
        return self

    def get_contexts(self) -> list[str]:
        return list(self._contexts)

    def has_context(self) -> bool:
        """Return True if rules are read per context."""
        return self._resolver.has_context(self._contexts)

    def bind_replacement(
        self, field: str, replacement: Mapping[str, Any]
    ) -> ContextualValidator:
        """Bind values to the ``@token`` placeholders of a field's rule.

        Example:
            >>> validator.bind_replacement("email", {"id": 42})
        """
        self._binder.bind(field, replacement)
        self._invalidate()
        return self

    def get_replacement(self, field: str) -> dict[str, Any]:
        return self._binder.get(field)

    def get_rules_in_context(self) -> dict[str, Any]:
        """Return the rules of the selected contexts, before binding.

        Raises:
            ContextNotFoundError: If a selected context is not defined
        """
        return self._resolver.resolve(self._contexts)

    def bind_replacements(self, rules: Mapping[str, Any]) -> dict[str, Any]:
        """Return rules with every placeholder replaced by its bound value.

        Raises:
            ReplacementBindingError: If a placeholder has no bound value
        """
        return self._binder.apply(rules)

    def get_resolved_rules(self) -> dict[str, Any]:
        """Return the rules exactly as they are handed to the engine."""
        return self.bind_replacements(self.get_rules_in_context())

    def add_conditional_rules(self, session: IEngineSession) -> None:
        """Attach dynamic rules to the engine session before evaluation.

        Calls the ``conditional_rules`` callback when one was given;
        subclasses may override instead.
        """
        if self._conditional_rules is not None:
            self._conditional_rules(session)

    def validate(self) -> ValidationResult:
        """Run the engine over the resolved rules and cache the result."""
        rules = self.get_resolved_rules()
        session = self._engine.make(self._attributes, rules, self._messages)

        self.add_conditional_rules(session)

        if session.passes():
            self._result = ValidationResult(valid=True)
        else:
            self._result = ValidationResult(valid=False, messages=session.messages())

        _LOGGER.debug(
            "%s validated %d rules in contexts %s: %s",
            self._name,
            len(rules),
            self._contexts,
            "passed" if self._result.valid else "failed",
        )
        return self._result

    def passes(self) -> bool:
        """Perform a validation check against the attributes."""
        return self.validate().valid

    def fails(self) -> bool:
        return not self.passes()

    def errors(self) -> MessageBag:
        """Return the messages of the last run, validating first if needed."""
        if self._result is None:
            self.validate()
        return MessageBag(self._result.messages)

    def get_message_bag(self) -> MessageBag:
        return self.errors()

    def _invalidate(self) -> None:
        self._result = None


def _as_context_list(context: str | Sequence[str]) -> list[str]:
    if isinstance(context, str):
        return [context]
    return list(context)

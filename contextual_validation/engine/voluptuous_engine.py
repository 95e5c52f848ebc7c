"""Validation engine interpreting rule expressions with voluptuous."""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Mapping

import voluptuous as vol

from ..const import DEFAULT_MESSAGES, FALLBACK_MESSAGE, FLAG_RULES
from ..domain.interfaces import IValidationEngine
from ..domain.value_objects import ParsedRule, parse_rule_expression
from ..domain.exceptions import InvalidRuleDefinitionError, UnknownRuleError
from .rule_factories import (
    DEFAULT_RULE_FACTORIES,
    SIZE_RULES,
    RuleFactory,
    humanize,
    message_parameters,
    value_kind,
)
from .voluptuous_session import VoluptuousEngineSession

_LOGGER = logging.getLogger(__name__)

# Handled by the session itself rather than by a voluptuous validator
_SESSION_RULES = FLAG_RULES | {"required"}


class VoluptuousValidationEngine(IValidationEngine):
    """Default validation engine.

    Parses pipe-delimited rule strings (``"required|email|max:255"``) and
    maps every rule name to a voluptuous validator. Sequence expressions may
    mix rule strings with voluptuous validators or plain callables raising
    ``vol.Invalid``.

    Example:
        >>> engine = VoluptuousValidationEngine()
        >>> session = engine.make({"email": "nope"}, {"email": "required|email"})
        >>> session.passes()
        False
        >>> session.messages()["email"]
        ['The email must be a valid email address.']
    """

    def __init__(
        self,
        rule_factories: Mapping[str, RuleFactory] | None = None,
        default_messages: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize engine.

        Args:
            rule_factories: Extra or overriding rule factories
            default_messages: Extra or overriding message templates
        """
        self._factories: dict[str, RuleFactory] = dict(DEFAULT_RULE_FACTORIES)
        self._default_messages: dict[str, str] = dict(DEFAULT_MESSAGES)
        if rule_factories:
            self._factories.update(rule_factories)
        if default_messages:
            self._default_messages.update(default_messages)

    def extend(self, name: str, factory: RuleFactory, message: str | None = None) -> None:
        """Register a custom rule.

        Args:
            name: Rule name used in rule expressions
            factory: Receives (parameters, field, attributes) and returns a
                voluptuous validator
            message: Default message template for the rule
        """
        self._factories[name.lower()] = factory
        if message is not None:
            self._default_messages[name.lower()] = message
        _LOGGER.debug("Registered validation rule '%s'", name)

    def supports(self, name: str) -> bool:
        """Return True if the engine implements a rule name."""
        return name in _SESSION_RULES or name in self._factories

    def make(
        self,
        attributes: Mapping[str, Any],
        rules: Mapping[str, Any],
        messages: Mapping[str, str] | None = None,
    ) -> VoluptuousEngineSession:
        parsed = {field: self.parse(field, expression) for field, expression in rules.items()}
        return VoluptuousEngineSession(self, attributes, parsed, messages or {})

    def parse(self, field: str, expression: Any) -> list[ParsedRule]:
        """Parse a rule expression and check every rule is implemented.

        Built-in rules are created once here so malformed parameters
        (``max:ten``, ``between:1``, a broken ``regex``) are reported before
        any value is validated.

        Raises:
            UnknownRuleError: If a rule name has no factory
            InvalidRuleDefinitionError: If a built-in rule has bad parameters
        """
        parsed = parse_rule_expression(expression)
        for rule in parsed:
            if rule.is_native or rule.name in _SESSION_RULES:
                continue
            if rule.name not in self._factories:
                raise UnknownRuleError(rule.name, field)
            if self._factories[rule.name] is DEFAULT_RULE_FACTORIES.get(rule.name):
                self._create(rule, field, {})
        return parsed

    def build(
        self, rule: ParsedRule, field: str, attributes: Mapping[str, Any]
    ) -> Callable[[Any], Any]:
        """Return the voluptuous validator for a parsed rule."""
        if rule.is_native:
            return vol.Schema(rule.callback)
        return self._create(rule, field, attributes)

    def _create(
        self, rule: ParsedRule, field: str, attributes: Mapping[str, Any]
    ) -> Callable[[Any], Any]:
        try:
            return self._factories[rule.name](rule.parameters, field, attributes)
        except (ValueError, OverflowError, re.error) as err:
            raise InvalidRuleDefinitionError(
                f"Invalid parameters for rule '{rule.name}' on field '{field}': {err}"
            ) from err

    def message_for(
        self,
        field: str,
        rule: ParsedRule,
        value: Any,
        messages: Mapping[str, str],
        error: vol.Invalid | None = None,
    ) -> str:
        """Resolve and format the message for a failed rule.

        Lookup order: ``messages["field.rule"]``, ``messages["rule"]``, the
        engine's template for the rule, the error's own message for native
        rules, then a generic fallback.
        """
        template = messages.get(f"{field}.{rule.name}") or messages.get(rule.name)

        if template is None and rule.name in SIZE_RULES:
            template = self._default_messages.get(f"{rule.name}.{value_kind(value)}")
        if template is None:
            template = self._default_messages.get(rule.name)
        if template is None and rule.is_native and error is not None and error.msg:
            template = str(error.msg)
        if template is None:
            template = FALLBACK_MESSAGE

        replacements = {":attribute": humanize(field)}
        replacements.update(message_parameters(rule.name, rule.parameters))
        for placeholder, replacement in replacements.items():
            template = template.replace(placeholder, replacement)
        return template

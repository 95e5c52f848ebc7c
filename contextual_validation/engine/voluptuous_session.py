"""Validation session backed by voluptuous validators."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping

import voluptuous as vol

from ..const import FLAG_RULES, IMPLICIT_RULES
from ..domain.interfaces import IEngineSession
from ..domain.value_objects import MessageBag, ParsedRule

if TYPE_CHECKING:
    from .voluptuous_engine import VoluptuousValidationEngine

_LOGGER = logging.getLogger(__name__)


def is_empty(value: Any) -> bool:
    """Return True for values that do not satisfy ``required``."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return not value
    return False


class VoluptuousEngineSession(IEngineSession):
    """One validation run over a set of attributes.

    Rules are evaluated field by field in declaration order:
    - ``required`` fails for absent, None or blank values and stops the field
    - other rules are skipped for absent or blank values (except ``accepted``)
    - ``nullable`` skips the remaining rules when the value is None
    - ``bail`` stops the field at its first failing rule
    Every failing rule adds one message for the field.
    """

    def __init__(
        self,
        engine: VoluptuousValidationEngine,
        attributes: Mapping[str, Any],
        rules: dict[str, list[ParsedRule]],
        messages: Mapping[str, str],
    ) -> None:
        """Initialize session.

        Args:
            engine: Engine providing rule factories and message templates
            attributes: Field -> value mapping under validation
            rules: Field -> parsed rules
            messages: Custom messages keyed by ``field.rule`` or ``rule``
        """
        self._engine = engine
        self._attributes = dict(attributes)
        self._rules = rules
        self._messages = dict(messages)
        self._conditional: list[
            tuple[tuple[str, ...], list[ParsedRule], Callable[[Mapping[str, Any]], bool]]
        ] = []
        self._after: list[Callable[[IEngineSession], None]] = []
        self._errors: MessageBag | None = None

    def get_attributes(self) -> Mapping[str, Any]:
        return dict(self._attributes)

    def sometimes(
        self,
        fields: str | Iterable[str],
        rules: Any,
        predicate: Callable[[Mapping[str, Any]], bool],
    ) -> VoluptuousEngineSession:
        field_names = (fields,) if isinstance(fields, str) else tuple(fields)
        parsed = self._engine.parse(", ".join(field_names), rules)
        self._conditional.append((field_names, parsed, predicate))
        self._errors = None
        return self

    def after(self, callback: Callable[[IEngineSession], None]) -> VoluptuousEngineSession:
        self._after.append(callback)
        self._errors = None
        return self

    def add_error(self, field: str, message: str) -> None:
        if self._errors is None:
            self._errors = MessageBag()
        self._errors.add(field, message)

    def passes(self) -> bool:
        self._errors = MessageBag()

        for field, rules in self._rules_for_run().items():
            self._validate_field(field, rules)

        for callback in self._after:
            callback(self)

        passed = self._errors.is_empty()
        _LOGGER.debug(
            "Validated %d fields: %s",
            len(self._rules),
            "passed" if passed else f"{self._errors.count()} messages",
        )
        return passed

    def messages(self) -> MessageBag:
        if self._errors is None:
            self.passes()
        return MessageBag(self._errors)

    def _rules_for_run(self) -> dict[str, list[ParsedRule]]:
        rules = {field: list(parsed) for field, parsed in self._rules.items()}

        for fields, parsed, predicate in self._conditional:
            if not predicate(self.get_attributes()):
                continue
            for field in fields:
                rules.setdefault(field, []).extend(parsed)

        return rules

    def _validate_field(self, field: str, rules: list[ParsedRule]) -> None:
        names = {rule.name for rule in rules}
        value = self._attributes.get(field)
        empty = is_empty(value)

        if "nullable" in names and value is None:
            return

        for rule in rules:
            if rule.name in FLAG_RULES:
                continue

            if rule.name == "required":
                if empty:
                    self._fail(field, rule, value)
                    return
                continue

            if empty and rule.name not in IMPLICIT_RULES:
                continue

            validator = self._engine.build(rule, field, self._attributes)
            try:
                validator(value)
            except vol.Invalid as err:
                self._fail(field, rule, value, err)
                if "bail" in names:
                    return

    def _fail(
        self,
        field: str,
        rule: ParsedRule,
        value: Any,
        error: vol.Invalid | None = None,
    ) -> None:
        message = self._engine.message_for(field, rule, value, self._messages, error)
        self._errors.add(field, message)

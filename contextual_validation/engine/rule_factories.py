"""Rule factories for the voluptuous validation engine.

Each factory receives the rule parameters, the field name and the full
attribute mapping and returns a voluptuous validator (any callable that
raises ``vol.Invalid`` on failure).
"""

from __future__ import annotations

import datetime
import re
from typing import Any, Callable, Mapping, Sequence

import voluptuous as vol

from ..const import CONFIRMATION_SUFFIX

RuleFactory = Callable[[Sequence[str], str, Mapping[str, Any]], Callable[[Any], Any]]

# Rules whose message depends on the type of the value
SIZE_RULES = frozenset({"min", "max", "between", "size"})

_ACCEPTED_VALUES = ["yes", "on", "1", 1, True, "true"]
_BOOLEAN_VALUES = [True, False, 0, 1, "0", "1"]
_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")


def is_numeric(value: Any) -> bool:
    """Return True for real numbers (booleans excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def value_kind(value: Any) -> str:
    """Return the message variant for a size rule: numeric, array or string."""
    if is_numeric(value):
        return "numeric"
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return "array"
    return "string"


def humanize(field: str) -> str:
    """Turn a field name into the form used in messages."""
    return field.replace("_", " ")


def _require_parameters(name: str, parameters: Sequence[str], count: int) -> None:
    if len(parameters) < count:
        raise ValueError(
            f"Validation rule '{name}' requires at least {count} parameter(s)"
        )


def _number(raw: str) -> float | int:
    try:
        return int(raw)
    except ValueError:
        return float(raw)


def _sized(minimum: float | int | None, maximum: float | int | None) -> Callable[[Any], Any]:
    numeric = vol.Range(min=minimum, max=maximum)
    length = vol.Length(
        min=None if minimum is None else int(minimum),
        max=None if maximum is None else int(maximum),
    )

    def validator(value: Any) -> Any:
        if is_numeric(value):
            return numeric(value)
        return length(value)

    return validator


def _string(parameters, field, attributes):
    return vol.Schema(str)


def _integer(parameters, field, attributes):
    def validator(value: Any) -> Any:
        if isinstance(value, bool):
            raise vol.Invalid("expected an integer")
        if isinstance(value, int):
            return value
        if isinstance(value, str) and _INTEGER_PATTERN.match(value.strip()):
            return value
        raise vol.Invalid("expected an integer")

    return validator


def _numeric(parameters, field, attributes):
    coerce = vol.Coerce(float)

    def validator(value: Any) -> Any:
        if isinstance(value, bool):
            raise vol.Invalid("expected a number")
        coerce(value)
        return value

    return validator


def _boolean(parameters, field, attributes):
    return vol.In(_BOOLEAN_VALUES)


def _accepted(parameters, field, attributes):
    return vol.In(_ACCEPTED_VALUES)


def _email(parameters, field, attributes):
    return vol.Email()


def _url(parameters, field, attributes):
    return vol.Url()


def _date(parameters, field, attributes):
    date_format = parameters[0] if parameters else vol.Date.DEFAULT_FORMAT
    parse = vol.Date(date_format)

    def validator(value: Any) -> Any:
        if isinstance(value, (datetime.date, datetime.datetime)):
            return value
        return parse(value)

    return validator


def _alpha(parameters, field, attributes):
    return vol.Match(r"^[^\W\d_]+$")


def _alpha_num(parameters, field, attributes):
    return vol.Match(r"^[^\W_]+$")


def _alpha_dash(parameters, field, attributes):
    return vol.Match(r"^[\w-]+$")


def _regex(parameters, field, attributes):
    _require_parameters("regex", parameters, 1)
    pattern = parameters[0]
    # Accept delimited patterns such as /^[a-z]+$/
    if len(pattern) > 1 and pattern.startswith("/") and pattern.endswith("/"):
        pattern = pattern[1:-1]
    return vol.Match(pattern)


def _in(parameters, field, attributes):
    return vol.All(vol.Coerce(str), vol.In(list(parameters)))


def _not_in(parameters, field, attributes):
    return vol.All(vol.Coerce(str), vol.NotIn(list(parameters)))


def _min(parameters, field, attributes):
    _require_parameters("min", parameters, 1)
    return _sized(_number(parameters[0]), None)


def _max(parameters, field, attributes):
    _require_parameters("max", parameters, 1)
    return _sized(None, _number(parameters[0]))


def _between(parameters, field, attributes):
    _require_parameters("between", parameters, 2)
    return _sized(_number(parameters[0]), _number(parameters[1]))


def _size(parameters, field, attributes):
    _require_parameters("size", parameters, 1)
    size = _number(parameters[0])
    return _sized(size, size)


def _digits(parameters, field, attributes):
    _require_parameters("digits", parameters, 1)
    return vol.All(vol.Coerce(str), vol.Match(rf"^\d{{{int(parameters[0])}}}$"))


def _same(parameters, field, attributes):
    _require_parameters("same", parameters, 1)
    other = attributes.get(parameters[0])

    def validator(value: Any) -> Any:
        if value != other:
            raise vol.Invalid(f"must match {parameters[0]}")
        return value

    return validator


def _different(parameters, field, attributes):
    _require_parameters("different", parameters, 1)
    other = attributes.get(parameters[0])

    def validator(value: Any) -> Any:
        if value == other:
            raise vol.Invalid(f"must differ from {parameters[0]}")
        return value

    return validator


def _confirmed(parameters, field, attributes):
    return _same([f"{field}{CONFIRMATION_SUFFIX}"], field, attributes)


DEFAULT_RULE_FACTORIES: dict[str, RuleFactory] = {
    "string": _string,
    "integer": _integer,
    "numeric": _numeric,
    "boolean": _boolean,
    "accepted": _accepted,
    "email": _email,
    "url": _url,
    "date": _date,
    "alpha": _alpha,
    "alpha_num": _alpha_num,
    "alpha_dash": _alpha_dash,
    "regex": _regex,
    "in": _in,
    "not_in": _not_in,
    "min": _min,
    "max": _max,
    "between": _between,
    "size": _size,
    "digits": _digits,
    "same": _same,
    "different": _different,
    "confirmed": _confirmed,
}


def message_parameters(name: str, parameters: Sequence[str]) -> dict[str, str]:
    """Return the ``:placeholder`` -> value pairs for a rule's message."""
    if name in ("min", "max") and parameters:
        return {f":{name}": parameters[0]}
    if name == "between" and len(parameters) >= 2:
        return {":min": parameters[0], ":max": parameters[1]}
    if name == "size" and parameters:
        return {":size": parameters[0]}
    if name == "digits" and parameters:
        return {":digits": parameters[0]}
    if name in ("same", "different") and parameters:
        return {":other": humanize(parameters[0])}
    if name in ("in", "not_in"):
        return {":values": ", ".join(parameters)}
    return {}

"""ParsedRule value object.

One rule taken out of a rule expression, e.g. ``max:255`` becomes
``ParsedRule(name="max", parameters=("255",))``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from ...const import ARGUMENT_DELIMITER, PARAMETER_DELIMITER, RULE_DELIMITER

# Rules whose single parameter may itself contain the argument delimiter
_UNSPLIT_PARAMETER_RULES = frozenset({"regex"})


@dataclass(frozen=True)
class ParsedRule:
    """Immutable parsed validation rule.

    Attributes:
        name: Rule name (lower case), or the callable's name for native rules
        parameters: Rule parameters in declaration order
        callback: Engine-native validator callable, if the rule was not a string
    """

    name: str
    parameters: tuple[str, ...] = ()
    callback: Callable[[Any], Any] | None = field(default=None, compare=False)

    @property
    def is_native(self) -> bool:
        """Return True if the rule wraps an engine-native callable."""
        return self.callback is not None

    @classmethod
    def from_string(cls, rule: str) -> ParsedRule:
        """Parse a single ``name[:param,param]`` rule.

        Example:
            >>> ParsedRule.from_string("between:1,10")
            ParsedRule(name='between', parameters=('1', '10'), callback=None)
        """
        name, _, raw_parameters = rule.strip().partition(PARAMETER_DELIMITER)
        name = name.strip().lower()

        if not raw_parameters:
            return cls(name=name)

        if name in _UNSPLIT_PARAMETER_RULES:
            return cls(name=name, parameters=(raw_parameters,))

        parameters = tuple(
            part.strip() for part in raw_parameters.split(ARGUMENT_DELIMITER)
        )
        return cls(name=name, parameters=parameters)


def parse_rule_expression(expression: Any) -> list[ParsedRule]:
    """Split a rule expression into parsed rules.

    Args:
        expression: Pipe-delimited rule string, or a sequence of rule
            strings and callables

    Returns:
        Parsed rules in declaration order (empty segments are dropped)

    Raises:
        TypeError: If the expression or one of its items has an unsupported type
    """
    if isinstance(expression, str):
        items: list[Any] = expression.split(RULE_DELIMITER)
    elif isinstance(expression, (list, tuple)):
        items = list(expression)
    elif callable(expression):
        items = [expression]
    else:
        raise TypeError(
            f"Rule expression must be a string, sequence or callable, "
            f"got {type(expression).__name__}"
        )

    rules = []
    for item in items:
        if isinstance(item, str):
            if item.strip():
                rules.append(ParsedRule.from_string(item))
        elif callable(item):
            name = getattr(item, "__name__", type(item).__name__)
            rules.append(ParsedRule(name=name, callback=item))
        else:
            raise TypeError(
                f"Rule must be a string or callable, got {type(item).__name__}"
            )
    return rules

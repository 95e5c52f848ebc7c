"""Value objects for contextual validation.

Immutable or self-contained primitives shared by the validators and the
validation engine.
"""

from .message_bag import MessageBag
from .parsed_rule import ParsedRule, parse_rule_expression

__all__ = [
    "MessageBag",
    "ParsedRule",
    "parse_rule_expression",
]

"""Custom exceptions for contextual validation.

These represent configuration mistakes in a validator definition or in the
way a validator is used. They are raised immediately and are never reported
as validation messages; a value failing a rule is reported through
``passes()`` / ``errors()`` instead.
"""

from __future__ import annotations


class ContextualValidationError(Exception):
    """Base class for validator configuration errors."""


class ContextNotFoundError(ContextualValidationError):
    """A selected context has no fragment in the rule definitions."""

    def __init__(self, validator_name: str, context: str) -> None:
        self.validator_name = validator_name
        self.context = context
        super().__init__(
            f"'{validator_name}' does not contain the validation context '{context}'"
        )


class ReplacementBindingError(ContextualValidationError):
    """A rule expression has placeholders without bound replacement values."""

    def __init__(self, rule: str, field: str, expected: int) -> None:
        self.rule = rule
        self.field = field
        self.expected = expected
        noun = "replacement" if expected == 1 else "replacements"
        super().__init__(
            f"Invalid replacement count in rule '{rule}' for field '{field}'; "
            f"Expecting '{expected}' bound {noun}"
        )


class NoValidatorsError(ContextualValidationError):
    """A grouped validator was run without any validators."""

    def __init__(
        self,
        message: str = "No validators provided: You must provide at least one validator",
    ) -> None:
        super().__init__(message)


class InvalidRuleDefinitionError(ContextualValidationError):
    """Rule definitions are malformed (bad fragment, bad rule parameters or bad config file)."""


class UnknownRuleError(ContextualValidationError):
    """The validation engine has no implementation for a rule name."""

    def __init__(self, rule: str, field: str) -> None:
        self.rule = rule
        self.field = field
        super().__init__(f"Unknown validation rule '{rule}' for field '{field}'")

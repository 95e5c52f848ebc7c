"""Context-aware validation rule sets.

Define rule sets per context ("create", "edit", ...) on top of a default
set, bind values into ``@token`` placeholders, and combine several
validators into one pass/fail outcome.

Example:
    >>> from contextual_validation import ContextualValidator, GroupedValidator
    >>> person = ContextualValidator(
    ...     {"first_name": "Chris"},
    ...     "create",
    ...     rules={
    ...         "default": {"first_name": "required", "last_name": "required"},
    ...         "create": {"first_name": "required|max:255"},
    ...     },
    ... )
    >>> GroupedValidator([person]).passes()
    False
"""

from .config_loader import load_rule_config, parse_rule_config
from .domain.interfaces import IEngineSession, IValidationEngine, ValidatableProtocol
from .domain.value_objects import MessageBag
from .engine import VoluptuousValidationEngine
from .domain.exceptions import (
    ContextNotFoundError,
    ContextualValidationError,
    InvalidRuleDefinitionError,
    NoValidatorsError,
    ReplacementBindingError,
    UnknownRuleError,
)
from .validation import (
    ContextualValidator,
    GroupedValidator,
    NativeValidatorAdapter,
    ValidationResult,
)
from .validation.validator_definition import ValidatorDefinition

__all__ = [
    "ContextNotFoundError",
    "ContextualValidationError",
    "ContextualValidator",
    "GroupedValidator",
    "IEngineSession",
    "IValidationEngine",
    "InvalidRuleDefinitionError",
    "MessageBag",
    "NativeValidatorAdapter",
    "NoValidatorsError",
    "ReplacementBindingError",
    "UnknownRuleError",
    "ValidatableProtocol",
    "ValidationResult",
    "ValidatorDefinition",
    "VoluptuousValidationEngine",
    "load_rule_config",
    "parse_rule_config",
]

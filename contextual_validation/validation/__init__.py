"""Validators built on context-aware rule resolution.

- ContextualValidator: rules layered per context, with placeholder binding
- GroupedValidator: runs several validators and merges their messages
- NativeValidatorAdapter: lets a raw engine session join a group
- ValidationResult: outcome plus messages
"""

from .validation_result import ValidationResult
from .contextual_validator import ContextualValidator
from .grouped_validator import GroupedValidator
from .native_validator_adapter import NativeValidatorAdapter

__all__ = [
    "ValidationResult",
    "ContextualValidator",
    "GroupedValidator",
    "NativeValidatorAdapter",
]

"""Constants for contextual validation.

Reserved rule-definition keys, the placeholder token syntax and the default
message templates used by the bundled validation engine.
"""

from __future__ import annotations

import re

# Rule definition keys
DEFAULT_CONTEXT = "default"

# Rule expression syntax
RULE_DELIMITER = "|"
PARAMETER_DELIMITER = ":"
ARGUMENT_DELIMITER = ","
PLACEHOLDER_PATTERN = re.compile(r"@(\w+)")

# Suffix looked up by the "confirmed" rule
CONFIRMATION_SUFFIX = "_confirmation"

# Rules that run even when the attribute is absent or empty
IMPLICIT_RULES = frozenset({"required", "accepted"})

# Rules that only change how the remaining rules are evaluated
FLAG_RULES = frozenset({"bail", "nullable"})

# Default message templates (":attribute" and rule parameters are substituted)
DEFAULT_MESSAGES: dict[str, str] = {
    "required": "The :attribute field is required.",
    "string": "The :attribute must be a string.",
    "integer": "The :attribute must be an integer.",
    "numeric": "The :attribute must be a number.",
    "boolean": "The :attribute field must be true or false.",
    "accepted": "The :attribute must be accepted.",
    "email": "The :attribute must be a valid email address.",
    "url": "The :attribute format is invalid.",
    "date": "The :attribute is not a valid date.",
    "alpha": "The :attribute may only contain letters.",
    "alpha_num": "The :attribute may only contain letters and numbers.",
    "alpha_dash": "The :attribute may only contain letters, numbers, dashes and underscores.",
    "regex": "The :attribute format is invalid.",
    "in": "The selected :attribute is invalid.",
    "not_in": "The selected :attribute is invalid.",
    "digits": "The :attribute must be :digits digits.",
    "same": "The :attribute and :other must match.",
    "different": "The :attribute and :other must be different.",
    "confirmed": "The :attribute confirmation does not match.",
    "min.numeric": "The :attribute must be at least :min.",
    "min.string": "The :attribute must be at least :min characters.",
    "min.array": "The :attribute must have at least :min items.",
    "max.numeric": "The :attribute may not be greater than :max.",
    "max.string": "The :attribute may not be greater than :max characters.",
    "max.array": "The :attribute may not have more than :max items.",
    "between.numeric": "The :attribute must be between :min and :max.",
    "between.string": "The :attribute must be between :min and :max characters.",
    "between.array": "The :attribute must have between :min and :max items.",
    "size.numeric": "The :attribute must be :size.",
    "size.string": "The :attribute must be :size characters.",
    "size.array": "The :attribute must contain :size items.",
}

FALLBACK_MESSAGE = "The :attribute is invalid."

# Rule configuration file
SUPPORTED_CONFIG_VERSION_PREFIX = "1."

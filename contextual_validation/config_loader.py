"""Configuration loader for validator rule definitions."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import voluptuous as vol
import yaml

from .const import SUPPORTED_CONFIG_VERSION_PREFIX
from .domain.exceptions import InvalidRuleDefinitionError
from .validation.validator_definition import ValidatorDefinition

_LOGGER = logging.getLogger(__name__)

RULE_EXPRESSION_SCHEMA = vol.Any(str, [str])

RULES_SCHEMA = vol.Schema(
    {str: vol.Any(RULE_EXPRESSION_SCHEMA, {str: RULE_EXPRESSION_SCHEMA}, None)}
)

VALIDATOR_SCHEMA = vol.Schema(
    {
        vol.Required("rules"): RULES_SCHEMA,
        vol.Optional("messages", default={}): {str: str},
    }
)

CONFIG_SCHEMA = vol.Schema(
    {
        vol.Required("version"): vol.Coerce(str),
        vol.Required("validators"): {str: VALIDATOR_SCHEMA},
    }
)


def load_rule_config(path: str | Path) -> dict[str, ValidatorDefinition]:
    """Load validator definitions from a YAML file.

    Example file:
        version: "1.0"
        validators:
          person:
            rules:
              default:
                first_name: required
              create:
                first_name: required|max:255
            messages:
              first_name.required: Please tell us your first name.

    Args:
        path: Path to the YAML file

    Returns:
        Validator name -> ValidatorDefinition

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidRuleDefinitionError: If the file is not valid YAML or does
            not match the expected structure
    """
    config_file = Path(path)

    if not config_file.exists():
        raise FileNotFoundError(f"Rule configuration file not found: {config_file}")

    try:
        config = yaml.safe_load(config_file.read_text(encoding="utf-8"))
    except yaml.YAMLError as err:
        raise InvalidRuleDefinitionError(f"Invalid YAML in {config_file}: {err}") from err

    definitions = parse_rule_config(config)

    _LOGGER.info(
        "Loaded %d validator definitions from %s", len(definitions), config_file
    )
    return definitions


def parse_rule_config(config: Any) -> dict[str, ValidatorDefinition]:
    """Validate an already-loaded configuration mapping.

    Raises:
        InvalidRuleDefinitionError: If the configuration is invalid
    """
    if not config:
        raise InvalidRuleDefinitionError("Rule configuration is empty")

    try:
        validated = CONFIG_SCHEMA(config)
    except vol.Invalid as err:
        raise InvalidRuleDefinitionError(f"Invalid rule configuration: {err}") from err

    version = validated["version"]
    if not version.startswith(SUPPORTED_CONFIG_VERSION_PREFIX):
        raise InvalidRuleDefinitionError(
            f"Rule configuration version {version} not supported. "
            f"Only version {SUPPORTED_CONFIG_VERSION_PREFIX}x is supported."
        )

    return {
        name: ValidatorDefinition(
            name=name,
            rules=validator["rules"],
            messages=validator["messages"],
        )
        for name, validator in validated["validators"].items()
    }

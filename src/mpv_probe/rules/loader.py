"""Rule set file loading and validation.

This module provides functions to load YAML rule files and validate them
using Pydantic models. A rule file looks like:

    schema_version: 1
    unsupported_codecs: [h263, mpeg2video, vc1]
    unsupported_container_extensions: [.mov, .avi]
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from mpv_probe.classification.codecs import (
    DEFAULT_RULES,
    LEGACY_CONVERSION_EXTENSIONS,
    LEGACY_UNSUPPORTED_CODECS,
    UnsupportedRuleSet,
)
from mpv_probe.config.models import RulesConfig

# Current maximum supported schema version
MAX_SCHEMA_VERSION = 1


class RulesValidationError(Exception):
    """Error during rule file validation."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


class RuleSetModel(BaseModel):
    """Pydantic model for a rule set file."""

    model_config = ConfigDict(extra="forbid")

    schema_version: int = Field(default=1, ge=1, le=MAX_SCHEMA_VERSION)
    unsupported_codecs: list[str] = Field(default_factory=list)
    unsupported_container_extensions: list[str] = Field(default_factory=list)

    @field_validator("unsupported_codecs", "unsupported_container_extensions")
    @classmethod
    def validate_entries(cls, v: list[str]) -> list[str]:
        """Reject blank entries."""
        for entry in v:
            if not entry.strip(" ."):
                raise ValueError("entries must not be blank")
        return v


def load_rules(rules_path: Path) -> UnsupportedRuleSet:
    """Load and validate a rule set from a YAML file.

    Args:
        rules_path: Path to the YAML rule file.

    Returns:
        Validated, canonicalized rule set.

    Raises:
        RulesValidationError: If the rule file is invalid or unreadable.
        FileNotFoundError: If the rule file does not exist.
    """
    if not rules_path.exists():
        raise FileNotFoundError(f"Rules file not found: {rules_path}")

    try:
        with open(rules_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise RulesValidationError(f"Invalid YAML syntax: {e}") from e
    except UnicodeDecodeError as e:
        raise RulesValidationError(f"Rules file is not UTF-8 text: {e}") from e
    except OSError as e:
        raise RulesValidationError(f"Cannot read rules file: {e}") from e

    if data is None:
        raise RulesValidationError("Rules file is empty")

    if not isinstance(data, dict):
        raise RulesValidationError("Rules file must be a YAML mapping")

    return load_rules_from_dict(data)


def load_rules_from_dict(data: dict[str, Any]) -> UnsupportedRuleSet:
    """Load and validate a rule set from a dictionary.

    Args:
        data: Dictionary containing rule configuration.

    Returns:
        Validated, canonicalized rule set.

    Raises:
        RulesValidationError: If the data is invalid.
    """
    try:
        model = RuleSetModel.model_validate(data)
    except ValidationError as e:
        raise RulesValidationError(*_format_validation_error(e)) from e

    return UnsupportedRuleSet.from_lists(
        model.unsupported_codecs, model.unsupported_container_extensions
    )


def _format_validation_error(error: ValidationError) -> tuple[str, str | None]:
    """Format a Pydantic validation error into a user-friendly message."""
    errors = error.errors()
    if errors:
        first_error = errors[0]
        loc = ".".join(str(x) for x in first_error.get("loc", []))
        msg = first_error.get("msg", str(error))
        if loc:
            return f"Rules validation failed: {loc}: {msg}", loc
        return f"Rules validation failed: {msg}", None

    return f"Rules validation failed: {error}", None


def resolve_rules(config: RulesConfig) -> UnsupportedRuleSet:
    """Pick the rule set a run should use.

    A rules file wins over inline lists. An inline list that is not set
    falls back to the matching built-in list.

    Raises:
        RulesValidationError: If the rules file is invalid.
        FileNotFoundError: If the rules file does not exist.
    """
    if config.file is not None:
        return load_rules(config.file)

    if (
        config.unsupported_codecs is None
        and config.unsupported_container_extensions is None
    ):
        return DEFAULT_RULES

    return load_rules_from_dict(
        {
            "unsupported_codecs": (
                config.unsupported_codecs
                if config.unsupported_codecs is not None
                else list(LEGACY_UNSUPPORTED_CODECS)
            ),
            "unsupported_container_extensions": (
                config.unsupported_container_extensions
                if config.unsupported_container_extensions is not None
                else list(LEGACY_CONVERSION_EXTENSIONS)
            ),
        }
    )

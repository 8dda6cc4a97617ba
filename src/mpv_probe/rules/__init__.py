"""Rule set files: YAML loading with Pydantic validation."""

from mpv_probe.rules.loader import (
    MAX_SCHEMA_VERSION,
    RuleSetModel,
    RulesValidationError,
    load_rules,
    load_rules_from_dict,
    resolve_rules,
)

__all__ = [
    "MAX_SCHEMA_VERSION",
    "RuleSetModel",
    "RulesValidationError",
    "load_rules",
    "load_rules_from_dict",
    "resolve_rules",
]

"""Tests for rules/loader.py module."""

from pathlib import Path

import pytest

from mpv_probe.classification.codecs import DEFAULT_RULES
from mpv_probe.config.models import RulesConfig
from mpv_probe.rules import (
    RulesValidationError,
    load_rules,
    load_rules_from_dict,
    resolve_rules,
)


class TestLoadRulesFromDict:
    """Tests for load_rules_from_dict function."""

    def test_valid_rules(self) -> None:
        """Entries are canonicalized into a rule set."""
        rules = load_rules_from_dict(
            {
                "schema_version": 1,
                "unsupported_codecs": ["H263", "vc1"],
                "unsupported_container_extensions": ["MOV"],
            }
        )

        assert rules.unsupported_codecs == frozenset({"h.263", "vc.1"})
        assert rules.unsupported_container_extensions == frozenset({".mov"})

    def test_missing_lists_default_to_empty(self) -> None:
        """Omitted lists produce empty rule sets."""
        rules = load_rules_from_dict({"schema_version": 1})

        assert rules.unsupported_codecs == frozenset()
        assert rules.unsupported_container_extensions == frozenset()

    def test_unknown_field_rejected(self) -> None:
        """Typos in field names are errors."""
        with pytest.raises(RulesValidationError) as exc_info:
            load_rules_from_dict({"unsupported_codec": ["h263"]})

        assert exc_info.value.field == "unsupported_codec"
        assert "Rules validation failed" in exc_info.value.message

    def test_unsupported_schema_version(self) -> None:
        """Future schema versions are rejected."""
        with pytest.raises(RulesValidationError) as exc_info:
            load_rules_from_dict({"schema_version": 2})

        assert exc_info.value.field == "schema_version"

    def test_blank_entry_rejected(self) -> None:
        """Blank list entries are errors rather than silently dropped."""
        with pytest.raises(RulesValidationError) as exc_info:
            load_rules_from_dict({"unsupported_container_extensions": [" . "]})

        assert "must not be blank" in exc_info.value.message

    def test_wrong_type_rejected(self) -> None:
        """A string instead of a list is an error."""
        with pytest.raises(RulesValidationError):
            load_rules_from_dict({"unsupported_codecs": "h263"})


class TestLoadRules:
    """Tests for load_rules function."""

    def test_loads_yaml_file(self, temp_dir: Path) -> None:
        """A YAML rules file is parsed and validated."""
        rules_file = temp_dir / "rules.yaml"
        rules_file.write_text(
            "schema_version: 1\n"
            "unsupported_codecs: [h263, mpeg2video]\n"
            "unsupported_container_extensions: [.avi]\n"
        )

        rules = load_rules(rules_file)

        assert rules.unsupported_codecs == frozenset({"h.263", "mpeg.2video"})
        assert rules.unsupported_container_extensions == frozenset({".avi"})

    def test_missing_file(self, temp_dir: Path) -> None:
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_rules(temp_dir / "missing.yaml")

    def test_empty_file(self, temp_dir: Path) -> None:
        """An empty file is an error."""
        rules_file = temp_dir / "rules.yaml"
        rules_file.write_text("")

        with pytest.raises(RulesValidationError, match="empty"):
            load_rules(rules_file)

    def test_non_mapping(self, temp_dir: Path) -> None:
        """A top-level list is an error."""
        rules_file = temp_dir / "rules.yaml"
        rules_file.write_text("- h263\n")

        with pytest.raises(RulesValidationError, match="mapping"):
            load_rules(rules_file)

    def test_invalid_yaml(self, temp_dir: Path) -> None:
        """Syntax errors are reported as validation errors."""
        rules_file = temp_dir / "rules.yaml"
        rules_file.write_text("unsupported_codecs: [h263\n")

        with pytest.raises(RulesValidationError, match="Invalid YAML"):
            load_rules(rules_file)

    def test_directory_rejected(self, temp_dir: Path) -> None:
        """A directory in place of the file is an unreadable rules file."""
        with pytest.raises(RulesValidationError, match="Cannot read"):
            load_rules(temp_dir)

    def test_non_utf8_rejected(self, temp_dir: Path) -> None:
        rules_file = temp_dir / "rules.yaml"
        rules_file.write_bytes(b"unsupported_codecs: [h\xff263]\n")

        with pytest.raises(RulesValidationError, match="UTF-8"):
            load_rules(rules_file)


class TestResolveRules:
    """Tests for resolve_rules function."""

    def test_defaults(self) -> None:
        """No file and no inline lists gives the built-in rules."""
        assert resolve_rules(RulesConfig()) is DEFAULT_RULES

    def test_file_wins_over_inline_lists(self, temp_dir: Path) -> None:
        """A rules file takes precedence."""
        rules_file = temp_dir / "rules.yaml"
        rules_file.write_text("unsupported_codecs: [vc1]\n")

        rules = resolve_rules(
            RulesConfig(unsupported_codecs=["h263"], file=rules_file)
        )

        assert rules.unsupported_codecs == frozenset({"vc.1"})

    def test_inline_list_with_default_for_other(self) -> None:
        """An unset inline list falls back to the built-in list."""
        rules = resolve_rules(RulesConfig(unsupported_codecs=["vc1"]))

        assert rules.unsupported_codecs == frozenset({"vc.1"})
        assert (
            rules.unsupported_container_extensions
            == DEFAULT_RULES.unsupported_container_extensions
        )

    def test_empty_inline_list_disables_rule(self) -> None:
        """An explicitly empty list means nothing is unsupported."""
        rules = resolve_rules(RulesConfig(unsupported_container_extensions=[]))

        assert rules.unsupported_container_extensions == frozenset()
        assert rules.unsupported_codecs == DEFAULT_RULES.unsupported_codecs

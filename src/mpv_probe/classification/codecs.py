"""Codec canonicalization and the unsupported-format rule set.

This module is the single source of truth for how codec identifiers are
compared. Both probed codecs and rule entries go through
canonicalize_codec() before any set membership check, so "h263", "H263"
and "h.263" are the same identifier regardless of which side spells it
which way.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

_FIRST_DIGIT_RUN = re.compile(r"\d+")

# mpv describes codecs as "H.263 / H.263-1996" or "h264 (H.264 / AVC)"
_CODEC_TOKEN_SEPARATORS = re.compile(r"[/(),]")


def canonicalize_codec(raw: str) -> str:
    """Canonicalize a codec identifier for comparison.

    Lowercases and strips the identifier, then inserts a dot before the
    first digit run when that run directly follows a letter:
    "H263" -> "h.263", "h.263" -> "h.263", "vc1" -> "vc.1".

    Only the first digit run is considered. The function is idempotent.

    Args:
        raw: Codec name as reported by the player or written in a rule.

    Returns:
        Canonical identifier ("" for blank input).
    """
    normalized = raw.casefold().strip()
    match = _FIRST_DIGIT_RUN.search(normalized)
    if match is None or match.start() == 0:
        return normalized
    if not normalized[match.start() - 1].isalpha():
        return normalized
    return f"{normalized[: match.start()]}.{normalized[match.start():]}"


def codec_identifiers(raw: str) -> frozenset[str]:
    """Canonical identifiers contained in a player codec description.

    The whole string and each "/"-, ","- or parenthesis-separated token are
    canonicalized, e.g. "h264 (H.264 / AVC)" -> {"h.264 (h.264 / avc)",
    "h.264", "avc"}.

    Args:
        raw: Codec description from the player.

    Returns:
        Non-empty canonical identifiers.
    """
    identifiers = {canonicalize_codec(raw)}
    identifiers.update(
        canonicalize_codec(token) for token in _CODEC_TOKEN_SEPARATORS.split(raw)
    )
    identifiers.discard("")
    return frozenset(identifiers)


def normalize_extension(raw: str) -> str:
    """Lowercase an extension and ensure a single leading dot ("MOV" -> ".mov")."""
    stripped = raw.strip().lower().lstrip(".")
    return f".{stripped}" if stripped else ""


@dataclass(frozen=True)
class UnsupportedRuleSet:
    """Codecs and containers the legacy pipeline could not play directly.

    Entries are canonicalized on construction, so rules may be written as
    "h263" or "H.263" and ".mov" or "MOV".
    """

    unsupported_codecs: frozenset[str] = field(default_factory=frozenset)
    unsupported_container_extensions: frozenset[str] = field(
        default_factory=frozenset
    )

    def __post_init__(self) -> None:
        """Canonicalize entries."""
        codecs = frozenset(
            canonicalize_codec(c) for c in self.unsupported_codecs if c.strip()
        )
        extensions = frozenset(
            normalize_extension(e)
            for e in self.unsupported_container_extensions
            if e.strip(" .")
        )
        object.__setattr__(self, "unsupported_codecs", codecs)
        object.__setattr__(self, "unsupported_container_extensions", extensions)

    @classmethod
    def from_lists(
        cls, codecs: Iterable[str], container_extensions: Iterable[str]
    ) -> UnsupportedRuleSet:
        """Build a rule set from plain iterables."""
        return cls(frozenset(codecs), frozenset(container_extensions))


def is_codec_unsupported(codec: str | None, rules: UnsupportedRuleSet) -> bool:
    """Check whether a codec description matches any unsupported codec rule.

    Args:
        codec: Codec description from the player (None never matches).
        rules: Rule set to check against.

    Returns:
        True if any identifier in the description is an unsupported codec.
    """
    if codec is None:
        return False
    return not codec_identifiers(codec).isdisjoint(rules.unsupported_codecs)


def is_container_unsupported(extension: str, rules: UnsupportedRuleSet) -> bool:
    """Check whether a file extension is in the unsupported container list."""
    return normalize_extension(extension) in rules.unsupported_container_extensions


# Lists the legacy HTML5-video pipeline converted before playback
LEGACY_UNSUPPORTED_CODECS: tuple[str, ...] = (
    "h263",
    "h263p",
    "mpeg1video",
    "mpeg2video",
    "msmpeg4v2",
    "msmpeg4v3",
    "wmv1",
    "wmv2",
    "wmv3",
    "vc1",
    "rv40",
    "svq1",
    "svq3",
    "cinepak",
    "indeo3",
    "indeo5",
)

LEGACY_CONVERSION_EXTENSIONS: tuple[str, ...] = (
    ".mov",
    ".mkv",
    ".avi",
    ".flv",
    ".wmv",
    ".mpg",
    ".mpeg",
    ".3gp",
)

DEFAULT_RULES = UnsupportedRuleSet.from_lists(
    LEGACY_UNSUPPORTED_CODECS, LEGACY_CONVERSION_EXTENSIONS
)

"""Classification of probed files against the legacy pipeline's rules.

- canonicalize_codec / codec_identifiers: codec identifier normalization
- UnsupportedRuleSet / DEFAULT_RULES: what the legacy pipeline converted
- classify / evaluate / summarize: verdicts and batch aggregation
"""

from mpv_probe.classification.codecs import (
    DEFAULT_RULES,
    LEGACY_CONVERSION_EXTENSIONS,
    LEGACY_UNSUPPORTED_CODECS,
    UnsupportedRuleSet,
    canonicalize_codec,
    codec_identifiers,
    is_codec_unsupported,
    is_container_unsupported,
    normalize_extension,
)
from mpv_probe.classification.report import (
    ClassificationError,
    classify,
    evaluate,
    summarize,
)

__all__ = [
    "DEFAULT_RULES",
    "LEGACY_CONVERSION_EXTENSIONS",
    "LEGACY_UNSUPPORTED_CODECS",
    "UnsupportedRuleSet",
    "canonicalize_codec",
    "codec_identifiers",
    "is_codec_unsupported",
    "is_container_unsupported",
    "normalize_extension",
    "ClassificationError",
    "classify",
    "evaluate",
    "summarize",
]

"""Typed access to MPV_PROBE_* environment variables."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


def _parse_bool(value: str) -> bool:
    word = value.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(value)


class EnvReader:
    """Reads environment variables with type conversion.

    Unset and empty variables both count as "not specified". A value that
    does not parse is logged and ignored, so a stray variable never stops
    a batch run from starting.

    Tests pass ``env`` instead of touching os.environ:

        reader = EnvReader(env={"MPV_PROBE_SETTLE_DELAY_MS": "0"})
        reader.get_int("MPV_PROBE_SETTLE_DELAY_MS")  # 0
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: Mapping[str, str] = os.environ if env is None else env

    def get_str(self, var: str, default: str | None = None) -> str | None:
        return self._env.get(var) or default

    def _get(
        self, var: str, parse: Callable[[str], T], kind: str, default: T | None
    ) -> T | None:
        raw = self.get_str(var)
        if raw is None:
            return default
        try:
            return parse(raw)
        except ValueError:
            logger.warning("Invalid %s value for %s: %s", kind, var, raw)
            return default

    def get_int(self, var: str, default: int | None = None) -> int | None:
        return self._get(var, int, "integer", default)

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """Parse 1/0, true/false, yes/no or on/off (case-insensitive)."""
        return self._get(var, _parse_bool, "boolean", default)

    def get_list(
        self, var: str, default: list[str] | None = None
    ) -> list[str] | None:
        """Split a comma-separated value, dropping blank items."""
        raw = self.get_str(var)
        if raw is None:
            return default
        items = [item.strip() for item in raw.split(",") if item.strip()]
        return items or default

    def get_path(
        self, var: str, must_exist: bool = False, default: Path | None = None
    ) -> Path | None:
        """Read a path with ~ expanded.

        Args:
            var: Variable name.
            must_exist: Ignore (with a warning) paths that do not exist.
            default: Returned when unset or ignored.
        """
        raw = self.get_str(var)
        if raw is None:
            return default
        path = Path(raw).expanduser()
        if must_exist and not path.exists():
            logger.warning("%s points to a missing path: %s", var, raw)
            return default
        return path

"""Per-file logging context.

While a batch probes a file, every record logged from any module carries
that file's path and position, without threading them through each call.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from collections.abc import Iterator


class ProbeScope(NamedTuple):
    file_index: int | None
    file_path: str | None


_NO_SCOPE = ProbeScope(None, None)

_current: contextvars.ContextVar[ProbeScope] = contextvars.ContextVar(
    "probe_scope", default=_NO_SCOPE
)


@contextmanager
def probe_context(
    file_path: Path | str, file_index: int | None = None
) -> Iterator[None]:
    """Tag log records emitted inside the block with the file being probed.

    Nested blocks shadow the outer one until they exit.

        with probe_context("/videos/a.mkv", 3):
            logger.info("Loading")  # [F003]
    """
    token = _current.set(ProbeScope(file_index, str(file_path)))
    try:
        yield
    finally:
        _current.reset(token)


def get_probe_context() -> ProbeScope:
    """Return (file_index, file_path) of the enclosing probe_context."""
    return _current.get()


def _tag(scope: ProbeScope) -> str:
    if scope.file_index is not None:
        return f"[F{scope.file_index:03d}] "
    return "[F] " if scope.file_path is not None else ""


class ProbeContextFilter(logging.Filter):
    """Copy the current probe scope onto each record.

    Sets file_index and file_path for the JSON formatter and probe_tag
    for the text format. Records are never dropped.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        scope = _current.get()
        record.file_index = scope.file_index
        record.file_path = scope.file_path
        record.probe_tag = _tag(scope)
        return True

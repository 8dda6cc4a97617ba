"""JSON log output, one object per line.

Example line for a record logged inside probe_context("/v/a.mkv", 3):

    {"timestamp": "2024-05-01T10:00:00.123000+00:00", "level": "INFO",
     "logger": "mpv_probe.probe.runner", "message": "Loaded in 41 ms",
     "file": "/v/a.mkv", "file_index": 3}
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attribute names every LogRecord has, plus the ones logging adds while
# formatting. Anything else on a record came from extra=.
_RECORD_ATTRS: frozenset[str] = frozenset(
    logging.makeLogRecord({}).__dict__
) | {"message", "asctime", "taskName"}

# Set by ProbeContextFilter
_PROBE_ATTRS: frozenset[str] = frozenset({"probe_tag", "file_index", "file_path"})


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS
        and key not in _PROBE_ATTRS
        and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """Format log records as JSON objects.

    Keys: timestamp (ISO-8601 UTC), level, logger (omitted for root),
    message, file / file_index while a file is being probed, context for
    extra= fields, exception when exc_info is set.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
        }
        if record.name != "root":
            entry["logger"] = record.name
        entry["message"] = record.getMessage()

        file_path = getattr(record, "file_path", None)
        if file_path is not None:
            entry["file"] = file_path
            file_index = getattr(record, "file_index", None)
            if file_index is not None:
                entry["file_index"] = file_index

        context = _extra_fields(record)
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)

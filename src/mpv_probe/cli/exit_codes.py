"""Process exit statuses for mpv-probe commands.

A batch run that finishes exits 0 even when individual files failed to
load; those failures are part of the report. Non-zero statuses mean the
run itself could not be carried out:

    2   interrupted with Ctrl+C (partial report already printed)
    11  config file or rules file rejected
    20  the file or directory to probe does not exist
    31  mpv missing or never opened its IPC socket
    40  inspect / step-bench could not load the file
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit statuses, grouped by tens: config, target, player, operation."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    INTERRUPTED = 2

    CONFIG_ERROR = 11

    TARGET_NOT_FOUND = 20

    PLAYER_START_FAILED = 31

    OPERATION_FAILED = 40

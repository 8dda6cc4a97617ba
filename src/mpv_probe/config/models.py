"""Configuration data models.

This module defines dataclasses for mpv Probe configuration options.
"""

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_EXTENSIONS: tuple[str, ...] = (
    "mp4",
    "mkv",
    "avi",
    "mov",
    "webm",
    "flv",
    "wmv",
    "mpg",
    "mpeg",
    "m4v",
    "3gp",
)


@dataclass
class PlayerConfig:
    """Configuration for launching and talking to the mpv process."""

    # Explicit mpv executable; None means look up "mpv" in PATH
    path: Path | None = None

    # How long mpv has to create its IPC socket after launch
    startup_timeout_ms: int = 5000

    # Bound on every IPC round trip
    request_timeout_ms: int = 5000

    # Bound on waiting for the file-loaded event after loadfile
    load_timeout_ms: int = 10000

    # Start paused (batch probing) rather than playing (interactive use)
    pause_on_start: bool = True

    # Additional mpv command-line flags
    extra_args: list[str] = field(default_factory=list)

    # Fixed IPC socket path; None creates one in a private temp directory
    ipc_socket_path: Path | None = None

    def __post_init__(self) -> None:
        """Validate configuration."""
        for name in ("startup_timeout_ms", "request_timeout_ms", "load_timeout_ms"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")


@dataclass
class ProbeConfig:
    """Configuration for probing files."""

    # Pause after loading before properties are read
    settle_delay_ms: int = 200

    # File extensions (without dot) picked up by directory discovery
    extensions: list[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.settle_delay_ms < 0:
            raise ValueError(
                f"settle_delay_ms must be >= 0, got {self.settle_delay_ms}"
            )
        self.extensions = [ext.lower().lstrip(".") for ext in self.extensions]


@dataclass
class RulesConfig:
    """Configuration for the unsupported-format rule set.

    When neither list is set and no rules file is given, the built-in
    default rules are used.
    """

    unsupported_codecs: list[str] | None = None
    unsupported_container_extensions: list[str] | None = None

    # YAML rules file; takes precedence over the inline lists
    file: Path | None = None


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class ProbeToolConfig:
    """Main configuration container for mpv Probe.

    Aggregates all configuration sections.
    """

    player: PlayerConfig = field(default_factory=PlayerConfig)
    probe: ProbeConfig = field(default_factory=ProbeConfig)
    rules: RulesConfig = field(default_factory=RulesConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

"""Configuration management for mpv Probe.

Configuration is loaded with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (MPV_PROBE_*)
3. Config file (~/.mpv-probe/config.toml)
4. Default values (lowest priority)
"""

from mpv_probe.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from mpv_probe.config.env import EnvReader
from mpv_probe.config.loader import (
    ConfigError,
    get_config,
    get_data_dir,
    get_default_config_path,
    load_config_file,
)
from mpv_probe.config.logging_factory import (
    build_logging_config,
    configure_logging_from_cli,
)
from mpv_probe.config.models import (
    DEFAULT_EXTENSIONS,
    LoggingConfig,
    PlayerConfig,
    ProbeConfig,
    ProbeToolConfig,
    RulesConfig,
)

__all__ = [
    # Models
    "DEFAULT_EXTENSIONS",
    "LoggingConfig",
    "PlayerConfig",
    "ProbeConfig",
    "ProbeToolConfig",
    "RulesConfig",
    # Loader
    "ConfigError",
    "get_config",
    "get_data_dir",
    "get_default_config_path",
    "load_config_file",
    # Building blocks
    "EnvReader",
    "ConfigBuilder",
    "ConfigSource",
    "source_from_env",
    "source_from_file",
    "build_logging_config",
    "configure_logging_from_cli",
]

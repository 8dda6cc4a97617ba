"""Media file discovery."""

from mpv_probe.scanner.discovery import discover_media_files, normalize_extensions

__all__ = ["discover_media_files", "normalize_extensions"]

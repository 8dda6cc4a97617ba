"""mpv Probe - codec capability and latency probing for mpv."""

__version__ = "0.1.0"

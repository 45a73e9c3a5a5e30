"""Team task board: task tracking with real-time notification fan-out."""

__version__ = "1.0.0"

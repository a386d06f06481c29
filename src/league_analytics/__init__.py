"""League Analytics - derived statistics for a fantasy football league dashboard."""

__version__ = "0.1.0"

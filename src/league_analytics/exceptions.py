"""
Analytics exceptions.

Degenerate data (empty collections, missing points, unknown rosters) never
raises; these are reserved for invalid arguments supplied by the caller.
"""


class AnalyticsError(Exception):
    """Base exception for league analytics errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class InvalidParameterError(AnalyticsError, ValueError):
    """Raised when a calculation is asked for with a meaningless parameter."""

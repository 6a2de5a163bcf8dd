"""Hindsight error hierarchy.

All hindsight-specific errors inherit from HindsightError for easy catching.
The recorder itself raises none of these: its operations are total.
"""


class HindsightError(Exception):
    """Base error for all hindsight operations."""


class ConfigError(HindsightError):
    """Invalid or missing configuration."""


class EventTypeError(HindsightError):
    """A type filter named something that is not a known event class."""

"""Exception types raised by the upkeep package."""


class UpkeepError(Exception):
    """Base class for upkeep errors."""


class ValidationError(UpkeepError, ValueError):
    """Malformed input at a parsing boundary (dates, service types, numbers)."""

"""Custom exceptions for map generation."""


class BurghgenError(Exception):
    """Base exception for map generation errors."""

    pass


class InvalidDimensionsError(BurghgenError, ValueError):
    """Raised when a map is requested with a non-positive width or height."""

    pass


class RoadStyleLookupError(BurghgenError, LookupError):
    """Raised when a road style has no entry in the road tile table."""

    pass


class ConfigError(BurghgenError):
    """Raised when a generation config file cannot be validated."""

    pass

"""Custom exceptions for terrain generation."""


class WorldgenError(Exception):
    """Base exception for worldgen errors."""

    pass


class ConfigurationError(WorldgenError):
    """Raised when a configuration document is malformed."""

    pass


class MissingFieldError(ConfigurationError):
    """Raised when a required field is absent from a document."""

    pass


class UnknownTypeError(ConfigurationError):
    """Raised when no deserializer is registered for a type tag."""

    pass


class ValueNotFoundError(ConfigurationError):
    """Raised when a named value cannot be located in any source."""

    pass


class CircularReferenceError(ConfigurationError):
    """Raised when a named definition refers back to itself."""

    pass


class DecimalFormatError(ConfigurationError):
    """Raised when a decimal string cannot be converted to fixed point."""

    pass


class InvalidSplineError(ConfigurationError):
    """Raised when spline control points are inconsistent."""

    pass

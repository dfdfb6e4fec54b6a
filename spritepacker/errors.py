"""Failures the packing engine reports to its caller. None of them are retried."""


class SpritePackerError(Exception):
    """Base class for every error raised by spritepacker."""


class ConfigurationError(SpritePackerError, ValueError):
    """An unknown packer or format was requested, or its options could not be parsed."""


class GeometryInvariantViolation(SpritePackerError, RuntimeError):
    """A packer produced placements that break coverage or overlap guarantees."""


class EmptyResultError(SpritePackerError, RuntimeError):
    """Packing produced no sheets where at least one was expected."""

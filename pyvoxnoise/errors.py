"""
Exception hierarchy for PyVoxNoise.

- ConfigError: malformed or missing parameter, unknown mode, bad channel count
- ResourceError: pre-tiled noise data missing or with wrong dimensions
- DomainError: numeric input outside the domain a primitive can handle

ConfigError and DomainError are ValueErrors and ResourceError is an OSError,
so callers that only know the builtin types still catch them.

Author: B.G.
"""


class NoiseVolumeError(Exception):
    """Base class for all PyVoxNoise errors."""


class ConfigError(NoiseVolumeError, ValueError):
    """Invalid volume description."""


class ResourceError(NoiseVolumeError, OSError):
    """Missing or inconsistent external data."""


class DomainError(NoiseVolumeError, ValueError):
    """Degenerate numeric input with no defined fallback."""

"""Exception hierarchy for routebind.

Applying an annotation never raises; these errors only come from the
explicit builder API, configuration and key parsing.
"""


class RouteBindError(Exception):
    """Base exception for all routebind errors."""


class BindingConfigurationError(RouteBindError):
    """Raised when a binding or the package configuration is declared incorrectly."""


class InvalidCompositeKeyError(RouteBindError, ValueError):
    """Raised when a composite key does not have the ``KIND:index`` shape."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid composite key {key!r}: {reason}")

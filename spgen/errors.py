"""
Exceptions raised by the password generator and its boundaries.
"""


class PasswordGenerationError(Exception):
    """Generic generator error."""


class ConfigurationError(PasswordGenerationError, ValueError):
    """The requested configuration cannot produce a password."""


class DegenerateRejectionLoopError(ConfigurationError):
    """
    Adjacent-repeat exclusion was requested over a pool with fewer than
    two distinct characters, so rejection sampling could never finish.
    """


class GenerationExhaustedError(PasswordGenerationError):
    """The capped retry budget ran out before a valid password was found."""


class QRExportError(PasswordGenerationError):
    """Rendering a password as a QR code failed."""

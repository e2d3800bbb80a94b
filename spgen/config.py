"""
Configuration for the secure password generator.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import ConfigurationError


@dataclass(frozen=True)
class GenerationConfig:
    # Desired password length in characters.
    # The HTTP/CLI boundaries cap this at ServiceConfig.max_length.
    length: int = 16

    # Character classes. Each selected class contributes one
    # guaranteed character to the output.
    include_uppercase: bool = True
    include_lowercase: bool = True
    include_digits: bool = True
    include_symbols: bool = True

    # No two adjacent output characters may be equal.
    exclude_consecutive_repeats: bool = True

    # Drop 0 O 1 l I from the fill pool.
    # NOTE: the per-class required characters are still drawn from the
    # unfiltered class strings.
    exclude_ambiguous: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.length, bool) or not isinstance(self.length, int):
            raise ConfigurationError(
                f"Password length must be an integer, got {self.length!r}"
            )
        if self.length < 1:
            raise ConfigurationError(
                f"Password length must be at least 1, got {self.length}"
            )


# Default configuration instance you can import elsewhere
DEFAULT_CONFIG = GenerationConfig()


DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
MAX_LENGTH = 128


@dataclass(frozen=True)
class ServiceConfig:
    """
    Startup configuration for the HTTP service.

    Passed explicitly into the service constructor; nothing here is read
    from process-wide state after startup.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    max_length: int = MAX_LENGTH

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        """
        Build a config from SPGEN_HOST / SPGEN_PORT / SPGEN_MAX_LENGTH,
        falling back to the defaults for anything unset.
        """
        host = os.getenv("SPGEN_HOST") or DEFAULT_HOST
        try:
            port = int(os.getenv("SPGEN_PORT") or DEFAULT_PORT)
            max_length = int(os.getenv("SPGEN_MAX_LENGTH") or MAX_LENGTH)
        except ValueError as exc:
            raise ConfigurationError(f"Invalid service setting: {exc}") from exc
        return cls(host=host, port=port, max_length=max_length)

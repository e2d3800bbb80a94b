"""
Secure password generator package.
"""

__version__ = "1.0.0"

from .config import GenerationConfig, ServiceConfig, DEFAULT_CONFIG
from .errors import (
    PasswordGenerationError,
    ConfigurationError,
    DegenerateRejectionLoopError,
    GenerationExhaustedError,
    QRExportError,
)
from .generator import generate
from .entropy import StrengthAssessment, assess_strength, calculate_entropy, score
from .cli import GenerationResult, generate_password, generate_password_with_meta

__all__ = [
    "GenerationConfig",
    "ServiceConfig",
    "DEFAULT_CONFIG",
    "PasswordGenerationError",
    "ConfigurationError",
    "DegenerateRejectionLoopError",
    "GenerationExhaustedError",
    "QRExportError",
    "generate",
    "StrengthAssessment",
    "assess_strength",
    "calculate_entropy",
    "score",
    "GenerationResult",
    "generate_password",
    "generate_password_with_meta",
]

"""
Strength scoring:
Estimates entropy from the character classes present in a password and
maps it onto a fixed set of strength labels.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

from .charsets import DIGITS, LOWERCASE, SYMBOLS, UPPERCASE

# (lower bound in bits, label), checked from the top down.
STRENGTH_BANDS: List[Tuple[float, str]] = [
    (90.0, "Very Strong"),
    (70.0, "Strong"),
    (50.0, "Fair"),
    (30.0, "Weak"),
]
WEAKEST_LABEL = "Very Weak"

STRENGTH_LABELS = (WEAKEST_LABEL,) + tuple(
    label for _, label in reversed(STRENGTH_BANDS)
)

# Entropy shown as a full bar in progress displays.
FULL_BAR_BITS = 128.0


@dataclass(frozen=True)
class StrengthAssessment:
    entropy_bits: float
    label: str


def alphabet_size(password: str) -> int:
    """
    Size of the alphabet implied by the classes present in `password`.
    """
    size = 0
    if any(c in LOWERCASE for c in password):
        size += len(LOWERCASE)
    if any(c in UPPERCASE for c in password):
        size += len(UPPERCASE)
    if any(c in DIGITS for c in password):
        size += len(DIGITS)
    if any(c in SYMBOLS for c in password):
        size += len(SYMBOLS)
    return size


def calculate_entropy(password: str) -> float:
    """
    Heuristic entropy in bits: log2(alphabet size) * length.

    The alphabet is inferred from which classes appear, not from how the
    password was produced, so this works on any string. Strings with no
    recognised class score 0.
    """
    if not password:
        return 0.0

    size = alphabet_size(password)
    if size == 0:
        return 0.0

    return math.log2(size) * len(password)


def strength_label(bits: float) -> str:
    for lower, label in STRENGTH_BANDS:
        if bits >= lower:
            return label
    return WEAKEST_LABEL


def assess_strength(password: str) -> str:
    return strength_label(calculate_entropy(password))


def score(password: str) -> StrengthAssessment:
    bits = calculate_entropy(password)
    return StrengthAssessment(entropy_bits=bits, label=strength_label(bits))


def strength_percent(bits: float) -> int:
    """
    Map entropy onto 0-100 for a progress bar.
    """
    if bits <= 0:
        return 0
    return min(100, int(round(bits / FULL_BAR_BITS * 100)))

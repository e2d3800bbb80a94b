"""
Character classes and pool construction.
"""

from __future__ import annotations

import string
from typing import List, Tuple

from .config import GenerationConfig

LOWERCASE = string.ascii_lowercase
UPPERCASE = string.ascii_uppercase
DIGITS = string.digits
# The 32 ASCII punctuation glyphs.
SYMBOLS = string.punctuation
AMBIGUOUS = "0O1lI"


def selected_classes(config: GenerationConfig) -> List[str]:
    """
    Return the class strings selected by `config`, in enumeration order:
    lowercase, uppercase, digits, symbols.
    """
    classes: list[str] = []
    if config.include_lowercase:
        classes.append(LOWERCASE)
    if config.include_uppercase:
        classes.append(UPPERCASE)
    if config.include_digits:
        classes.append(DIGITS)
    if config.include_symbols:
        classes.append(SYMBOLS)
    return classes


def strip_ambiguous(pool: str) -> str:
    return "".join(ch for ch in pool if ch not in AMBIGUOUS)


def build_pool(config: GenerationConfig) -> Tuple[List[str], str]:
    """
    Build the (classes, pool) pair for a configuration.

    The pool is the plain concatenation of the selected classes; they are
    disjoint so no deduplication is needed. Ambiguous glyphs are removed
    from the pool only, never from the class strings.
    """
    classes = selected_classes(config)
    pool = "".join(classes)
    if config.exclude_ambiguous:
        pool = strip_ambiguous(pool)
    return classes, pool

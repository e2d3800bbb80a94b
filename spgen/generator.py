"""
Constrained password generation.

Every selected character class gets one guaranteed character; the rest
of the password is drawn from the shared pool, then the whole sequence is
shuffled. When consecutive repeats are excluded, both the fill step and
the post-shuffle check are rejection loops with hard caps and a
deterministic fallback, so generation always terminates.
"""

from __future__ import annotations

import logging
import random
from collections import Counter
from typing import Iterable, List, Optional, Sequence

from .charsets import build_pool
from .config import DEFAULT_CONFIG, GenerationConfig
from .engine import RandomEngine
from .errors import (
    ConfigurationError,
    DegenerateRejectionLoopError,
    GenerationExhaustedError,
)

logger = logging.getLogger(__name__)

# Resampling budget for one fill position before falling back to a draw
# that excludes the previous character.
MAX_DRAWS_PER_POSITION = 64

# Reshuffles tried before repairing the sequence by swaps.
MAX_SHUFFLES = 100

# Full redraws allowed when the drawn characters admit no arrangement
# without adjacent repeats.
MAX_ATTEMPTS = 10


def generate(
    config: GenerationConfig | None = None,
    rng: RandomEngine | random.Random | None = None,
) -> str:
    """
    Generate a password satisfying `config`.

    Raises ConfigurationError when no class is selected or the length
    cannot seat one character per selected class, and
    DegenerateRejectionLoopError when repeat exclusion is requested over a
    pool with fewer than two distinct characters.
    """
    cfg = config or DEFAULT_CONFIG
    engine = rng if isinstance(rng, RandomEngine) else RandomEngine(rng)

    classes, pool = build_pool(cfg)
    if not classes or not pool:
        raise ConfigurationError("At least one character type must be selected")

    fill_count = cfg.length - len(classes)
    if fill_count < 0:
        raise ConfigurationError(
            f"Length too short to include required characters "
            f"(length={cfg.length}, required={len(classes)})"
        )

    if cfg.exclude_consecutive_repeats and len(set(pool)) < 2:
        raise DegenerateRejectionLoopError(
            "Cannot exclude consecutive repeats with fewer than two "
            "distinct usable characters"
        )

    logger.debug(
        "Generating password: length=%d classes=%d pool=%d "
        "exclude_repeats=%s exclude_ambiguous=%s",
        cfg.length,
        len(classes),
        len(pool),
        cfg.exclude_consecutive_repeats,
        cfg.exclude_ambiguous,
    )

    for attempt in range(1, MAX_ATTEMPTS + 1):
        # Required characters come from the unfiltered class strings.
        chars = [engine.choice(cls) for cls in classes]
        chars.extend(
            _fill(engine, pool, fill_count, cfg.exclude_consecutive_repeats)
        )
        engine.shuffle(chars)

        if not cfg.exclude_consecutive_repeats:
            return "".join(chars)

        arranged = _arrange_without_repeats(engine, chars)
        if arranged is not None:
            return "".join(arranged)

        logger.debug(
            "Attempt %d drew characters with no repeat-free arrangement; redrawing",
            attempt,
        )

    raise GenerationExhaustedError(
        f"No password without consecutive repeats after {MAX_ATTEMPTS} attempts"
    )


def _fill(
    engine: RandomEngine,
    pool: str,
    count: int,
    exclude_repeats: bool,
) -> List[str]:
    out: list[str] = []
    last: str | None = None

    for _ in range(count):
        char = engine.choice(pool)
        if exclude_repeats:
            draws = 1
            while char == last and draws < MAX_DRAWS_PER_POSITION:
                char = engine.choice(pool)
                draws += 1
            if char == last:
                char = engine.choice([c for c in pool if c != last])
        out.append(char)
        last = char

    return out


def _arrange_without_repeats(
    engine: RandomEngine, chars: List[str]
) -> Optional[List[str]]:
    for _ in range(MAX_SHUFFLES):
        if not has_adjacent_repeat(chars):
            return chars
        engine.shuffle(chars)

    logger.debug("Shuffle budget exhausted; repairing by swaps")
    return repair_adjacent_repeats(chars)


def has_adjacent_repeat(chars: Sequence[str]) -> bool:
    return any(a == b for a, b in zip(chars, chars[1:]))


def repair_adjacent_repeats(chars: Sequence[str]) -> Optional[List[str]]:
    """
    Rearrange `chars` so that no two neighbours are equal.

    Offending characters are swapped with other positions as long as each
    swap strictly reduces the number of equal neighbour pairs; if that
    gets stuck, the characters are laid out by frequency on alternating
    slots. Returns None when no such arrangement exists, i.e. when one
    character makes up more than half (rounded up) of the sequence.
    """
    n = len(chars)
    if n and max(Counter(chars).values()) > (n + 1) // 2:
        return None

    out = list(chars)
    while True:
        bad = next((k for k in range(1, n) if out[k] == out[k - 1]), None)
        if bad is None:
            return out
        if not _swap_out(out, bad):
            return _interleave(chars)


def _swap_out(chars: List[str], i: int) -> bool:
    n = len(chars)
    # Either member of the equal pair (i - 1, i) may be moved.
    for a in (i, i - 1):
        for j in range(n):
            if chars[j] == chars[a]:
                continue
            pairs = {a - 1, a, j - 1, j}
            before = _count_equal_pairs(chars, pairs)
            chars[a], chars[j] = chars[j], chars[a]
            if _count_equal_pairs(chars, pairs) < before:
                return True
            chars[a], chars[j] = chars[j], chars[a]
    return False


def _count_equal_pairs(chars: Sequence[str], starts: Iterable[int]) -> int:
    last = len(chars) - 1
    return sum(1 for k in starts if 0 <= k < last and chars[k] == chars[k + 1])


def _interleave(chars: Sequence[str]) -> List[str]:
    counts = Counter(chars)
    # Most frequent first; ties keep their order of appearance.
    ordered = sorted(counts, key=lambda c: -counts[c])
    flat = [c for c in ordered for _ in range(counts[c])]

    n = len(chars)
    slots = list(range(0, n, 2)) + list(range(1, n, 2))
    out: list[str] = [""] * n
    for slot, char in zip(slots, flat):
        out[slot] = char
    return out

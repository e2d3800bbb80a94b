import math

import pytest

from spgen.entropy import (
    STRENGTH_LABELS,
    StrengthAssessment,
    alphabet_size,
    assess_strength,
    calculate_entropy,
    score,
    strength_label,
    strength_percent,
)
from spgen.generator import generate


def test_empty_password_has_zero_entropy():
    assert calculate_entropy("") == 0.0


def test_lowercase_only():
    assert calculate_entropy("abcd") == pytest.approx(math.log2(26) * 4)
    assert calculate_entropy("abcd") == pytest.approx(18.8, abs=0.01)


@pytest.mark.parametrize(
    "password, size",
    [
        ("abc", 26),
        ("ABC", 26),
        ("123", 10),
        ("!?#", 32),
        ("aB", 52),
        ("aB3", 62),
        ("aB3~", 94),
        ("   ", 0),
        ("éü", 0),
    ],
)
def test_alphabet_size_by_classes_present(password, size):
    assert alphabet_size(password) == size


def test_unrecognised_characters_score_zero():
    assert calculate_entropy("    ") == 0.0


def test_entropy_ignores_how_password_was_made():
    # Only the classes present matter, not repetition.
    assert calculate_entropy("aaaa") == calculate_entropy("abcd")


@pytest.mark.parametrize(
    "bits, label",
    [
        (0.0, "Very Weak"),
        (29.99, "Very Weak"),
        (30.0, "Weak"),
        (49.99, "Weak"),
        (50.0, "Fair"),
        (69.99, "Fair"),
        (70.0, "Strong"),
        (89.99, "Strong"),
        (90.0, "Very Strong"),
        (500.0, "Very Strong"),
    ],
)
def test_strength_bands(bits, label):
    assert strength_label(bits) == label


@pytest.mark.parametrize(
    "count, label",
    [(5, "Very Weak"), (6, "Weak"), (10, "Fair"), (14, "Strong"), (18, "Very Strong")],
)
def test_assess_strength_on_band_boundaries(count, label):
    # log2(32) == 5 exactly, so n symbols give exactly 5n bits.
    assert assess_strength("!" * count) == label


def test_labels_are_ordered_weakest_first():
    assert STRENGTH_LABELS == ("Very Weak", "Weak", "Fair", "Strong", "Very Strong")


def test_score_combines_entropy_and_label():
    result = score("aB3!aB3!aB3!aB3!")
    assert isinstance(result, StrengthAssessment)
    assert result.entropy_bits == pytest.approx(math.log2(94) * 16)
    assert result.label == "Very Strong"


def test_default_generated_password_is_very_strong():
    assert assess_strength(generate()) == "Very Strong"


@pytest.mark.parametrize(
    "bits, percent", [(-1.0, 0), (0.0, 0), (64.0, 50), (128.0, 100), (300.0, 100)]
)
def test_strength_percent(bits, percent):
    assert strength_percent(bits) == percent

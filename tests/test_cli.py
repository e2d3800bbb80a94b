import pytest

from spgen.charsets import DIGITS, SYMBOLS
from spgen.cli import (
    GenerationResult,
    build_parser,
    config_from_args,
    generate_password,
    generate_password_with_meta,
    main,
    service_config_from_args,
)
from spgen.config import DEFAULT_CONFIG, GenerationConfig
from spgen.entropy import calculate_entropy, strength_label
from spgen.errors import ConfigurationError


def test_generate_password_with_meta_defaults():
    meta = generate_password_with_meta()
    assert isinstance(meta, GenerationResult)
    assert meta.config is DEFAULT_CONFIG
    assert meta.length == len(meta.password) == 16
    assert meta.entropy_bits == pytest.approx(calculate_entropy(meta.password))
    assert meta.strength == strength_label(meta.entropy_bits)


def test_result_to_dict():
    meta = generate_password_with_meta(GenerationConfig(length=10))
    assert meta.to_dict() == {
        "password": meta.password,
        "entropy": meta.entropy_bits,
        "strength": meta.strength,
        "length": 10,
    }


def test_generate_password_returns_string():
    password = generate_password(GenerationConfig(length=9))
    assert isinstance(password, str)
    assert len(password) == 9


def test_config_from_args_maps_flags():
    args = build_parser().parse_args(
        ["--length", "12", "--no-symbols", "--exclude-ambiguous", "--allow-repeats"]
    )
    cfg = config_from_args(args)
    assert cfg == GenerationConfig(
        length=12,
        include_symbols=False,
        exclude_ambiguous=True,
        exclude_consecutive_repeats=False,
    )


@pytest.mark.parametrize("length", ["0", "129"])
def test_config_from_args_bounds_length(length):
    args = build_parser().parse_args(["--length", length])
    with pytest.raises(ConfigurationError):
        config_from_args(args)


def test_service_config_from_args(monkeypatch):
    monkeypatch.setenv("SPGEN_PORT", "4000")
    args = build_parser().parse_args(["--serve", "--host", "127.0.0.1"])
    cfg = service_config_from_args(args)
    assert cfg.host == "127.0.0.1"
    assert cfg.port == 4000

    args = build_parser().parse_args(["--serve", "-p", "5000"])
    assert service_config_from_args(args).port == 5000


def test_main_prints_quiet_passwords(capsys):
    assert main(["--length", "20", "--count", "3", "--quiet", "--no-digits"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    for line in lines:
        assert len(line) == 20
        assert not any(c in DIGITS for c in line)


def test_main_prints_strength(capsys):
    assert main(["--no-symbols"]) == 0
    out = capsys.readouterr().out
    assert "bits]" in out
    assert not any(c in SYMBOLS for c in out.split()[0])


def test_main_reports_configuration_errors(capsys):
    assert main(["--length", "2"]) == 2
    assert "too short" in capsys.readouterr().err


def test_main_rejects_all_classes_disabled(capsys):
    code = main(["--no-uppercase", "--no-lowercase", "--no-digits", "--no-symbols"])
    assert code == 2
    assert "character type" in capsys.readouterr().err

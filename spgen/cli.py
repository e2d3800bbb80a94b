"""
Command-line interface and high-level generator function.
"""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import List, Optional

from .config import DEFAULT_CONFIG, MAX_LENGTH, GenerationConfig, ServiceConfig
from .entropy import score
from .errors import ConfigurationError
from .generator import generate

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """
    Full result of one password generation.
    """
    password: str
    entropy_bits: float
    strength: str
    length: int
    config: GenerationConfig

    def to_dict(self) -> dict:
        # Wire shape used by the HTTP service.
        return {
            "password": self.password,
            "entropy": self.entropy_bits,
            "strength": self.strength,
            "length": self.length,
        }


def generate_password_with_meta(
    config: GenerationConfig | None = None,
) -> GenerationResult:
    """
    High-level generation pipeline with metadata:

    - Generate a password satisfying the configuration.
    - Score it (entropy estimate + strength label).
    """
    cfg = config or DEFAULT_CONFIG

    password = generate(cfg)
    assessment = score(password)

    return GenerationResult(
        password=password,
        entropy_bits=assessment.entropy_bits,
        strength=assessment.label,
        length=len(password),
        config=cfg,
    )


def generate_password(
    config: GenerationConfig | None = None,
) -> str:
    meta = generate_password_with_meta(config)
    return meta.password


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spgen",
        description="Generate random passwords from a secure random source.",
    )
    parser.add_argument(
        "-l", "--length", type=int, default=DEFAULT_CONFIG.length,
        help=f"password length (1-{MAX_LENGTH}, default %(default)s)",
    )
    parser.add_argument("--no-uppercase", action="store_true", help="omit A-Z")
    parser.add_argument("--no-lowercase", action="store_true", help="omit a-z")
    parser.add_argument("--no-digits", action="store_true", help="omit 0-9")
    parser.add_argument("--no-symbols", action="store_true", help="omit punctuation")
    parser.add_argument(
        "--exclude-ambiguous", action="store_true",
        help="leave 0 O 1 l I out of the filled characters",
    )
    parser.add_argument(
        "--allow-repeats", action="store_true",
        help="allow two equal characters next to each other",
    )
    parser.add_argument(
        "-n", "--count", type=int, default=1, help="number of passwords to print"
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="print passwords only"
    )
    parser.add_argument(
        "--serve", action="store_true", help="run the HTTP service instead"
    )
    parser.add_argument("--host", default=None, help="service bind address")
    parser.add_argument("-p", "--port", type=int, default=None, help="service port")
    parser.add_argument("--gui", action="store_true", help="open the desktop window")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="enable debug logging"
    )
    return parser


def config_from_args(args: argparse.Namespace) -> GenerationConfig:
    if not 1 <= args.length <= MAX_LENGTH:
        raise ConfigurationError(
            f"Password length must be between 1 and {MAX_LENGTH}, got {args.length}"
        )
    return GenerationConfig(
        length=args.length,
        include_uppercase=not args.no_uppercase,
        include_lowercase=not args.no_lowercase,
        include_digits=not args.no_digits,
        include_symbols=not args.no_symbols,
        exclude_consecutive_repeats=not args.allow_repeats,
        exclude_ambiguous=args.exclude_ambiguous,
    )


def service_config_from_args(args: argparse.Namespace) -> ServiceConfig:
    base = ServiceConfig.from_env()
    return ServiceConfig(
        host=args.host or base.host,
        port=args.port if args.port is not None else base.port,
        max_length=base.max_length,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for `spgen`, `python -m spgen` or `run_spgen.py`.
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else (
            logging.INFO if args.serve else logging.WARNING
        ),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.gui:
        from .gui_qt import main as gui_main

        return gui_main()

    try:
        if args.serve:
            from .server import PasswordService

            PasswordService(service_config_from_args(args)).run()
            return 0

        config = config_from_args(args)
        for _ in range(max(1, args.count)):
            meta = generate_password_with_meta(config)
            if args.quiet:
                print(meta.password)
            else:
                print(
                    f"{meta.password}  "
                    f"[{meta.strength}, ~{meta.entropy_bits:.1f} bits]"
                )
    except ConfigurationError as exc:
        logger.debug("Rejected configuration: %s", exc)
        print(f"spgen: error: {exc}", file=sys.stderr)
        return 2

    return 0

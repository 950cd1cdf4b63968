"""
Sponge CLI entry point.

Absorb a transcript into a Poseidon sponge and print the squeezed challenges.
This is meant for inspecting transcripts by hand, e.g. to compare challenge
streams with another implementation.

Usage::

    python -m sponge_spec --absorb 1 --absorb 2 --squeeze 2
    python -m sponge_spec --preset koalabear --absorb 0xdeadbeef --bits 16
    python -m sponge_spec --absorb hello --fork sub-protocol --bytes 32

Absorbed values are read as:

- decimal integers (`42`) -> field elements,
- `0x`-prefixed hex strings (`0xdeadbeef`) -> bytes,
- anything else (`hello`) -> its UTF-8 bytes.

Options:
    --preset    Parameter set: bls12-381 or koalabear (default: per SPONGE_ENV)
    --absorb    Value to absorb (can be repeated, absorbed in order)
    --fork      Fork the sponge with this domain before squeezing
    --squeeze   Number of field elements to squeeze
    --bits      Number of bits to squeeze
    --bytes     Number of bytes to squeeze
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

from sponge_spec.subspecs.fields import PrimeFieldElement
from sponge_spec.subspecs.poseidon import (
    DEFAULT_PARAMS,
    PARAMS_BLS12_381,
    PARAMS_KOALABEAR,
    PoseidonParameters,
    PoseidonSponge,
)
from sponge_spec.types import SpongeError

PRESETS: dict[str, PoseidonParameters] = {
    "bls12-381": PARAMS_BLS12_381,
    "koalabear": PARAMS_KOALABEAR,
}
"""Parameter sets selectable from the command line."""

logger = logging.getLogger(__name__)


def parse_absorb_value(text: str, field: type[PrimeFieldElement]) -> Any:
    """
    Interpret a command line argument as an absorbable value.

    Args:
        text: The raw argument.
        field: The sponge field, used for integer arguments.

    Returns:
        A field element, or bytes.

    Raises:
        ValueError: If a `0x` argument is not valid hex.
    """
    if text.startswith("0x"):
        return bytes.fromhex(text[2:])
    if text.isdecimal():
        # Integers are embedded as field elements only when they are canonical.
        value = int(text)
        if value >= field.MODULUS:
            raise ValueError(f"{value} is not below the {field.__name__} modulus")
        return field(value=value)
    return text.encode("utf-8")


def squeeze_challenges(
    params: PoseidonParameters,
    values: list[str],
    *,
    fork: str | None = None,
    num_elements: int = 0,
    num_bits: int = 0,
    num_bytes: int = 0,
) -> list[str]:
    """
    Run one transcript and render its challenges.

    Elements, then bits, then bytes are squeezed from the same sponge, so
    they are consecutive segments of one challenge stream.

    Returns:
        One printable line per requested challenge kind.
    """
    sponge = PoseidonSponge(params)
    for text in values:
        value = parse_absorb_value(text, params.field)
        logger.debug("Absorbing %r", value)
        sponge.absorb(value)

    if fork is not None:
        sponge = sponge.fork(fork.encode("utf-8"))

    lines = []
    if num_elements:
        elements = sponge.squeeze_field_elements(num_elements)
        lines.append("elements: " + " ".join(str(e.value) for e in elements))
    if num_bits:
        bits = sponge.squeeze_bits(num_bits)
        lines.append("bits: " + "".join("1" if b else "0" for b in bits))
    if num_bytes:
        lines.append("bytes: 0x" + sponge.squeeze_bytes(num_bytes).hex())
    return lines


class ColoredFormatter(logging.Formatter):
    """Colors the level of the records the CLI emits: debug traces and errors."""

    GREY = "\x1b[38;5;244m"
    RED = "\x1b[38;5;196m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.ERROR: RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with a colored level name."""
        levelname = f"{record.levelname:8}"
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is not None:
            levelname = f"{color}{levelname}{self.RESET}"
        return f"{levelname} {record.name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """
    Send log records to stderr, keeping stdout for the challenges.

    Without `--verbose` only failures are reported.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if no_color:
        handler.setFormatter(logging.Formatter("%(levelname)-8s %(name)s: %(message)s"))
    else:
        handler.setFormatter(ColoredFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    """The argument parser of the CLI."""
    parser = argparse.ArgumentParser(
        prog="sponge_spec",
        description="Poseidon sponge transcript tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default=None,
        help="Parameter set (default: selected by SPONGE_ENV)",
    )
    parser.add_argument(
        "--absorb",
        action="append",
        default=[],
        dest="values",
        help="Value to absorb (can be repeated)",
    )
    parser.add_argument("--fork", default=None, help="Fork with this domain before squeezing")
    parser.add_argument("--squeeze", type=int, default=0, help="Field elements to squeeze")
    parser.add_argument("--bits", type=int, default=0, help="Bits to squeeze")
    parser.add_argument("--bytes", type=int, default=0, help="Bytes to squeeze")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose, args.no_color)

    if min(args.squeeze, args.bits, args.bytes) < 0:
        parser.error("squeeze counts must be non-negative")
    if not (args.squeeze or args.bits or args.bytes):
        parser.error("nothing to squeeze: pass --squeeze, --bits or --bytes")

    params = PRESETS[args.preset] if args.preset else DEFAULT_PARAMS
    try:
        lines = squeeze_challenges(
            params,
            args.values,
            fork=args.fork,
            num_elements=args.squeeze,
            num_bits=args.bits,
            num_bytes=args.bytes,
        )
    except (SpongeError, ValueError) as e:
        logger.error("%s", e)
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Command-line interface for PaperLink code generation and recovery.

Usage:
    paperlink generate --count 5
    paperlink generate --count 5 --codes codes.txt
    paperlink validate PL-7A9-K2M
    paperlink extract "noise PL-7a9-k2m noise"
    paperlink candidates PL-0A9-K2M
    paperlink resolve "PL-0A9-K2M" --codes codes.txt
    paperlink scan PL-7A9-K2N --codes codes.txt
"""

import argparse
import logging
import random
from pathlib import Path
from typing import List, Optional

from src.codes.format import (
    CodeGenerationError,
    extract_codes,
    generate_code,
    is_valid_code,
)

from .corrector import generate_candidates
from .processor import CodeResolver

logger = logging.getLogger(__name__)


def read_known_codes(path: Path) -> List[str]:
    """
    Read known codes from a text file, one per line.

    Blank lines and lines starting with '#' are ignored.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    if not path.exists():
        raise FileNotFoundError(f"Codes file not found: {path}")

    codes = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#"):
                codes.append(line)

    logger.debug(f"Loaded {len(codes)} known codes from {path}")
    return codes


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paperlink",
        description="Generate PaperLink codes and recover them from OCR output",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate new codes")
    generate.add_argument("--count", type=int, default=1, help="Number of codes")
    generate.add_argument("--seed", type=int, default=None, help="Random seed")
    generate.add_argument(
        "--codes", type=str, default=None, help="Known codes to avoid collisions with"
    )
    generate.add_argument(
        "--config", type=str, default=None, help="Configuration file (requires --codes)"
    )

    validate = subparsers.add_parser("validate", help="Check a code's format")
    validate.add_argument("code", help="Code to validate")

    extract = subparsers.add_parser("extract", help="Extract codes from text")
    extract.add_argument("text", help="OCR transcript")

    candidates = subparsers.add_parser("candidates", help="List OCR corrections")
    candidates.add_argument("text", help="Raw OCR reading")

    for name, help_text in (
        ("resolve", "Resolve OCR text against known codes"),
        ("scan", "Resolve a live-scanned code (single substitution)"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("text", help="OCR text or scanned code")
        sub.add_argument(
            "--codes", type=str, required=True, help="File with one known code per line"
        )
        sub.add_argument("--config", type=str, default=None, help="Configuration file")
        if name == "resolve":
            sub.add_argument(
                "--max-distance",
                type=int,
                default=None,
                help="Override the configured edit-distance budget",
            )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if args.command == "generate":
        if args.config is not None and args.codes is None:
            parser.error("--config requires --codes")
        rng = random.Random(args.seed) if args.seed is not None else None
        if args.codes is None:
            for _ in range(args.count):
                print(generate_code(rng))
            return

        try:
            known_codes = read_known_codes(Path(args.codes))
            resolver = CodeResolver(Path(args.config) if args.config else None)
            for _ in range(args.count):
                code = resolver.issue_code(known_codes, rng)
                known_codes.append(code)
                print(code)
        except (FileNotFoundError, CodeGenerationError) as e:
            logging.error(f"Generation failed: {e}")
            raise SystemExit(1) from e
        return

    if args.command == "validate":
        valid = is_valid_code(args.code)
        print("valid" if valid else "invalid")
        if not valid:
            raise SystemExit(1)
        return

    if args.command == "extract":
        for code in extract_codes(args.text):
            print(code)
        return

    if args.command == "candidates":
        for candidate in generate_candidates(args.text):
            print(candidate)
        return

    try:
        known_codes = read_known_codes(Path(args.codes))
        resolver = CodeResolver(Path(args.config) if args.config else None)
    except (FileNotFoundError, ValueError) as e:
        logging.error(f"Setup failed: {e}")
        raise SystemExit(1) from e

    if args.command == "resolve":
        if args.max_distance is not None:
            if args.max_distance < 0:
                parser.error("--max-distance must be >= 0")
            resolver.config.recovery.matching.max_distance = args.max_distance
        result = resolver.resolve(args.text, known_codes)
    else:
        result = resolver.resolve_scan(args.text, known_codes)

    if result.is_pass():
        print(f"{result.code}\t{result.method.value}\t{result.distance}")
        return

    print(f"no match: {result.rejection_reason.message}")
    raise SystemExit(1)


if __name__ == "__main__":
    main()

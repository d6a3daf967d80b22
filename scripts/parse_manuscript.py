#!/usr/bin/env python3
"""Parse a manuscript file and dump its document tree as JSON.

Usage:
    python3 scripts/parse_manuscript.py story.txt
    python3 scripts/parse_manuscript.py story.txt --output tree.json --verbose

Structured JSON output goes to stdout (or --output); human messages go to stderr.
Exit status is 1 when the manuscript fails to parse.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

log = logging.getLogger("parse_manuscript")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Parse a manuscript and dump its document tree as JSON."
    )
    parser.add_argument("input", type=Path, help="Manuscript source file")
    parser.add_argument(
        "--output", "-o", type=Path, default=None,
        help="Write JSON here instead of stdout",
    )
    parser.add_argument(
        "--compact", action="store_true",
        help="Emit compact JSON without indentation",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Verbose logging",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    src = Path(__file__).resolve().parents[1] / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from manuscript.errors import ScanError
    from manuscript.parser import parse_file
    from manuscript.serialize import dump_document_json, save_document_json

    if not args.input.exists():
        log.error("Manuscript not found: %s", args.input)
        return 1

    try:
        document = parse_file(args.input)
    except ScanError as exc:
        log.error("%s: %s", args.input, exc)
        return 1

    log.info(
        "Parsed %s: %d parts, %d chapters",
        args.input,
        len(document.parts),
        sum(len(part.chapters) for part in document.parts),
    )

    if args.output is not None:
        save_document_json(document, args.output, pretty=not args.compact)
        log.info("Wrote %s", args.output)
    else:
        sys.stdout.buffer.write(dump_document_json(document, pretty=not args.compact))
        sys.stdout.buffer.write(b"\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Parse manuscript source into a Document."""

from __future__ import annotations

import logging
from pathlib import Path

from manuscript.builder import build_document
from manuscript.normalization import normalize_source
from manuscript.scanner import scan
from manuscript.types import Document

log = logging.getLogger(__name__)


def parse(text: str) -> Document:
    """Normalize, scan and structure manuscript source.

    Raises a ``ScanError`` subclass on malformed input; no partial
    document is ever returned.
    """

    metadata, elements = scan(normalize_source(text))
    document = build_document(metadata, elements)
    log.debug(
        "Parsed %r: %d elements, %d parts",
        metadata.title,
        len(elements),
        len(document.parts),
    )
    return document


def parse_file(path: Path) -> Document:
    """Read a UTF-8 manuscript file and parse it."""
    log.debug("Reading manuscript %s", path)
    return parse(path.read_text(encoding="utf-8-sig"))

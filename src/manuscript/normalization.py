"""Deterministic source normalization ahead of scanning."""

from __future__ import annotations


_BOM = "\ufeff"


def normalize_source(text: str) -> str:
    """Normalize manuscript source text.

    Current deterministic transforms:
    1. Drop a leading byte-order mark.
    2. Collapse CRLF and CR to LF.
    """

    raw = text or ""
    if raw.startswith(_BOM):
        raw = raw[len(_BOM):]
    if "\r" not in raw:
        return raw
    return raw.replace("\r\n", "\n").replace("\r", "\n")

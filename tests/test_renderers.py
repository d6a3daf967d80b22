"""Tests for renderer option parsing and resolution."""

from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import BinaryIO, TextIO

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from manuscript.labels import heading_label
from manuscript.parser import parse
from manuscript.renderers import (
    RendererConstructor,
    RendererResolutionError,
    parse_renderer_option,
    resolve_renderer,
)
from manuscript.types import Document


class _OutlineRenderer:
    """Writes one heading label per line."""

    def __init__(self, document: Document, options: dict[str, str]) -> None:
        self.document = document
        self.options = options

    def render(self, stream: TextIO | BinaryIO) -> None:
        assert isinstance(stream, io.StringIO)
        prefix = self.options.get("prefix", "")
        for part in self.document.parts:
            for unit in (part, *part.chapters):
                label = heading_label(unit)
                if label is not None:
                    stream.write(f"{prefix}{label}\n")


_REGISTRY: dict[str, RendererConstructor] = {"outline": _OutlineRenderer}

_DOCUMENT = parse(
    "@type novel\n@title T\n@authorByline A\n@begin\n"
    "@part Away\n@chapter Gone\nText.\n",
)


class TestParseRendererOption:
    def test_bare_name(self) -> None:
        assert parse_renderer_option("pdf") == ("pdf", {})

    def test_name_with_options(self) -> None:
        assert parse_renderer_option("html(style = plain, toc=yes)") == (
            "html",
            {"style": "plain", "toc": "yes"},
        )

    @pytest.mark.parametrize("option", ["", "html(", "html()", "html(style)", "two words"])
    def test_invalid_option_strings(self, option: str) -> None:
        with pytest.raises(RendererResolutionError):
            parse_renderer_option(option)


class TestResolveRenderer:
    def test_resolved_renderer_writes_document(self) -> None:
        renderer = resolve_renderer(_REGISTRY, _DOCUMENT, "outline(prefix=x)")
        out = io.StringIO()
        renderer.render(out)
        assert out.getvalue() == "xPart I: Away\nxChapter 1: Gone\n"

    def test_unknown_renderer(self) -> None:
        with pytest.raises(RendererResolutionError, match="bbcode"):
            resolve_renderer(_REGISTRY, _DOCUMENT, "bbcode")

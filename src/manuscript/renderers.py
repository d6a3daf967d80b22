"""Renderer boundary.

Renderers live outside this package. They are registered by name as
constructors taking the finished Document and a dict of string options,
and selected with an option string such as ``pdf`` or
``html(style=plain, toc=yes)``.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import BinaryIO, Protocol, TextIO

from manuscript.types import Document


class Renderer(Protocol):
    """Writes one Document to an output stream."""

    def render(self, stream: TextIO | BinaryIO) -> None: ...


type RendererConstructor = Callable[[Document, dict[str, str]], Renderer]


class RendererResolutionError(ValueError):
    """Renderer option string is malformed or names no known renderer."""


_OPTION_RE = re.compile(
    r"^(\w+)(?:\((\s*\w+\s*=\s*\w+\s*(?:,\s*\w+\s*=\s*\w+\s*)*)\))?$",
)


def parse_renderer_option(option: str) -> tuple[str, dict[str, str]]:
    """Split ``name(k=v, ...)`` into the renderer name and its options."""

    match = _OPTION_RE.match(option.strip())
    if match is None:
        raise RendererResolutionError(f"invalid renderer string {option!r}")
    name, raw_args = match.group(1), match.group(2)
    options: dict[str, str] = {}
    if raw_args:
        for pair in raw_args.split(","):
            key, value = pair.split("=")
            options[key.strip()] = value.strip()
    return name, options


def resolve_renderer(
    registry: Mapping[str, RendererConstructor],
    document: Document,
    option: str,
) -> Renderer:
    """Construct the renderer named by ``option`` for ``document``."""

    name, options = parse_renderer_option(option)
    constructor = registry.get(name)
    if constructor is None:
        known = ", ".join(sorted(registry)) or "none"
        raise RendererResolutionError(
            f"{name!r} is not a valid renderer (known: {known})",
        )
    return constructor(document, options)

"""Deterministic JSON snapshots of parsed documents."""

from __future__ import annotations

from pathlib import Path

import orjson

from manuscript.types import Chapter, Document, Metadata, Paragraph, Part, Scene


def _metadata_to_dict(metadata: Metadata) -> dict[str, object]:
    author = metadata.author
    return {
        "kind": metadata.kind.value,
        "title": metadata.title,
        "short_title": metadata.short_title,
        "author": {
            "byline": author.byline,
            "name": author.name,
            "short_name": author.short_name,
            "address": list(author.address),
            "phone_number": author.phone_number,
            "email": author.email,
            "professional_orgs": list(author.professional_orgs),
        },
    }


def _paragraph_to_dict(paragraph: Paragraph) -> list[dict[str, str]]:
    return [
        {"emphasis": run.emphasis.value, "text": run.text}
        for run in paragraph.runs
    ]


def _scene_to_dict(scene: Scene) -> dict[str, object]:
    return {
        "ends_with_break": scene.ends_with_break,
        "paragraphs": [_paragraph_to_dict(p) for p in scene.paragraphs],
    }


def _chapter_to_dict(chapter: Chapter) -> dict[str, object]:
    return {
        "anonymous": chapter.anonymous,
        "prologue": chapter.prologue,
        "number": chapter.number,
        "title": chapter.title,
        "scenes": [_scene_to_dict(s) for s in chapter.scenes],
    }


def _part_to_dict(part: Part) -> dict[str, object]:
    return {
        "anonymous": part.anonymous,
        "number": part.number,
        "title": part.title,
        "chapters": [_chapter_to_dict(c) for c in part.chapters],
    }


def document_to_dict(document: Document) -> dict[str, object]:
    """Serialize a document for deterministic snapshots."""

    return {
        "metadata": _metadata_to_dict(document.metadata),
        "parts": [_part_to_dict(p) for p in document.parts],
    }


def dump_document_json(document: Document, *, pretty: bool = True) -> bytes:
    opts = orjson.OPT_INDENT_2 if pretty else 0
    return orjson.dumps(document_to_dict(document), option=opts)


def save_document_json(document: Document, path: Path, *, pretty: bool = True) -> None:
    """Write the JSON snapshot of ``document`` to ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(dump_document_json(document, pretty=pretty))

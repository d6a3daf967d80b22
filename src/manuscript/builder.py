"""Structure builder: fold the flat element stream into a Document tree.

Partitioning runs top-down, one boundary kind per level:

  PartBreak                    -> Part
  ChapterBreak / PrologueBreak -> Chapter
  SceneBreak                   -> Scene
  ParagraphBreak               -> Paragraph

Content before the first marker of a level forms an anonymous unit.
Anonymous units are numbered 0 and never advance a counter. Empty units
are dropped at every level, including explicit parts and chapters, and a
dropped unit does not advance its counter.
"""

from __future__ import annotations

from collections.abc import Sequence

from manuscript.types import (
    Chapter,
    ChapterBreak,
    Document,
    Element,
    Metadata,
    Note,
    Paragraph,
    ParagraphBreak,
    Part,
    PartBreak,
    PrologueBreak,
    Scene,
    SceneBreak,
    TextRun,
)


def _partition[M](
    elements: Sequence[Element],
    marker_types: tuple[type[M], ...],
) -> list[tuple[M | None, list[Element]]]:
    """Split ``elements`` at each marker.

    The first group is always the (possibly empty) leading group with
    marker ``None``; every later group starts at the marker that opened it.
    """

    groups: list[tuple[M | None, list[Element]]] = [(None, [])]
    for element in elements:
        if isinstance(element, marker_types):
            groups.append((element, []))
        else:
            groups[-1][1].append(element)
    return groups


def build_paragraphs(elements: Sequence[Element]) -> tuple[Paragraph, ...]:
    """Group text runs between paragraph breaks."""

    paragraphs: list[Paragraph] = []
    runs: list[TextRun] = []
    for element in elements:
        match element:
            case TextRun():
                runs.append(element)
            case ParagraphBreak():
                if runs:
                    paragraphs.append(Paragraph(runs=tuple(runs)))
                    runs = []
            case Note():
                continue
            case SceneBreak() | PartBreak() | PrologueBreak() | ChapterBreak():
                raise ValueError(
                    f"{type(element).__name__} cannot appear inside a scene",
                )
    if runs:
        paragraphs.append(Paragraph(runs=tuple(runs)))
    return tuple(paragraphs)


def build_scenes(elements: Sequence[Element]) -> tuple[Scene, ...]:
    """Split chapter content on scene breaks.

    A scene followed by a break is marked ``ends_with_break``; the empty
    group after a trailing break is dropped.
    """

    groups = _partition(elements, (SceneBreak,))
    scenes: list[Scene] = []
    for idx, (_, group) in enumerate(groups):
        paragraphs = build_paragraphs(group)
        if not paragraphs:
            continue
        ends_with_break = idx + 1 < len(groups)
        scenes.append(Scene(paragraphs=paragraphs, ends_with_break=ends_with_break))
    return tuple(scenes)


def build_chapters(elements: Sequence[Element]) -> tuple[Chapter, ...]:
    """Split part content on chapter and prologue breaks and number them."""

    chapters: list[Chapter] = []
    chapter_number = 0
    prologue_number = 0
    for marker, group in _partition(elements, (ChapterBreak, PrologueBreak)):
        scenes = build_scenes(group)
        if not scenes:
            continue
        match marker:
            case None:
                chapters.append(Chapter(scenes=scenes, anonymous=True))
            case PrologueBreak(title=title):
                prologue_number += 1
                chapters.append(
                    Chapter(
                        scenes=scenes,
                        prologue=True,
                        number=prologue_number,
                        title=title,
                    ),
                )
            case ChapterBreak(title=title):
                chapter_number += 1
                chapters.append(
                    Chapter(scenes=scenes, number=chapter_number, title=title),
                )
    return tuple(chapters)


def build_parts(elements: Sequence[Element]) -> tuple[Part, ...]:
    """Fold a scanner element stream into numbered parts."""

    content = [element for element in elements if not isinstance(element, Note)]
    parts: list[Part] = []
    part_number = 0
    for marker, group in _partition(content, (PartBreak,)):
        chapters = build_chapters(group)
        if not chapters:
            continue
        if marker is None:
            parts.append(Part(chapters=chapters, anonymous=True))
            continue
        part_number += 1
        parts.append(
            Part(chapters=chapters, number=part_number, title=marker.title),
        )
    return tuple(parts)


def build_document(metadata: Metadata, elements: Sequence[Element]) -> Document:
    return Document(metadata=metadata, parts=build_parts(elements))

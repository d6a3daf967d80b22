"""Tests for folding the flat element stream into the document tree."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from manuscript.builder import (
    build_chapters,
    build_document,
    build_paragraphs,
    build_parts,
    build_scenes,
)
from manuscript.types import (
    ChapterBreak,
    Emphasis,
    Metadata,
    Note,
    ParagraphBreak,
    PartBreak,
    PrologueBreak,
    SceneBreak,
    StoryKind,
    TextRun,
)


def _run(text: str) -> TextRun:
    return TextRun(Emphasis.PLAIN, text)


class TestParagraphs:
    def test_runs_grouped_between_breaks(self) -> None:
        paragraphs = build_paragraphs(
            [_run("a"), TextRun(Emphasis.ITALIC, "b"), ParagraphBreak(), _run("c")],
        )
        assert [p.text for p in paragraphs] == ["ab", "c"]
        assert paragraphs[0].runs[1].emphasis is Emphasis.ITALIC

    def test_empty_paragraphs_dropped(self) -> None:
        paragraphs = build_paragraphs(
            [ParagraphBreak(), _run("a"), ParagraphBreak(), ParagraphBreak()],
        )
        assert [p.text for p in paragraphs] == ["a"]

    def test_structural_marker_inside_scene_rejected(self) -> None:
        with pytest.raises(ValueError):
            build_paragraphs([_run("a"), SceneBreak()])


class TestScenes:
    def test_break_marks_preceding_scene(self) -> None:
        scenes = build_scenes([_run("a"), ParagraphBreak(), SceneBreak(), _run("b")])
        assert len(scenes) == 2
        assert scenes[0].ends_with_break is True
        assert scenes[1].ends_with_break is False

    def test_trailing_break_creates_no_empty_scene(self) -> None:
        scenes = build_scenes([_run("a"), ParagraphBreak(), SceneBreak()])
        assert len(scenes) == 1
        assert scenes[0].ends_with_break is True

    def test_repeated_and_leading_breaks_dropped(self) -> None:
        scenes = build_scenes(
            [SceneBreak(), _run("a"), SceneBreak(), SceneBreak(), _run("b")],
        )
        assert [s.paragraphs[0].text for s in scenes] == ["a", "b"]
        assert [s.ends_with_break for s in scenes] == [True, False]


class TestChapters:
    def test_chapter_and_prologue_counters_independent(self) -> None:
        chapters = build_chapters(
            [
                PrologueBreak("Before"),
                _run("p1"),
                ChapterBreak("One"),
                _run("c1"),
                PrologueBreak(""),
                _run("p2"),
                ChapterBreak("Two"),
                _run("c2"),
            ],
        )
        assert [(c.prologue, c.number, c.title) for c in chapters] == [
            (True, 1, "Before"),
            (False, 1, "One"),
            (True, 2, ""),
            (False, 2, "Two"),
        ]
        assert not any(c.anonymous for c in chapters)

    def test_leading_content_forms_anonymous_chapter(self) -> None:
        chapters = build_chapters([_run("intro"), ChapterBreak("One"), _run("x")])
        assert chapters[0].anonymous is True
        assert chapters[0].number == 0
        assert chapters[1].number == 1

    def test_empty_chapter_dropped_without_advancing_counter(self) -> None:
        chapters = build_chapters([ChapterBreak("Empty"), ChapterBreak("Full"), _run("x")])
        assert [(c.title, c.number) for c in chapters] == [("Full", 1)]

    def test_empty_prologue_dropped(self) -> None:
        chapters = build_chapters(
            [
                PrologueBreak("Empty"),
                SceneBreak(),
                ChapterBreak("One"),
                _run("x"),
                ChapterBreak("Trailing"),
            ],
        )
        assert [(c.prologue, c.number, c.title) for c in chapters] == [
            (False, 1, "One"),
        ]


class TestParts:
    def test_numbering_across_parts(self) -> None:
        parts = build_parts(
            [
                _run("front"),
                ParagraphBreak(),
                PartBreak("I"),
                ChapterBreak("a"),
                _run("x"),
                PrologueBreak(""),
                _run("y"),
                ChapterBreak("b"),
                _run("z"),
                PartBreak("II"),
                _run("loose"),
                ChapterBreak(""),
                _run("w"),
            ],
        )
        assert [(p.anonymous, p.number, p.title) for p in parts] == [
            (True, 0, ""),
            (False, 1, "I"),
            (False, 2, "II"),
        ]
        assert [(c.anonymous, c.prologue, c.number) for c in parts[0].chapters] == [
            (True, False, 0),
        ]
        assert [(c.prologue, c.number, c.title) for c in parts[1].chapters] == [
            (False, 1, "a"),
            (True, 1, ""),
            (False, 2, "b"),
        ]
        # chapter counter resets per part; anonymous chapter never counted
        assert [(c.anonymous, c.number) for c in parts[2].chapters] == [
            (True, 0),
            (False, 1),
        ]

    def test_notes_discarded(self) -> None:
        parts = build_parts(
            [Note("x"), _run("a"), Note("y"), ParagraphBreak(), _run("b")],
        )
        scene = parts[0].chapters[0].scenes[0]
        assert [p.text for p in scene.paragraphs] == ["a", "b"]

    def test_only_notes_yields_no_parts(self) -> None:
        assert build_parts([Note("x"), SceneBreak(), Note("y")]) == ()

    def test_empty_stream(self) -> None:
        assert build_parts([]) == ()

    def test_leading_part_break_has_no_anonymous_part(self) -> None:
        parts = build_parts([PartBreak("One"), _run("a")])
        assert len(parts) == 1
        assert parts[0].anonymous is False
        assert parts[0].number == 1
        assert parts[0].chapters[0].anonymous is True

    def test_empty_part_dropped_without_advancing_counter(self) -> None:
        parts = build_parts(
            [
                PartBreak("Empty"),
                PartBreak("One"),
                ChapterBreak("a"),
                _run("x"),
                PartBreak("Hollow"),
                ChapterBreak("only a heading"),
                PartBreak("Two"),
                _run("y"),
                PartBreak("Trailing"),
            ],
        )
        assert [(p.number, p.title) for p in parts] == [(1, "One"), (2, "Two")]

    def test_prologue_counter_resets_per_part(self) -> None:
        parts = build_parts(
            [
                PartBreak("A"),
                PrologueBreak("p"),
                _run("x"),
                ChapterBreak("c"),
                _run("y"),
                PartBreak("B"),
                PrologueBreak("q"),
                _run("z"),
            ],
        )
        assert [(c.prologue, c.number, c.title) for c in parts[0].chapters] == [
            (True, 1, "p"),
            (False, 1, "c"),
        ]
        assert [(c.prologue, c.number, c.title) for c in parts[1].chapters] == [
            (True, 1, "q"),
        ]


class TestDocument:
    def test_build_document_keeps_metadata(self) -> None:
        metadata = Metadata(kind=StoryKind.NOVEL, title="T")
        document = build_document(metadata, [_run("a")])
        assert document.metadata is metadata
        assert len(document.parts) == 1

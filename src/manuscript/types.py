"""Core types for manuscript scanning and structuring.

Two layers share these types:

  Flat elements: produced by the scanner, one per break/run, in source order
  Document tree: built from the elements as Part > Chapter > Scene > Paragraph > TextRun

All dataclasses are frozen; sequences in the tree are tuples so a built
Document can be handed to any number of readers without copying.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class StoryKind(Enum):
    """Kind of story declared by the ``@type`` directive."""

    SHORT_STORY = "shortStory"
    NOVEL = "novel"


class Emphasis(Enum):
    """Emphasis state of a run of text.

    The scanner tracks one of these instead of separate bold/italic flags,
    so a triple delimiter is a single transition.
    """

    PLAIN = "plain"
    ITALIC = "italic"
    BOLD = "bold"
    BOLD_ITALIC = "bold_italic"

    @property
    def italic(self) -> bool:
        return self in (Emphasis.ITALIC, Emphasis.BOLD_ITALIC)

    @property
    def bold(self) -> bool:
        return self in (Emphasis.BOLD, Emphasis.BOLD_ITALIC)

    @classmethod
    def from_flags(cls, *, italic: bool, bold: bool) -> Emphasis:
        if italic and bold:
            return cls.BOLD_ITALIC
        if bold:
            return cls.BOLD
        if italic:
            return cls.ITALIC
        return cls.PLAIN

    def toggled(self, *, italic: bool = False, bold: bool = False) -> Emphasis:
        """Return the state reached by flipping the requested axes together."""
        return Emphasis.from_flags(
            italic=self.italic != italic,
            bold=self.bold != bold,
        )


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Author:
    """Author block from the front matter. Absent fields are empty."""

    byline: str = ""
    name: str = ""
    short_name: str = ""
    address: tuple[str, ...] = ()
    phone_number: str = ""
    email: str = ""
    professional_orgs: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Metadata:
    """Front matter read before ``@begin``."""

    kind: StoryKind
    title: str
    short_title: str = ""
    author: Author = field(default_factory=Author)


# ---------------------------------------------------------------------------
# Flat elements
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParagraphBreak:
    """End of a paragraph."""


@dataclass(frozen=True, slots=True)
class SceneBreak:
    """Explicit ``@scene`` break."""


@dataclass(frozen=True, slots=True)
class PartBreak:
    title: str = ""


@dataclass(frozen=True, slots=True)
class PrologueBreak:
    title: str = ""


@dataclass(frozen=True, slots=True)
class ChapterBreak:
    title: str = ""


@dataclass(frozen=True, slots=True)
class Note:
    """Author note from ``@note``; never reaches the document tree."""

    text: str = ""


@dataclass(frozen=True, slots=True)
class TextRun:
    """Contiguous text sharing one emphasis state."""

    emphasis: Emphasis
    text: str

    def __post_init__(self) -> None:
        if not self.text:
            raise ValueError("TextRun text cannot be empty")


type Element = (
    ParagraphBreak
    | SceneBreak
    | PartBreak
    | PrologueBreak
    | ChapterBreak
    | Note
    | TextRun
)


# ---------------------------------------------------------------------------
# Document tree
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Paragraph:
    runs: tuple[TextRun, ...]

    def __post_init__(self) -> None:
        if not self.runs:
            raise ValueError("Paragraph must contain at least one run")

    @property
    def text(self) -> str:
        """Concatenated run text with emphasis dropped."""
        return "".join(run.text for run in self.runs)


@dataclass(frozen=True, slots=True)
class Scene:
    paragraphs: tuple[Paragraph, ...]
    ends_with_break: bool = False

    def __post_init__(self) -> None:
        if not self.paragraphs:
            raise ValueError("Scene must contain at least one paragraph")


@dataclass(frozen=True, slots=True)
class Chapter:
    """A chapter or prologue.

    Anonymous chapters (content with no introducing directive) carry
    number 0. Prologues are numbered independently of chapters.
    """

    scenes: tuple[Scene, ...]
    anonymous: bool = False
    prologue: bool = False
    number: int = 0
    title: str = ""

    def __post_init__(self) -> None:
        if not self.scenes:
            raise ValueError("Chapter must contain at least one scene")
        if self.number < 0:
            raise ValueError(f"number must be >= 0, got {self.number}")
        if self.anonymous:
            if self.number != 0:
                raise ValueError("anonymous chapter must have number 0")
        elif self.number == 0:
            raise ValueError("explicit chapter must have number >= 1")


@dataclass(frozen=True, slots=True)
class Part:
    chapters: tuple[Chapter, ...]
    anonymous: bool = False
    number: int = 0
    title: str = ""

    def __post_init__(self) -> None:
        if not self.chapters:
            raise ValueError("Part must contain at least one chapter")
        if self.number < 0:
            raise ValueError(f"number must be >= 0, got {self.number}")
        if self.anonymous:
            if self.number != 0:
                raise ValueError("anonymous part must have number 0")
        elif self.number == 0:
            raise ValueError("explicit part must have number >= 1")


@dataclass(frozen=True, slots=True)
class Document:
    metadata: Metadata
    parts: tuple[Part, ...] = ()

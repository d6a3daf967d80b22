"""Manuscript scanner: source text to metadata plus a flat element stream.

The scanner reads normalized text (see ``normalize_source``) one character
at a time with a single character of pushback. It runs in two phases:

  metadata: ``@name`` directives with line arguments, up to ``@begin``
  body:     ``@part``/``@prologue``/``@chapter``/``@scene``/``@note``
            directives and paragraphs of emphasised text

Any failure raises a ``ScanError`` subclass and ends the scan.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from manuscript.errors import (
    InvalidEnumValue,
    MalformedDirectiveSyntax,
    MissingRequiredValue,
    UnexpectedEndOfInput,
    UnrecognizedDirective,
)
from manuscript.types import (
    Author,
    ChapterBreak,
    Element,
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

SIGIL = "@"
DELIMITER = "*"
ESCAPE = "\\"

_BEGIN = "begin"

# Metadata directives taking exactly one argument -> field key
_SINGLE_VALUE_DIRECTIVES: dict[str, str] = {
    "type": "kind",
    "title": "title",
    "shortTitle": "short_title",
    "authorByline": "byline",
    "authorName": "name",
    "authorShortName": "short_name",
    "authorPhoneNumber": "phone_number",
    "authorEmail": "email",
}

# Metadata directives taking one or more line arguments -> field key
_MULTI_VALUE_DIRECTIVES: dict[str, str] = {
    "authorAddress": "address",
    "authorOrgs": "professional_orgs",
}

_IGNORED_DIRECTIVES = frozenset({"notes"})

_REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("kind", "type"),
    ("title", "title"),
    ("byline", "authorByline"),
)

_STORY_KINDS: dict[str, StoryKind] = {kind.value: kind for kind in StoryKind}

_TITLED_BODY_DIRECTIVES: dict[
    str,
    type[PartBreak] | type[PrologueBreak] | type[ChapterBreak] | type[Note],
] = {
    "part": PartBreak,
    "prologue": PrologueBreak,
    "chapter": ChapterBreak,
    "note": Note,
}


# ---------------------------------------------------------------------------
# Character reader
# ---------------------------------------------------------------------------

class CharReader:
    """Character cursor over a string with one character of pushback."""

    __slots__ = ("_text", "_pos", "_can_unread")

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self._can_unread = False

    @property
    def position(self) -> int:
        return self._pos

    def read(self) -> str | None:
        """Return the next character, or None at end of input."""
        if self._pos >= len(self._text):
            self._can_unread = False
            return None
        ch = self._text[self._pos]
        self._pos += 1
        self._can_unread = True
        return ch

    def unread(self) -> None:
        """Push back the character returned by the last ``read``."""
        if not self._can_unread:
            raise RuntimeError("CharReader supports a single character of pushback")
        self._pos -= 1
        self._can_unread = False

    def peek(self) -> str | None:
        ch = self.read()
        if ch is not None:
            self.unread()
        return ch


def skip_whitespace(reader: CharReader) -> str | None:
    """Consume whitespace and return the next character without consuming it."""
    while True:
        ch = reader.read()
        if ch is None:
            return None
        if not ch.isspace():
            reader.unread()
            return ch


def read_word(reader: CharReader) -> str:
    """Read up to the next whitespace character or end of input."""
    chars: list[str] = []
    while True:
        ch = reader.read()
        if ch is None:
            break
        if ch.isspace():
            reader.unread()
            break
        chars.append(ch)
    return "".join(chars)


def read_line(reader: CharReader, directive: str) -> str:
    """Read through the next newline and return the line without it."""
    chars: list[str] = []
    while True:
        ch = reader.read()
        if ch is None:
            raise UnexpectedEndOfInput(
                "input ended inside a directive argument",
                position=reader.position,
                directive=directive,
            )
        if ch == "\n":
            return "".join(chars)
        chars.append(ch)


def _read_directive_name(reader: CharReader) -> tuple[int, str]:
    """Consume ``@name`` at the reader position and return (offset, name)."""
    position = reader.position
    ch = reader.read()
    if ch != SIGIL:
        raise MalformedDirectiveSyntax(
            f"expected {SIGIL!r} to start a directive",
            position=position,
        )
    name = read_word(reader)
    if not name:
        raise MalformedDirectiveSyntax(
            f"directive name missing after {SIGIL!r}",
            position=position,
        )
    return position, name


# ---------------------------------------------------------------------------
# Metadata phase
# ---------------------------------------------------------------------------

def _read_metadata_arguments(reader: CharReader, name: str) -> list[str]:
    args: list[str] = []
    while True:
        ch = skip_whitespace(reader)
        if ch is None:
            raise UnexpectedEndOfInput(
                f"input ended before @{_BEGIN}",
                position=reader.position,
                directive=name,
            )
        if ch == SIGIL:
            return args
        args.append(read_line(reader, name).rstrip())


def scan_metadata(reader: CharReader) -> Metadata:
    """Read front-matter directives through ``@begin``."""

    kind: StoryKind | None = None
    values: dict[str, str] = {}
    lines: dict[str, tuple[str, ...]] = {}
    while True:
        if skip_whitespace(reader) is None:
            raise UnexpectedEndOfInput(
                f"input ended before @{_BEGIN}",
                position=reader.position,
            )
        position, name = _read_directive_name(reader)
        if name == _BEGIN:
            break

        if name in _SINGLE_VALUE_DIRECTIVES:
            args = _read_metadata_arguments(reader, name)
            if len(args) != 1:
                raise MissingRequiredValue(
                    f"expected exactly one value, got {len(args)}",
                    position=position,
                    directive=name,
                )
            key = _SINGLE_VALUE_DIRECTIVES[name]
            if key == "kind":
                if args[0] not in _STORY_KINDS:
                    raise InvalidEnumValue(
                        f"story type must be one of {sorted(_STORY_KINDS)}, got {args[0]!r}",
                        position=position,
                        directive=name,
                    )
                kind = _STORY_KINDS[args[0]]
            values[key] = args[0]
        elif name in _MULTI_VALUE_DIRECTIVES:
            args = _read_metadata_arguments(reader, name)
            if not args:
                raise MissingRequiredValue(
                    "expected at least one value",
                    position=position,
                    directive=name,
                )
            lines[_MULTI_VALUE_DIRECTIVES[name]] = tuple(args)
        elif name in _IGNORED_DIRECTIVES:
            _read_metadata_arguments(reader, name)
        else:
            raise UnrecognizedDirective(
                "unrecognized metadata directive",
                position=position,
                directive=name,
            )

    for key, directive in _REQUIRED_FIELDS:
        if key not in values:
            raise MissingRequiredValue(
                f"@{directive} is required before @{_BEGIN}",
                position=reader.position,
                directive=directive,
            )

    assert kind is not None
    author = Author(
        byline=values["byline"],
        name=values.get("name", ""),
        short_name=values.get("short_name", ""),
        address=lines.get("address", ()),
        phone_number=values.get("phone_number", ""),
        email=values.get("email", ""),
        professional_orgs=lines.get("professional_orgs", ()),
    )
    return Metadata(
        kind=kind,
        title=values["title"],
        short_title=values.get("short_title", ""),
        author=author,
    )


# ---------------------------------------------------------------------------
# Body phase
# ---------------------------------------------------------------------------

def _scan_body_directive(reader: CharReader) -> Element:
    position, name = _read_directive_name(reader)
    if name == "scene":
        return SceneBreak()
    factory = _TITLED_BODY_DIRECTIVES.get(name)
    if factory is None:
        raise MalformedDirectiveSyntax(
            "directive is not allowed in the story body",
            position=position,
            directive=name,
        )
    return factory(read_line(reader, name).strip())


@dataclass(slots=True)
class _ParagraphLexer:
    """Single-pass lexer for one paragraph.

    Whitespace is held as ``space_pending`` and only written when more text
    follows, so a paragraph never starts or ends with a collapsed space and
    never carries two in a row.
    """

    reader: CharReader
    state: Emphasis = Emphasis.PLAIN
    buffer: list[str] = field(default_factory=list)
    elements: list[Element] = field(default_factory=list)
    space_pending: bool = False
    last_char: str = ""

    def run(self) -> list[Element]:
        reader = self.reader
        while True:
            ch = reader.read()
            if ch is None:
                self._flush()
                return self.elements
            if ch == "\n":
                if self._at_paragraph_end():
                    self._flush()
                    if reader.peek() is not None:
                        self.elements.append(ParagraphBreak())
                    return self.elements
                self.space_pending = True
            elif ch.isspace():
                self.space_pending = True
            elif ch == ESCAPE:
                literal = reader.read()
                if literal is None:
                    raise UnexpectedEndOfInput(
                        "input ended inside an escape sequence",
                        position=reader.position,
                    )
                # escaped whitespace is written verbatim, never collapsed
                self._emit(literal)
            elif ch == DELIMITER:
                self._toggle()
            else:
                self._emit(ch)

    def _at_paragraph_end(self) -> bool:
        """After a newline: skip indentation, report blank line / directive / EOF."""
        reader = self.reader
        while True:
            ch = reader.read()
            if ch is None:
                return True
            if ch == "\n" or ch == SIGIL:
                reader.unread()
                return True
            if not ch.isspace():
                reader.unread()
                return False

    def _write_pending_space(self) -> None:
        if self.space_pending:
            self.space_pending = False
            if self.last_char and self.last_char != " ":
                self.buffer.append(" ")
                self.last_char = " "

    def _emit(self, ch: str) -> None:
        self._write_pending_space()
        self.buffer.append(ch)
        self.last_char = ch

    def _toggle(self) -> None:
        count = 1
        while count < 3 and self.reader.peek() == DELIMITER:
            self.reader.read()
            count += 1
        # 1 -> italic, 2 -> bold, 3 -> both
        self._write_pending_space()
        self._flush()
        self.state = self.state.toggled(italic=count != 2, bold=count >= 2)

    def _flush(self) -> None:
        if self.buffer:
            self.elements.append(TextRun(self.state, "".join(self.buffer)))
            self.buffer.clear()


def scan_paragraph(reader: CharReader) -> list[Element]:
    """Lex one paragraph; the result ends with ``ParagraphBreak`` unless input ended."""
    return _ParagraphLexer(reader).run()


def scan_body(reader: CharReader) -> list[Element]:
    """Read directives and paragraphs until end of input."""

    elements: list[Element] = []
    while True:
        ch = skip_whitespace(reader)
        if ch is None:
            return elements
        if ch == SIGIL:
            elements.append(_scan_body_directive(reader))
        else:
            elements.extend(scan_paragraph(reader))


def scan(text: str) -> tuple[Metadata, list[Element]]:
    """Scan normalized manuscript text.

    Returns:
    1. `Metadata` from the front matter
    2. flat list of `Element` in source order
    """

    reader = CharReader(text)
    metadata = scan_metadata(reader)
    return metadata, scan_body(reader)

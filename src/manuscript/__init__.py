"""Manuscript markup parser: scanner, structure builder and document types."""

from manuscript.builder import build_document, build_parts
from manuscript.errors import (
    InvalidEnumValue,
    MalformedDirectiveSyntax,
    MissingRequiredValue,
    ScanError,
    UnexpectedEndOfInput,
    UnrecognizedDirective,
)
from manuscript.labels import (
    chapter_label,
    heading_label,
    int_to_roman,
    part_label,
    prologue_label,
)
from manuscript.normalization import normalize_source
from manuscript.parser import parse, parse_file
from manuscript.renderers import (
    Renderer,
    RendererConstructor,
    RendererResolutionError,
    parse_renderer_option,
    resolve_renderer,
)
from manuscript.scanner import CharReader, scan
from manuscript.serialize import document_to_dict, dump_document_json, save_document_json
from manuscript.types import (
    Author,
    Chapter,
    ChapterBreak,
    Document,
    Element,
    Emphasis,
    Metadata,
    Note,
    Paragraph,
    ParagraphBreak,
    Part,
    PartBreak,
    PrologueBreak,
    Scene,
    SceneBreak,
    StoryKind,
    TextRun,
)

__all__ = [
    "Author",
    "Chapter",
    "ChapterBreak",
    "CharReader",
    "Document",
    "Element",
    "Emphasis",
    "InvalidEnumValue",
    "MalformedDirectiveSyntax",
    "Metadata",
    "MissingRequiredValue",
    "Note",
    "Paragraph",
    "ParagraphBreak",
    "Part",
    "PartBreak",
    "PrologueBreak",
    "Renderer",
    "RendererConstructor",
    "RendererResolutionError",
    "ScanError",
    "Scene",
    "SceneBreak",
    "StoryKind",
    "TextRun",
    "UnexpectedEndOfInput",
    "UnrecognizedDirective",
    "build_document",
    "build_parts",
    "chapter_label",
    "document_to_dict",
    "dump_document_json",
    "heading_label",
    "int_to_roman",
    "normalize_source",
    "parse",
    "parse_file",
    "parse_renderer_option",
    "part_label",
    "prologue_label",
    "resolve_renderer",
    "save_document_json",
    "scan",
]

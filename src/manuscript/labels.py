"""Heading labels for parts, chapters and prologues.

Every label is ``<base>`` or ``<base>: <title>``:

  Part IV: The Return
  Chapter 3
  Prologue: Before
"""

from __future__ import annotations

from manuscript.types import Chapter, Part

# ---------------------------------------------------------------------------
# Roman numeral utilities
# ---------------------------------------------------------------------------

_ROMAN_STEPS: tuple[tuple[int, str], ...] = (
    (1000, "M"), (900, "CM"), (500, "D"), (400, "CD"),
    (100, "C"), (90, "XC"), (50, "L"), (40, "XL"),
    (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
)


def int_to_roman(n: int) -> str:
    """Convert int (1-3999) to an uppercase roman numeral."""
    if not 1 <= n <= 3999:
        raise ValueError(f"roman numerals cover 1-3999, got {n}")
    out: list[str] = []
    for value, numeral in _ROMAN_STEPS:
        count, n = divmod(n, value)
        out.append(numeral * count)
    return "".join(out)


def _with_title(base: str, title: str) -> str:
    return f"{base}: {title}" if title else base


def part_label(number: int, title: str = "") -> str:
    return _with_title(f"Part {int_to_roman(number)}", title)


def chapter_label(number: int, title: str = "") -> str:
    return _with_title(f"Chapter {number}", title)


def prologue_label(title: str = "") -> str:
    return _with_title("Prologue", title)


def heading_label(unit: Part | Chapter) -> str | None:
    """Label for an explicit part or chapter; None for anonymous units."""
    if unit.anonymous:
        return None
    if isinstance(unit, Part):
        return part_label(unit.number, unit.title)
    if unit.prologue:
        return prologue_label(unit.title)
    return chapter_label(unit.number, unit.title)

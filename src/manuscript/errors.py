"""Scanner failure taxonomy.

Every failure is terminal: the scanner never resynchronizes, and
``parse`` never returns a partial document.
"""

from __future__ import annotations


class ScanError(ValueError):
    """Base class for all manuscript scanning failures."""

    def __init__(self, message: str, *, position: int, directive: str = "") -> None:
        self.message = message
        self.position = position
        self.directive = directive
        super().__init__(str(self))

    def __str__(self) -> str:
        where = f"offset {self.position}"
        if self.directive:
            return f"{self.message} (@{self.directive}, {where})"
        return f"{self.message} ({where})"


class UnrecognizedDirective(ScanError):
    """Directive name is not part of the grammar."""


class MalformedDirectiveSyntax(UnrecognizedDirective):
    """Directive cannot be read here: bad name, or no ``@`` where one is required."""


class MissingRequiredValue(ScanError):
    """Directive argument count is wrong, or a required field was never set."""


class InvalidEnumValue(ScanError):
    """Argument is not one of the directive's enumerated values."""


class UnexpectedEndOfInput(ScanError):
    """Input ended inside a directive argument or an escape sequence."""

"""Error hierarchy for the seed S-expression pipeline.

Every failure in the lexer, parser, or loader is raised as a distinct
exception carrying an ``ErrorKind`` and, where it applies, the offending
source offset with its 1-based line/column. Library code only raises;
the CLI and HTTP layers decide how to report.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from seed.ast import Position


class ErrorKind(StrEnum):
    """Machine-readable error categories."""

    SOURCE_NOT_FOUND = "source_not_found"
    SOURCE_READ = "source_read"
    UNEXPECTED_CHARACTER = "unexpected_character"
    UNTERMINATED_STRING = "unterminated_string"
    EXPECTED_OPEN_PAREN = "expected_open_paren"
    EXPECTED_OPERAND = "expected_operand"
    EXPECTED_CLOSE_PAREN = "expected_close_paren"
    NESTING_TOO_DEEP = "nesting_too_deep"
    UNEXPECTED_TOKEN = "unexpected_token"


class SeedError(Exception):
    """Base error for everything raised by seed."""

    kind: ErrorKind | None = None

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# ------------------------------------------------------------------ #
# Source loading
# ------------------------------------------------------------------ #


class SourceError(SeedError):
    """The source file could not be loaded."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message)
        self.path = path


class SourceNotFoundError(SourceError):
    kind = ErrorKind.SOURCE_NOT_FOUND

    def __init__(self, path: str) -> None:
        super().__init__(f"file '{path}' does not exist.", path=path)


class SourceReadError(SourceError):
    kind = ErrorKind.SOURCE_READ

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"cannot read file '{path}': {reason}", path=path)
        self.reason = reason


# ------------------------------------------------------------------ #
# Positioned syntax errors
# ------------------------------------------------------------------ #


class SyntaxFailure(SeedError):
    """A lexical or syntactic error at a known source position.

    ``str(err)`` renders as ``"<line>:<column>: <message>"``.
    """

    def __init__(self, message: str, *, offset: int, position: Position) -> None:
        self.offset = offset
        self.position = position
        super().__init__(message)

    @property
    def line(self) -> int:
        return self.position.line

    @property
    def column(self) -> int:
        return self.position.column

    def __str__(self) -> str:
        return f"{self.position}: {self.message}"

    def to_dict(self) -> dict[str, object]:
        return {
            "error": self.message,
            "kind": str(self.kind) if self.kind else None,
            "line": self.line,
            "column": self.column,
        }


class LexError(SyntaxFailure):
    """Raised by the lexer."""


class UnexpectedCharacterError(LexError):
    kind = ErrorKind.UNEXPECTED_CHARACTER

    def __init__(self, char: str, *, offset: int, position: Position) -> None:
        super().__init__(
            f"unexpected character {char!r} ({ord(char)}).",
            offset=offset,
            position=position,
        )
        self.char = char


class UnterminatedStringError(LexError):
    kind = ErrorKind.UNTERMINATED_STRING

    def __init__(self, delimiter: str, *, offset: int, position: Position) -> None:
        super().__init__(
            f"unterminated string literal (missing closing {delimiter}).",
            offset=offset,
            position=position,
        )
        self.delimiter = delimiter


class ParseError(SyntaxFailure):
    """Raised by the parser."""


class ExpectedOpenParenError(ParseError):
    kind = ErrorKind.EXPECTED_OPEN_PAREN

    def __init__(self, *, offset: int, position: Position) -> None:
        super().__init__("expected `(`.", offset=offset, position=position)


class ExpectedOperandError(ParseError):
    kind = ErrorKind.EXPECTED_OPERAND

    def __init__(self, *, offset: int, position: Position) -> None:
        super().__init__("expected identifier or string.", offset=offset, position=position)


class ExpectedCloseParenError(ParseError):
    kind = ErrorKind.EXPECTED_CLOSE_PAREN

    def __init__(self, *, offset: int, position: Position) -> None:
        super().__init__("expected `)`.", offset=offset, position=position)


class NestingTooDeepError(ParseError):
    kind = ErrorKind.NESTING_TOO_DEEP

    def __init__(self, max_depth: int, *, offset: int, position: Position) -> None:
        super().__init__(
            f"expression nesting exceeds the maximum depth of {max_depth}.",
            offset=offset,
            position=position,
        )
        self.max_depth = max_depth


class UnexpectedTokenError(ParseError):
    kind = ErrorKind.UNEXPECTED_TOKEN

    def __init__(self, token_kind: str, *, offset: int, position: Position) -> None:
        super().__init__(f"unexpected token {token_kind}.", offset=offset, position=position)
        self.token_kind = token_kind

"""Tokenizer for seed S-expressions.

The lexer is pull-based: it holds the scan offset and a single lookahead
token, and only scans the next token when the current one is consumed.

Token rules, tried in order at the scan offset:

- end of text or NUL   -> EOF (zero width); nothing after a NUL is read
- ``(`` / ``)``        -> LPAREN / RPAREN
- ``"`` or ``'``       -> STRING; the span excludes both delimiters
- any non-whitespace   -> IDENTIFIER, up to whitespace or a parenthesis.
  A leading backslash is dropped from the span, so ``\\"x`` is the
  identifier ``"x`` and ``\\)`` is an empty identifier before RPAREN.
- whitespace           -> skipped
- lone surrogate       -> UnexpectedCharacterError
"""

from __future__ import annotations

import re

from seed.ast import Position, Span, Token, TokenKind, position
from seed.errors import UnexpectedCharacterError, UnterminatedStringError

WHITESPACE: frozenset[str] = frozenset(" \n\t\v\f")
QUOTES: frozenset[str] = frozenset("\"'")
PARENS: frozenset[str] = frozenset("()")
ESCAPE = "\\"
END_OF_INPUT = "\0"

# Half of a UTF-16 pair on its own; it has no encoding, so it is not text.
_SURROGATE_RE = re.compile("[\ud800-\udfff]")


def _is_surrogate(char: str) -> bool:
    return "\ud800" <= char <= "\udfff"


def _ends_identifier(char: str) -> bool:
    return char in WHITESPACE or char in PARENS or _is_surrogate(char)


class Lexer:
    """Pull-based tokenizer with one token of lookahead.

    Construction scans the first token, so lexical errors at the very
    start of the text surface immediately.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        end = source.find(END_OF_INPUT)
        self._end = end if end != -1 else len(source)
        self._pos = 0
        # True when the last consumed character was a backslash.
        self._after_escape = False
        self._lookahead = Token(kind=TokenKind.NONE, span=Span(0))
        self.advance()

    @property
    def source(self) -> str:
        return self._source

    @property
    def offset(self) -> int:
        """Scan offset: the first character not yet consumed."""
        return self._pos

    def peek(self) -> Token:
        """Return the lookahead token without consuming it."""
        return self._lookahead

    def advance(self) -> Token:
        """Consume the lookahead token and scan the next one."""
        token = self._lookahead
        self._lookahead = self._scan()
        return token

    def position(self) -> Position:
        """Line/column of the current scan offset."""
        return position(self._source, self._pos)

    def position_of(self, offset: int) -> Position:
        return position(self._source, offset)

    # ---------------------------------------------------------------- #
    # Scanning
    # ---------------------------------------------------------------- #

    def _scan(self) -> Token:
        source = self._source
        end = self._end

        while self._pos < end and source[self._pos] in WHITESPACE:
            self._consume_to(self._pos + 1)

        if self._pos >= end:
            return Token(kind=TokenKind.EOF, span=Span(end))

        char = source[self._pos]
        start = self._pos

        if char == "(":
            self._consume_to(start + 1)
            return Token(kind=TokenKind.LPAREN, span=Span(start, 1), text=char)

        if char == ")":
            self._consume_to(start + 1)
            return Token(kind=TokenKind.RPAREN, span=Span(start, 1), text=char)

        if char in QUOTES and not self._after_escape:
            return self._scan_string(char)

        if _is_surrogate(char):
            raise UnexpectedCharacterError(
                char, offset=start, position=self.position_of(start)
            )

        return self._scan_identifier()

    def _scan_string(self, delimiter: str) -> Token:
        opening = self._pos
        closing = self._source.find(delimiter, opening + 1, self._end)
        if closing == -1:
            raise UnterminatedStringError(
                delimiter, offset=opening, position=self.position_of(opening)
            )

        bad = _SURROGATE_RE.search(self._source, opening + 1, closing)
        if bad is not None:
            raise UnexpectedCharacterError(
                bad.group(), offset=bad.start(), position=self.position_of(bad.start())
            )

        span = Span(opening + 1, closing - opening - 1)
        self._consume_to(closing + 1)
        return Token(kind=TokenKind.STRING, span=span, text=span.slice(self._source))

    def _scan_identifier(self) -> Token:
        source = self._source
        start = self._pos
        if source[start] == ESCAPE:
            start += 1

        end = start
        while end < self._end and not _ends_identifier(source[end]):
            end += 1

        span = Span(start, end - start)
        self._consume_to(end)
        return Token(kind=TokenKind.IDENTIFIER, span=span, text=span.slice(source))

    def _consume_to(self, end: int) -> None:
        self._after_escape = end > self._pos and self._source[end - 1] == ESCAPE
        self._pos = end


def tokenize(source: str) -> list[Token]:
    """Lex the whole text; the last token is always EOF."""
    lexer = Lexer(source)
    tokens = [lexer.advance()]
    while tokens[-1].kind != TokenKind.EOF:
        tokens.append(lexer.advance())
    return tokens

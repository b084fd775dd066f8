"""Recursive-descent parser for seed S-expressions.

Grammar::

    expr    := '(' ')'                  -> EmptyNode
             | '(' operand child* ')'   -> ListNode
    operand := IDENTIFIER | STRING
    child   := expr | IDENTIFIER | STRING

The parser fills an ``Arena`` and returns node-ids. It stops at the first
error: there is no resynchronization and no partial result.
"""

from __future__ import annotations

import logging
from typing import Any

from seed.ast import (
    Arena,
    EmptyNode,
    IdentifierNode,
    ListNode,
    NodeId,
    ParseResult,
    StringNode,
    Token,
    TokenKind,
)
from seed.errors import (
    ExpectedCloseParenError,
    ExpectedOpenParenError,
    ExpectedOperandError,
    NestingTooDeepError,
    UnexpectedTokenError,
)
from seed.parser.lexer import Lexer

logger = logging.getLogger(__name__)

# Each nesting level costs one Python frame in ``expr``; the cap keeps the
# deepest accepted input well inside the default recursion limit of 1000.
DEFAULT_MAX_DEPTH = 256
MAX_SUPPORTED_DEPTH = 512

_OPERAND_KINDS = frozenset({TokenKind.IDENTIFIER, TokenKind.STRING})


class _Parser:
    """Parse state shared across one run: lexer, arena, and depth limit."""

    def __init__(self, lexer: Lexer, arena: Arena, max_depth: int) -> None:
        if not 1 <= max_depth <= MAX_SUPPORTED_DEPTH:
            raise ValueError(
                f"max_depth must be between 1 and {MAX_SUPPORTED_DEPTH}, got {max_depth}"
            )
        self._lexer = lexer
        self._arena = arena
        self._max_depth = max_depth
        self._depth = 0

    def parse(self) -> list[NodeId]:
        roots: list[NodeId] = []
        while self._lexer.peek().kind != TokenKind.EOF:
            roots.append(self.expr())
        return roots

    def expr(self) -> NodeId:
        lexer = self._lexer
        arena = self._arena

        opening = lexer.advance()
        if opening.kind != TokenKind.LPAREN:
            raise ExpectedOpenParenError(**self._where(opening))

        self._depth += 1
        if self._depth > self._max_depth:
            raise NestingTooDeepError(self._max_depth, **self._where(opening))

        op = lexer.advance()
        if op.kind == TokenKind.RPAREN:
            self._depth -= 1
            return arena.add(EmptyNode())

        if op.kind not in _OPERAND_KINDS:
            raise ExpectedOperandError(**self._where(op))

        children: list[NodeId] = []
        while lexer.peek().kind not in (TokenKind.RPAREN, TokenKind.EOF):
            kind = lexer.peek().kind
            if kind == TokenKind.LPAREN:
                children.append(self.expr())
            elif kind == TokenKind.IDENTIFIER:
                children.append(arena.add(IdentifierNode(lexer.advance())))
            elif kind == TokenKind.STRING:
                children.append(arena.add(StringNode(lexer.advance())))
            else:
                # Every token kind must be consumed here or the loop never ends.
                raise UnexpectedTokenError(str(kind), **self._where(lexer.peek()))

        closing = lexer.advance()
        if closing.kind != TokenKind.RPAREN:
            raise ExpectedCloseParenError(**self._where(closing))

        self._depth -= 1
        return arena.add(ListNode(op=op, children=tuple(children)))

    def _where(self, token: Token) -> dict[str, Any]:
        offset = token.span.start
        return {"offset": offset, "position": self._lexer.position_of(offset)}


def expr(lexer: Lexer, arena: Arena, *, max_depth: int = DEFAULT_MAX_DEPTH) -> NodeId:
    """Parse exactly one parenthesized expression and return its node-id."""
    return _Parser(lexer, arena, max_depth).expr()


def parse(
    source: str | Lexer,
    arena: Arena | None = None,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> ParseResult:
    """Parse every top-level expression in ``source``.

    Args:
        source: S-expression text, or a ``Lexer`` already positioned on it.
        arena: Arena to append to. A fresh one is created if omitted.
        max_depth: Deepest permitted expression nesting, at most
            ``MAX_SUPPORTED_DEPTH``.

    Returns:
        ParseResult with the arena and one root node-id per top-level
        expression, in source order.

    Raises:
        LexError: On a character or string the lexer cannot accept.
        ParseError: On the first syntax error; nothing partial is returned.
        ValueError: If ``max_depth`` is outside 1..``MAX_SUPPORTED_DEPTH``.
    """
    lexer = source if isinstance(source, Lexer) else Lexer(source)
    arena = arena if arena is not None else Arena()

    roots = _Parser(lexer, arena, max_depth).parse()
    logger.debug("Parsed %d root(s) into %d node(s)", len(roots), len(arena))
    return ParseResult(arena=arena, roots=roots)

"""seed: render S-expressions as Graphviz DOT graphs.

Pipeline: text -> ``Lexer`` -> ``parse`` (fills an ``Arena``, returns root
node-ids) -> ``render`` (DOT text).
"""

from seed.ast import (
    Arena,
    EmptyNode,
    IdentifierNode,
    ListNode,
    Node,
    NodeId,
    ParseResult,
    Position,
    Span,
    StringNode,
    Token,
    TokenKind,
    position,
)
from seed.config import ParseOptions, RenderOptions, SeedConfig
from seed.errors import (
    ErrorKind,
    ExpectedCloseParenError,
    ExpectedOpenParenError,
    ExpectedOperandError,
    LexError,
    NestingTooDeepError,
    ParseError,
    SeedError,
    SourceError,
    SourceNotFoundError,
    SourceReadError,
    SyntaxFailure,
    UnexpectedCharacterError,
    UnexpectedTokenError,
    UnterminatedStringError,
)
from seed.loader import read_source
from seed.parser import DEFAULT_MAX_DEPTH, MAX_SUPPORTED_DEPTH, Lexer, expr, parse, tokenize
from seed.render import RenderContext, escape_label, render, render_result


def render_source(
    source: str,
    render_options: RenderOptions | None = None,
    parse_options: ParseOptions | None = None,
) -> str:
    """Parse ``source`` and render it as DOT in one call."""
    parse_options = parse_options or ParseOptions()
    result = parse(source, max_depth=parse_options.max_depth)
    return render_result(result, render_options)


__all__ = [
    # Syntax model
    "Arena",
    "EmptyNode",
    "IdentifierNode",
    "ListNode",
    "Node",
    "NodeId",
    "ParseResult",
    "Position",
    "Span",
    "StringNode",
    "Token",
    "TokenKind",
    "position",
    # Lexer / parser
    "DEFAULT_MAX_DEPTH",
    "MAX_SUPPORTED_DEPTH",
    "Lexer",
    "tokenize",
    "expr",
    "parse",
    # Renderer
    "RenderContext",
    "escape_label",
    "render",
    "render_result",
    "render_source",
    # Config
    "ParseOptions",
    "RenderOptions",
    "SeedConfig",
    # Loading
    "read_source",
    # Errors
    "ErrorKind",
    "SeedError",
    "SourceError",
    "SourceNotFoundError",
    "SourceReadError",
    "SyntaxFailure",
    "LexError",
    "UnexpectedCharacterError",
    "UnterminatedStringError",
    "ParseError",
    "ExpectedOpenParenError",
    "ExpectedOperandError",
    "ExpectedCloseParenError",
    "NestingTooDeepError",
    "UnexpectedTokenError",
]

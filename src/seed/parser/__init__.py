"""S-expression lexer and recursive-descent parser."""

from seed.parser.lexer import Lexer, tokenize
from seed.parser.parser import DEFAULT_MAX_DEPTH, MAX_SUPPORTED_DEPTH, expr, parse

__all__ = ["DEFAULT_MAX_DEPTH", "MAX_SUPPORTED_DEPTH", "Lexer", "expr", "parse", "tokenize"]

"""Syntax tokenizing for code examples."""

from lessonmark.highlight.code_block import CodeBlock, parse_code_block
from lessonmark.highlight.tokenizer import Token, TokenKind, tokenize

__all__ = [
    "CodeBlock",
    "Token",
    "TokenKind",
    "parse_code_block",
    "tokenize",
]

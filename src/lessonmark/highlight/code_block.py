"""Markdown code-fence handling for concept code examples.

Generated code examples usually arrive fenced (```` ```java ... ``` ````).
Annotation offsets on a code field index into the *unfenced* code, because
that is the text the user sees and selects.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

DEFAULT_LANGUAGE = "plaintext"

_FENCED = re.compile(r"^```(\w*)\n(.*?)```$", re.DOTALL)
_LEADING_FENCE = re.compile(r"^```(?:\w*\n)?")
_TRAILING_FENCE = re.compile(r"```$")


@dataclass(frozen=True)
class CodeBlock:
    """A code example split into its language tag and displayed code."""

    language: str
    code: str


def parse_code_block(block: str) -> CodeBlock:
    """Split a possibly-fenced code example into language and code.

    A block that is not fenced is returned unchanged with the default
    language, so offsets into unfenced examples stay valid.
    """
    match = _FENCED.match(block)
    if match:
        return CodeBlock(
            language=match.group(1) or DEFAULT_LANGUAGE,
            code=match.group(2).strip(),
        )
    trimmed = block.strip()
    if len(trimmed) >= 6 and trimmed.startswith("```") and trimmed.endswith("```"):
        return CodeBlock(language=DEFAULT_LANGUAGE, code=trimmed[3:-3].strip())
    return CodeBlock(language=DEFAULT_LANGUAGE, code=block)


def strip_code_fence(block: str) -> str:
    """Remove an opening ```` ```lang ```` line and closing fence, then trim."""
    without_open = _LEADING_FENCE.sub("", block)
    return _TRAILING_FENCE.sub("", without_open).strip()

"""Converts web-flavoured documentation markdown into pandoc-ready markdown."""

from __future__ import annotations

import re
from typing import Callable, List, Sequence

from .crossrefs import rewrite_cross_references

_INLINE_MATH_PATTERN = re.compile(r"``\s*([^`]*[^`\s])\s*``")


class MarkdownCleaner:
    """Strips interactive blocks and rewrites math, links, and containers.

    The transform runs in three ordered passes over the lines of a page:

    1. four-backtick ``@example`` / ``@raw`` blocks are removed;
    2. leftover three-backtick ``@docs``, ``@example``, ``@raw``,
       ``@bibliography`` and ``@autodocs`` blocks are removed;
    3. ``math`` fences become ``$$`` delimiters, cross-references are
       flattened, double-backtick inline math becomes ``$...$`` and
       ``::: details`` / ``:::`` container markers are dropped.

    A block whose closing fence is missing extends to the end of the page.
    """

    PASSTHROUGH_OPENERS: Sequence[str] = ("````@example", "````@raw")
    PASSTHROUGH_CLOSER = "````"
    DIRECTIVE_OPENERS: Sequence[str] = (
        "```@example",
        "```@raw",
        "```@bibliography",
        "```@autodocs",
    )
    DIRECTIVE_CLOSER = "```"
    DOCS_OPENER = "```@docs"

    def clean(self, markdown: str) -> str:
        trailing_newline = markdown.endswith("\n")
        lines = markdown.split("\n")
        if trailing_newline:
            lines.pop()

        lines = _drop_blocks(
            lines,
            lambda line: line.startswith(tuple(self.PASSTHROUGH_OPENERS)),
            self.PASSTHROUGH_CLOSER,
        )
        lines = _drop_blocks(lines, self._is_directive_opener, self.DIRECTIVE_CLOSER)
        lines = self._rewrite(lines)

        if not lines:
            return ""
        return "\n".join(lines) + ("\n" if trailing_newline else "")

    def _is_directive_opener(self, line: str) -> bool:
        return line == self.DOCS_OPENER or line.startswith(tuple(self.DIRECTIVE_OPENERS))

    def _rewrite(self, lines: Sequence[str]) -> List[str]:
        output: List[str] = []
        in_math = False
        for line in lines:
            if not in_math and line == "```math":
                in_math = True
                line = "$$"
            elif in_math and line == "```":
                in_math = False
                line = "$$"
            line = rewrite_cross_references(line, code_spans=False)
            line = _INLINE_MATH_PATTERN.sub(r"$\1$", line)
            if line.startswith("::: details") or line == ":::":
                continue
            output.append(line)
        return output


def _drop_blocks(
    lines: Sequence[str], is_opener: Callable[[str], bool], closer: str
) -> List[str]:
    kept: List[str] = []
    inside = False
    for line in lines:
        if inside:
            if line == closer:
                inside = False
            continue
        if is_opener(line):
            inside = True
            continue
        kept.append(line)
    return kept


__all__ = ["MarkdownCleaner"]

"""Rewrites documentation cross-references the PDF renderer cannot follow."""

from __future__ import annotations

import re

_CODE_REF_PATTERN = re.compile(r"\[`([^`]*)`\]\(@ref[^)]*\)")
_REF_PATTERN = re.compile(r"\[([^\]]*)\]\(@ref[^)]*\)")
_CITE_PATTERN = re.compile(r"\[([^\]]*)\]\(@cite[^)]*\)")


def rewrite_cross_references(text: str, *, code_spans: bool = True) -> str:
    """Flatten ``@ref`` and ``@cite`` links into plain text.

    ``[`name`](@ref)`` keeps its code span when ``code_spans`` is true and
    becomes bare text otherwise; ``[label](@ref ...)`` and
    ``[label](@cite ...)`` become ``label``.
    """
    replacement = r"`\1`" if code_spans else r"\1"
    text = _CODE_REF_PATTERN.sub(replacement, text)
    text = _REF_PATTERN.sub(r"\1", text)
    return _CITE_PATTERN.sub(r"\1", text)


__all__ = ["rewrite_cross_references"]

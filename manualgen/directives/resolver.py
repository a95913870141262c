"""Inline API documentation in place of ``@docs`` directive blocks."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..logging import get_logger
from ..postproc.crossrefs import rewrite_cross_references
from .lookup import SymbolLookup

logger = get_logger("resolver")

DIRECTIVE_MARKER = "```@docs"
DIRECTIVE_BLOCK_PATTERN = re.compile(r"```@docs[ \t]*\r?\n(.*?)```", re.DOTALL)

UNAVAILABLE_NOTE = "*Documentation not available.*"
NO_DOCSTRING_NOTE = "*No docstring available.*"
SEPARATOR = "---"


@dataclass(frozen=True)
class ResolvedEntry:
    """Documentation for one symbol listed in a directive block."""

    symbol: str
    available: bool
    doc: Optional[str] = None

    def render(self) -> str:
        parts = [f"**`{self.symbol}`**"]
        if not self.available:
            parts.append(UNAVAILABLE_NOTE)
        elif self.doc is None:
            parts.append(NO_DOCSTRING_NOTE)
        else:
            parts.append(rewrite_cross_references(self.doc))
        parts.append(SEPARATOR)
        return "\n\n".join(parts) + "\n\n"


@dataclass
class ResolutionReport:
    """Outcome of resolving a directory tree."""

    modified: List[Path] = field(default_factory=list)
    failed: List[Path] = field(default_factory=list)
    symbols: int = 0
    unavailable: int = 0


class DirectiveResolver:
    """Replaces every directive block with rendered :class:`ResolvedEntry` text."""

    def __init__(self, lookup: SymbolLookup) -> None:
        self.lookup = lookup
        self._symbols = 0
        self._unavailable = 0

    def resolve_symbol(self, symbol: str) -> ResolvedEntry:
        name = symbol.strip()
        self._symbols += 1
        try:
            obj = self.lookup.resolve(name)
            doc = None if obj is None else self.lookup.docstring(obj)
        except Exception as exc:
            logger.warning("Lookup of %s failed (%s); using a placeholder", name, exc)
            logger.debug("Lookup failure for %s", name, exc_info=True)
            obj = None
        if obj is None:
            self._unavailable += 1
            logger.debug("Unresolved symbol: %s", name)
            return ResolvedEntry(symbol=name, available=False)
        return ResolvedEntry(symbol=name, available=True, doc=doc)

    def resolve_content(self, content: str) -> str:
        """Return ``content`` with all directive blocks expanded."""

        def _expand(match: re.Match[str]) -> str:
            symbols = [line.strip() for line in match.group(1).split("\n")]
            return "".join(self.resolve_symbol(name).render() for name in symbols if name)

        return DIRECTIVE_BLOCK_PATTERN.sub(_expand, content)

    def process_directory(self, root: Path) -> ResolutionReport:
        """Resolve directive blocks in every markdown file under ``root``, in place."""
        report = ResolutionReport()
        self._symbols = 0
        self._unavailable = 0
        for path in sorted(root.rglob("*.md")):
            if not path.is_file():
                continue
            relative = path.relative_to(root).as_posix()
            try:
                content = path.read_text(encoding="utf-8")
                if DIRECTIVE_MARKER not in content:
                    continue
                resolved = self.resolve_content(content)
                if resolved == content:
                    continue
                path.write_text(resolved, encoding="utf-8")
            except (OSError, UnicodeError) as exc:
                logger.error("Failed to resolve %s: %s", relative, exc)
                report.failed.append(path)
                continue
            logger.info("Resolved: %s", relative)
            report.modified.append(path)
        report.symbols = self._symbols
        report.unavailable = self._unavailable
        logger.info("Resolved directive blocks in %d file(s).", len(report.modified))
        return report


__all__ = [
    "DIRECTIVE_BLOCK_PATTERN",
    "DirectiveResolver",
    "ResolutionReport",
    "ResolvedEntry",
]

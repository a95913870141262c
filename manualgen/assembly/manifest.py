"""Fixed page order for the assembled manual."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

from ..constants import DEFAULT_CATEGORIES, EXAMPLES_RELDIR, OVERVIEW_RELPATH
from ..logging import get_logger
from ..models import ManifestPage

logger = get_logger("manifest")


@dataclass(frozen=True)
class ManifestEntry:
    """One manifest slot: either the first existing of ``paths`` or every match of ``pattern``."""

    paths: tuple[str, ...] = ()
    pattern: Optional[str] = None

    def __post_init__(self) -> None:
        if bool(self.paths) == bool(self.pattern):
            raise ValueError("ManifestEntry needs exactly one of paths or pattern")

    @classmethod
    def file(cls, *paths: str) -> "ManifestEntry":
        return cls(paths=tuple(paths))

    @classmethod
    def glob(cls, pattern: str) -> "ManifestEntry":
        return cls(pattern=pattern)

    def describe(self) -> str:
        if self.pattern:
            return self.pattern
        return " | ".join(self.paths)

    def resolve(self, root: Path) -> List[Path]:
        """Return the files this entry contributes, in assembly order."""
        if self.pattern:
            matches = [path for path in root.glob(self.pattern) if path.is_file()]
            return sorted(matches, key=lambda path: path.relative_to(root).as_posix())
        for relative in self.paths:
            candidate = root / relative
            if candidate.is_file():
                return [candidate]
        return []


@dataclass(frozen=True)
class ManifestSection:
    """Named group of manifest entries."""

    title: str
    entries: tuple[ManifestEntry, ...] = field(default_factory=tuple)


class AssemblyManifest:
    """Ordered list of sections; the only source of truth for page order."""

    def __init__(self, sections: Iterable[ManifestSection]) -> None:
        self.sections: tuple[ManifestSection, ...] = tuple(sections)

    def __iter__(self) -> Iterator[ManifestSection]:
        return iter(self.sections)

    def __len__(self) -> int:
        return len(self.sections)

    def collect(self, root: Path) -> List[ManifestPage]:
        """Expand the manifest against ``root``, skipping entries with no files on disk."""
        pages: List[ManifestPage] = []
        for section in self.sections:
            logger.info("Section: %s", section.title)
            for entry in section.entries:
                found = entry.resolve(root)
                if not found:
                    logger.info("  Skipped (not found): %s", entry.describe())
                    continue
                for path in found:
                    relative = path.relative_to(root).as_posix()
                    pages.append(
                        ManifestPage(label=page_label(relative), path=path, section=section.title)
                    )
                    logger.info("  Added: %s", relative)
        return pages


def page_label(relative: str) -> str:
    """Return a filesystem-safe label for a page's relative path."""
    stem = relative[:-3] if relative.endswith(".md") else relative
    return stem.replace("/", "_").replace(" ", "_")


def build_default_manifest(categories: Sequence[str] = DEFAULT_CATEGORIES) -> AssemblyManifest:
    """Return the manual's standard layout for the given example categories."""
    example_globs = tuple(
        ManifestEntry.glob(f"{EXAMPLES_RELDIR}/{category}/*.md")
        for category in categories
        if category != "validation"
    )
    return AssemblyManifest(
        [
            ManifestSection("Introduction", (ManifestEntry.file("index_pdf.md", "index.md"),)),
            ManifestSection("Getting started", (ManifestEntry.file("man/intro.md"),)),
            ManifestSection("Your first simulation", (ManifestEntry.file("man/first_ex.md"),)),
            ManifestSection("FAQ", (ManifestEntry.file("extras/faq.md"),)),
            ManifestSection(
                "Fundamentals",
                tuple(
                    ManifestEntry.file(f"man/{page}.md")
                    for page in (
                        "highlevel",
                        "basics/input_files",
                        "basics/systems",
                        "basics/solution",
                    )
                ),
            ),
            ManifestSection(
                "Detailed API",
                tuple(
                    ManifestEntry.file(f"man/basics/{page}.md")
                    for page in (
                        "forces",
                        "wells",
                        "primary",
                        "secondary",
                        "parameters",
                        "plotting",
                        "utilities",
                    )
                ),
            ),
            ManifestSection(
                "Parallelism and compilation",
                tuple(
                    ManifestEntry.file(f"man/advanced/{page}.md")
                    for page in ("mpi", "gpu", "compiled")
                ),
            ),
            ManifestSection(
                "References",
                (
                    ManifestEntry.file("man/basics/package.md"),
                    ManifestEntry.file("extras/paper_list.md"),
                    ManifestEntry.file("ref/framework.md"),
                    ManifestEntry.file("extras/refs.md"),
                ),
            ),
            ManifestSection(
                "Examples",
                (ManifestEntry.file(OVERVIEW_RELPATH),) + example_globs,
            ),
            ManifestSection(
                "Validation",
                (
                    ManifestEntry.file("man/validation.md"),
                    ManifestEntry.glob(f"{EXAMPLES_RELDIR}/validation/*.md"),
                ),
            ),
        ]
    )


DEFAULT_MANIFEST = build_default_manifest()


__all__ = [
    "AssemblyManifest",
    "DEFAULT_MANIFEST",
    "ManifestEntry",
    "ManifestSection",
    "build_default_manifest",
    "page_label",
]

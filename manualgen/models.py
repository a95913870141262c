"""Core data models shared across manualgen components."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


class ManualBuildError(RuntimeError):
    """Base class for fatal build failures."""


class PrerequisiteError(ManualBuildError):
    """Raised when a required external executable cannot be found."""


class RenderError(ManualBuildError):
    """Raised when the typesetting step fails or produces no output."""


@dataclass(frozen=True)
class ExampleEntry:
    """A single example listed in the overview."""

    name: str
    title: str


@dataclass
class OverviewSection:
    """All examples of one category, sorted by file name."""

    category: str
    title: str
    description: Optional[str]
    entries: List[ExampleEntry] = field(default_factory=list)


@dataclass(frozen=True)
class Segment:
    """A run of transcribed text tagged as prose or code."""

    kind: str
    text: str


@dataclass(frozen=True)
class ManifestPage:
    """A documentation page selected for assembly."""

    label: str
    path: Path
    section: str


__all__ = [
    "ExampleEntry",
    "ManifestPage",
    "ManualBuildError",
    "OverviewSection",
    "PrerequisiteError",
    "RenderError",
    "Segment",
]

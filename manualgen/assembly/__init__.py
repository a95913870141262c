"""Manual assembly: page order, cleaning, and typesetting."""

from .manifest import (
    DEFAULT_MANIFEST,
    AssemblyManifest,
    ManifestEntry,
    ManifestSection,
    build_default_manifest,
)
from .renderer import PandocRenderer, RenderOptions, RunResult

__all__ = [
    "AssemblyManifest",
    "DEFAULT_MANIFEST",
    "ManifestEntry",
    "ManifestSection",
    "PandocRenderer",
    "RenderOptions",
    "RunResult",
    "build_default_manifest",
]

"""Helper utilities for constructing temporary documentation trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from manualgen.config import ManualConfig, load_config


class DocsTreeBuilder:
    """Writes a docs directory, its sibling examples directory, and optional config."""

    def __init__(self, tmp_path: Path) -> None:
        self.base = tmp_path / "project"
        self.docs = self.base / "docs"
        self.docs.mkdir(parents=True)

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries relative to the project root."""
        for relative, content in files.items():
            path = self.base / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def source(self) -> Path:
        return self.docs / "src"

    def examples(self) -> Path:
        return self.base / "examples"

    def config(self, yaml_text: str | None = None) -> ManualConfig:
        """Load configuration for the docs directory, writing `.manualgen.yml` first if given."""
        if yaml_text is not None:
            self.write({"docs/.manualgen.yml": yaml_text})
        return load_config(self.docs, cwd=self.base)


__all__ = ["DocsTreeBuilder"]

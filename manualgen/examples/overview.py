"""Summary page listing every example by category."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from jinja2 import Environment

from ..constants import CATEGORY_DESCRIPTIONS, DEFAULT_CATEGORIES, category_title
from ..logging import get_logger
from ..models import ExampleEntry, OverviewSection
from ..templating import create_environment

logger = get_logger("overview")

HEADING_COMMENT_PREFIX = "# #"
_HEADING_MARKERS = re.compile(r"^#\s*#+")


def extract_title(path: Path, fallback: str) -> str:
    """Return the first commented markdown heading in ``path``, else a title built from ``fallback``."""
    with path.open(encoding="utf-8") as handle:
        for line in handle:
            if not line.startswith(HEADING_COMMENT_PREFIX):
                continue
            title = _HEADING_MARKERS.sub("", line, count=1).strip()
            if title:
                return title
    return fallback.replace("_", " ").title()


class OverviewGenerator:
    """Builds the example overview page from a categorised examples directory."""

    TEMPLATE_NAME = "overview.md.j2"

    def __init__(
        self,
        categories: Sequence[str] = DEFAULT_CATEGORIES,
        *,
        descriptions: Mapping[str, str] | None = None,
        extension: str = ".py",
        project_title: str = "This package",
        docs_url: Optional[str] = None,
        environment: Environment | None = None,
    ) -> None:
        self.categories = list(categories)
        self.descriptions = dict(CATEGORY_DESCRIPTIONS if descriptions is None else descriptions)
        self.extension = extension
        self.project_title = project_title
        self.docs_url = docs_url
        self._env = environment or create_environment()

    def collect(self, examples_dir: Path) -> List[OverviewSection]:
        """Return one section per non-empty category, in configured order."""
        sections: List[OverviewSection] = []
        for category in self.categories:
            category_dir = examples_dir / category
            if not category_dir.is_dir():
                logger.info("Skipping category %s (no directory)", category)
                continue
            files = sorted(
                (
                    path
                    for path in category_dir.iterdir()
                    if path.is_file() and path.name.endswith(self.extension)
                ),
                key=lambda path: path.name,
            )
            if not files:
                logger.info("Skipping category %s (no examples)", category)
                continue
            entries = [
                ExampleEntry(name=path.stem, title=extract_title(path, path.stem))
                for path in files
            ]
            sections.append(
                OverviewSection(
                    category=category,
                    title=category_title(category),
                    description=self.descriptions.get(category),
                    entries=entries,
                )
            )
        return sections

    def render(self, sections: Sequence[OverviewSection]) -> str:
        template = self._env.get_template(self.TEMPLATE_NAME)
        return template.render(
            project_title=self.project_title,
            docs_url=self.docs_url,
            sections=sections,
        )

    def write(self, examples_dir: Path, output_path: Path) -> Path:
        """Render the overview for ``examples_dir`` into ``output_path``."""
        sections = self.collect(examples_dir)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(sections), encoding="utf-8")
        logger.info(
            "Generated example overview at %s (%d categories, %d examples)",
            output_path,
            len(sections),
            sum(len(section.entries) for section in sections),
        )
        return output_path


__all__ = ["OverviewGenerator", "extract_title"]

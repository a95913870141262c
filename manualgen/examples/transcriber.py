"""Literate example scripts to static markdown, without running them.

Example scripts follow the literate convention: ``# text`` lines are
markdown, a bare ``#`` line is a paragraph break and everything else is
code. Lines carrying a ``<tags: ...>`` annotation are build metadata and
never reach the output.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from jinja2 import Environment

from ..logging import get_logger
from ..models import Segment
from ..templating import create_environment

logger = get_logger("transcriber")

PROSE = "prose"
CODE = "code"

COMMENT_PREFIX = "#"
PROSE_PREFIX = "# "
_TAGS_MARKER = "<tags:"
_TAGS_PATTERN = re.compile(r"<tags:\s*([^>]+)>")


def parse_tags(line: str) -> Optional[List[str]]:
    """Return the tag tokens of a ``<tags: a, b>`` annotation, or ``None``."""
    match = _TAGS_PATTERN.search(line)
    if match is None:
        return None
    return [token.strip() for token in match.group(1).split(",") if token.strip()]


@dataclass
class TranscribedDocument:
    """Prose and code segments of one example plus its attribution footer."""

    category: str
    name: str
    language: str
    segments: List[Segment] = field(default_factory=list)
    footer: str = ""

    def render(self) -> str:
        parts: List[str] = []
        for segment in self.segments:
            if segment.kind == CODE:
                parts.append(f"\n```{self.language}\n{segment.text}\n```\n")
            else:
                parts.append(f"{segment.text}\n")
        parts.append(self.footer)
        return "".join(parts)


@dataclass
class TranscriptionReport:
    """Counts for a batch transcription run."""

    generated: List[Path] = field(default_factory=list)
    failed: List[Path] = field(default_factory=list)


class _CodeBuffer:
    def __init__(self) -> None:
        self.lines: List[str] = []

    def flush_into(self, segments: List[Segment]) -> None:
        # Blank-only runs are discarded rather than emitted as empty fences.
        if any(line.strip() for line in self.lines):
            segments.append(Segment(CODE, "\n".join(self.lines)))
        self.lines = []


class ExampleTranscriber:
    """Converts example scripts into narrative markdown pages."""

    FOOTER_TEMPLATE = "example_footer.md.j2"

    def __init__(
        self,
        *,
        language: str = "python",
        extension: str = ".py",
        docs_url: Optional[str] = None,
        environment: Environment | None = None,
    ) -> None:
        self.language = language
        self.extension = extension
        self.docs_url = docs_url
        self._env = environment or create_environment()

    def transcribe(self, lines: Iterable[str], category: str, name: str) -> TranscribedDocument:
        segments: List[Segment] = []
        buffer = _CodeBuffer()
        in_code = False
        title_seen = False

        for raw in lines:
            line = raw.rstrip("\r\n")
            if _TAGS_MARKER in line:
                logger.debug("Dropping tag annotation in %s/%s: %s", category, name, parse_tags(line))
                continue

            if line.strip() == COMMENT_PREFIX:
                if in_code:
                    buffer.flush_into(segments)
                    in_code = False
                segments.append(Segment(PROSE, ""))
            elif line.startswith(PROSE_PREFIX):
                if in_code:
                    buffer.flush_into(segments)
                    in_code = False
                text = line[len(PROSE_PREFIX):]
                segments.append(Segment(PROSE, text))
                if not title_seen and text.startswith("#"):
                    title_seen = True
            else:
                if not title_seen and not line.strip():
                    continue
                if line.strip() or in_code:
                    in_code = True
                    buffer.lines.append(line)

        if in_code:
            buffer.flush_into(segments)

        return TranscribedDocument(
            category=category,
            name=name,
            language=self.language,
            segments=segments,
            footer=self.render_footer(category, name),
        )

    def render_footer(self, category: str, name: str) -> str:
        template = self._env.get_template(self.FOOTER_TEMPLATE)
        return template.render(url=self.example_url(category, name))

    def example_url(self, category: str, name: str) -> Optional[str]:
        if not self.docs_url:
            return None
        return f"{self.docs_url.rstrip('/')}/examples/{category}/{name}/"

    def transcribe_file(self, source: Path, destination: Path, category: str) -> Path:
        name = source.name[: -len(self.extension)] if source.name.endswith(self.extension) else source.stem
        with source.open(encoding="utf-8") as handle:
            document = self.transcribe(handle, category, name)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(document.render(), encoding="utf-8")
        return destination

    def transcribe_all(self, examples_dir: Path, output_dir: Path) -> TranscriptionReport:
        """Transcribe every example of every category directory under ``examples_dir``."""
        report = TranscriptionReport()
        logger.info("Generating example markdown files from %s", examples_dir)
        for category in _category_dirs(examples_dir):
            logger.info("Processing category: %s", category.name)
            for source in self._example_files(category):
                name = source.name[: -len(self.extension)]
                destination = output_dir / category.name / f"{name}.md"
                try:
                    self.transcribe_file(source, destination, category.name)
                except Exception as exc:
                    logger.error("  Failed to generate %s.md: %s", name, exc)
                    logger.debug("Transcription failure for %s", source, exc_info=True)
                    report.failed.append(source)
                    continue
                logger.info("  Generated: %s.md", name)
                report.generated.append(destination)
        logger.info("Successfully generated %d example markdown files", len(report.generated))
        if report.failed:
            logger.warning("%d example(s) could not be transcribed", len(report.failed))
        return report

    def _example_files(self, category_dir: Path) -> Sequence[Path]:
        return sorted(
            (
                path
                for path in category_dir.iterdir()
                if path.is_file() and path.name.endswith(self.extension)
            ),
            key=lambda path: path.name,
        )


def _category_dirs(examples_dir: Path) -> List[Path]:
    if not examples_dir.is_dir():
        logger.warning("Examples directory %s does not exist", examples_dir)
        return []
    return sorted((path for path in examples_dir.iterdir() if path.is_dir()), key=lambda path: path.name)


__all__ = [
    "ExampleTranscriber",
    "TranscribedDocument",
    "TranscriptionReport",
    "parse_tags",
]

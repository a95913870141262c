"""Pipeline orchestration for the PDF manual build."""

from __future__ import annotations

import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from .assembly.manifest import AssemblyManifest
from .assembly.renderer import PandocRenderer, RenderOptions
from .config import ManualConfig
from .directives.lookup import PythonSymbolLookup, SymbolLookup
from .directives.resolver import DirectiveResolver, ResolutionReport
from .examples.overview import OverviewGenerator
from .examples.transcriber import ExampleTranscriber, TranscriptionReport
from .logging import get_logger
from .models import ManifestPage, PrerequisiteError
from .postproc.cleaner import MarkdownCleaner
from .templating import create_environment

_INSTALL_HINTS = {
    "pandoc": "Install pandoc from https://pandoc.org/installing.html",
    "xelatex": (
        "Pandoc needs a LaTeX engine for PDF output. Install a TeX distribution, e.g.\n"
        "  - Linux: sudo apt-get install texlive-xetex\n"
        "  - macOS: brew install --cask mactex\n"
        "  - Windows: install MiKTeX or TeX Live"
    ),
}


@dataclass
class BuildOutcome:
    """Result of a full manual build."""

    output: Path
    pages: List[ManifestPage] = field(default_factory=list)
    transcription: Optional[TranscriptionReport] = None
    resolution: Optional[ResolutionReport] = None
    size_bytes: int = 0


class BuildOrchestrator:
    """Runs overview, transcription, resolution, assembly and rendering in order."""

    def __init__(
        self,
        config: ManualConfig,
        *,
        lookup: SymbolLookup | None = None,
        renderer: PandocRenderer | None = None,
        cleaner: MarkdownCleaner | None = None,
        which: Callable[[str], Optional[str]] = shutil.which,
    ) -> None:
        self.config = config
        self.logger = get_logger("orchestrator")
        env = create_environment(config.paths.templates)
        self.overview = OverviewGenerator(
            config.examples.categories,
            descriptions=config.examples.descriptions,
            extension=config.examples.extension,
            project_title=config.project.title,
            docs_url=config.project.docs_url,
            environment=env,
        )
        self.transcriber = ExampleTranscriber(
            language=config.examples.language,
            extension=config.examples.extension,
            docs_url=config.project.docs_url,
            environment=env,
        )
        self.resolver = DirectiveResolver(lookup or PythonSymbolLookup(config.lookup.modules))
        self.cleaner = cleaner or MarkdownCleaner()
        self.renderer = renderer or PandocRenderer(self._render_options())
        self._which = which

    @property
    def manifest(self) -> AssemblyManifest:
        return self.config.manifest

    def check_prerequisites(self) -> None:
        """Fail fast when pandoc or the PDF engine is not on PATH."""
        for executable in (PandocRenderer.executable, self.config.render.pdf_engine):
            if self._which(executable) is None:
                hint = _INSTALL_HINTS.get(executable, f"Make sure {executable} is on PATH.")
                raise PrerequisiteError(f"{executable} is not installed.\n{hint}")
        self.logger.info("Prerequisites check passed")

    def generate_overview(self) -> Path:
        self.logger.info("Generating example overview...")
        return self.overview.write(self.config.paths.examples, self.config.paths.overview)

    def transcribe_examples(self) -> TranscriptionReport:
        self.logger.info("Generating example markdown files...")
        return self.transcriber.transcribe_all(
            self.config.paths.examples, self.config.paths.transcribed
        )

    def resolve_directives(self, root: Path) -> Optional[ResolutionReport]:
        """Resolve directive blocks under ``root``; a failure here only degrades the manual."""
        self.logger.info("Resolving @docs blocks (extracting docstrings)...")
        try:
            report = self.resolver.process_directory(root)
        except Exception as exc:
            self.logger.warning(
                "Could not resolve @docs blocks (%s). API documentation may be incomplete in the PDF.",
                exc,
            )
            self.logger.debug("Directive resolution failure", exc_info=True)
            return None
        if report.unavailable:
            self.logger.warning(
                "%d of %d documented symbol(s) could not be resolved",
                report.unavailable,
                report.symbols,
            )
        return report

    def assemble(self, source_root: Path, scratch: Path) -> Tuple[Path, List[ManifestPage]]:
        """Clean every manifest page into numbered files and concatenate them."""
        self.logger.info("Collecting documentation pages...")
        pages = self.manifest.collect(source_root)
        pages_dir = scratch / "pages"
        pages_dir.mkdir(parents=True, exist_ok=True)

        numbered: List[Path] = []
        width = max(2, len(str(len(pages))))
        for index, page in enumerate(pages, start=1):
            target = pages_dir / f"{index:0{width}d}_{page.label}.md"
            text = page.path.read_text(encoding="utf-8")
            target.write_text(self.cleaner.clean(text), encoding="utf-8")
            numbered.append(target)

        self.logger.info("Combining %d markdown files...", len(numbered))
        combined = scratch / "combined.md"
        combined.write_text(
            "".join(path.read_text(encoding="utf-8") for path in _numeric_order(numbered)),
            encoding="utf-8",
        )
        return combined, pages

    def run_build(self) -> BuildOutcome:
        """Build the PDF manual; the scratch directory is removed whatever happens."""
        self.logger.info("Building %s PDF documentation", self.config.project.title)
        self.check_prerequisites()

        self.generate_overview()
        transcription = self.transcribe_examples()

        with tempfile.TemporaryDirectory(prefix="manualgen-") as tmp:
            scratch = Path(tmp)
            self.logger.debug("Using temporary directory: %s", scratch)
            resolved_src = scratch / "resolved_src"
            self.logger.info("Preparing source files...")
            shutil.copytree(self.config.paths.source, resolved_src)

            resolution = self.resolve_directives(resolved_src)
            combined, pages = self.assemble(resolved_src, scratch)
            output = self.renderer.render(combined, self.config.paths.output)
            self.logger.info("Cleaning up temporary files...")

        size = output.stat().st_size
        self.logger.info("PDF documentation created: %s (%s)", output, _human_size(size))
        return BuildOutcome(
            output=output,
            pages=pages,
            transcription=transcription,
            resolution=resolution,
            size_bytes=size,
        )

    def _render_options(self) -> RenderOptions:
        render = self.config.render
        return RenderOptions(
            title=self.config.project.title,
            author=self.config.project.author,
            pdf_engine=render.pdf_engine,
            resource_paths=list(self.config.paths.resource_paths),
            header=self.config.paths.header,
            toc_depth=render.toc_depth,
            highlight_style=render.highlight_style,
            geometry=render.geometry,
            documentclass=render.documentclass,
            fontsize=render.fontsize,
            papersize=render.papersize,
        )


def _numeric_order(paths: Sequence[Path]) -> List[Path]:
    return sorted(paths, key=lambda path: int(path.name.split("_", 1)[0]))


def _human_size(size: int) -> str:
    value = float(size)
    for unit in ("B", "KB", "MB"):
        if value < 1024:
            return f"{value:.0f}{unit}" if unit == "B" else f"{value:.1f}{unit}"
        value /= 1024
    return f"{value:.1f}GB"


__all__ = ["BuildOrchestrator", "BuildOutcome"]

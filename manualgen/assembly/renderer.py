"""Pandoc invocation for the combined manual."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ..logging import get_logger
from ..models import RenderError

logger = get_logger("renderer")

BENIGN_WARNING = "Missing character"


@dataclass(frozen=True)
class RunResult:
    """Exit status and captured streams of an external command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""


Runner = Callable[[Sequence[str]], RunResult]


@dataclass
class RenderOptions:
    """Everything pandoc needs besides the input and output paths."""

    title: str
    author: str = ""
    date: Optional[str] = None
    pdf_engine: str = "xelatex"
    resource_paths: List[Path] = field(default_factory=list)
    header: Optional[Path] = None
    toc_depth: int = 3
    number_sections: bool = True
    highlight_style: str = "tango"
    geometry: str = "margin=1in"
    documentclass: str = "report"
    fontsize: str = "11pt"
    papersize: str = "letter"


def filter_diagnostics(text: str) -> str:
    """Drop the font-fallback warnings xelatex emits for every unsupported glyph."""
    kept = [line for line in text.splitlines() if BENIGN_WARNING not in line]
    return "\n".join(kept).strip()


class PandocRenderer:
    """Turns one markdown file into a PDF with pandoc."""

    executable = "pandoc"

    def __init__(self, options: RenderOptions, runner: Runner | None = None) -> None:
        self.options = options
        self._runner = runner or self._default_runner

    def command(self, source: Path, output: Path) -> List[str]:
        opts = self.options
        args = [
            self.executable,
            str(source),
            "-o",
            str(output),
            f"--pdf-engine={opts.pdf_engine}",
        ]
        if opts.resource_paths:
            joined = os.pathsep.join(str(path) for path in opts.resource_paths)
            args.append(f"--resource-path={joined}")
        if opts.header is not None:
            if opts.header.is_file():
                args.append(f"--include-in-header={opts.header}")
            else:
                logger.warning("Header file %s not found; building without it", opts.header)
        args.extend(["--toc", f"--toc-depth={opts.toc_depth}"])
        if opts.number_sections:
            args.append("--number-sections")
        args.extend(
            [
                f"--highlight-style={opts.highlight_style}",
                f"--variable=geometry:{opts.geometry}",
                f"--variable=documentclass:{opts.documentclass}",
                f"--variable=fontsize:{opts.fontsize}",
                f"--variable=papersize:{opts.papersize}",
                "--metadata",
                f"title={opts.title}",
                "--metadata",
                f"author={opts.author}",
                "--metadata",
                f"date={opts.date or date.today().isoformat()}",
            ]
        )
        return args

    def render(self, source: Path, output: Path) -> Path:
        """Render ``source`` to ``output``; raises :class:`RenderError` on any failure."""
        output.parent.mkdir(parents=True, exist_ok=True)
        args = self.command(source, output)
        logger.info("Building PDF with pandoc (this may take a few minutes)...")
        logger.debug("Running: %s", " ".join(args))
        try:
            result = self._runner(args)
        except OSError as exc:
            raise RenderError(f"Could not start {self.executable}: {exc}") from exc
        diagnostics = filter_diagnostics("\n".join(part for part in (result.stdout, result.stderr) if part))
        if result.returncode != 0:
            raise RenderError(
                f"pandoc exited with status {result.returncode}"
                + (f":\n{diagnostics}" if diagnostics else "")
            )
        if not output.is_file():
            raise RenderError(
                f"pandoc reported success but {output} was not created"
                + (f":\n{diagnostics}" if diagnostics else "")
            )
        if diagnostics:
            logger.warning("pandoc diagnostics:\n%s", diagnostics)
        return output

    @staticmethod
    def _default_runner(args: Sequence[str]) -> RunResult:
        completed = subprocess.run(
            list(args),
            check=False,
            text=True,
            capture_output=True,
        )
        return RunResult(completed.returncode, completed.stdout, completed.stderr)


__all__ = [
    "BENIGN_WARNING",
    "PandocRenderer",
    "RenderOptions",
    "RunResult",
    "Runner",
    "filter_diagnostics",
]

"""CLI entrypoints for manualgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ManualConfig, load_config
from .directives.lookup import PythonSymbolLookup
from .directives.resolver import DirectiveResolver
from .logging import configure_logging
from .models import ManualBuildError
from .orchestrator import BuildOrchestrator


def _add_common_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    default: object = argparse.SUPPRESS if suppress_default else False
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default,
        help="Only report warnings and errors.",
    )
    parser.add_argument(
        "--docs-dir",
        default=argparse.SUPPRESS if suppress_default else ".",
        help="Documentation directory holding .manualgen.yml (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="manualgen",
        description="Assemble markdown documentation and example scripts into a PDF manual.",
    )
    _add_common_options(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write a detailed build log to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Generate examples, resolve API docs, and render the PDF manual.",
    )
    _add_common_options(build_parser, suppress_default=True)

    overview_parser = subparsers.add_parser(
        "overview",
        help="Write the example overview page only.",
    )
    _add_common_options(overview_parser, suppress_default=True)

    transcribe_parser = subparsers.add_parser(
        "transcribe",
        help="Convert example scripts to markdown pages only.",
    )
    _add_common_options(transcribe_parser, suppress_default=True)

    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Replace @docs blocks in every markdown file under DIRECTORY, in place.",
    )
    _add_common_options(resolve_parser, suppress_default=True)
    resolve_parser.add_argument("directory", help="Directory to process in place.")
    resolve_parser.add_argument(
        "-m",
        "--module",
        dest="modules",
        action="append",
        default=None,
        help="Module to import before resolving symbols (repeatable; adds to lookup.modules).",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for manualgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet), log_file=args.log_file)

    try:
        config = load_config(Path(args.docs_dir))
        if args.command == "build":
            outcome = BuildOrchestrator(config).run_build()
            print(f"PDF documentation created: {_relativize(outcome.output)}")
        elif args.command == "overview":
            path = BuildOrchestrator(config).generate_overview()
            print(f"Generated example overview at: {_relativize(path)}")
        elif args.command == "transcribe":
            report = BuildOrchestrator(config).transcribe_examples()
            print(f"Successfully generated {len(report.generated)} example markdown files")
            if report.failed:
                parser.exit(1, f"{len(report.failed)} example(s) failed to transcribe\n")
        elif args.command == "resolve":
            _run_resolve(parser, config, Path(args.directory), args.modules or [])
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except (ManualBuildError, FileNotFoundError) as exc:
        parser.exit(1, f"manualgen {args.command} failed: {exc}\nRun with --verbose for more details.\n")


def _run_resolve(
    parser: argparse.ArgumentParser, config: ManualConfig, directory: Path, modules: list[str]
) -> None:
    if not directory.is_dir():
        parser.exit(1, f"{directory} is not a directory\n")
    lookup = PythonSymbolLookup([*config.lookup.modules, *modules])
    report = DirectiveResolver(lookup).process_directory(directory)
    print(f"Resolved @docs blocks in {len(report.modified)} file(s).")
    if report.failed:
        parser.exit(1, f"{len(report.failed)} file(s) could not be processed\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])

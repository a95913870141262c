"""Jinja environment shared by the generated markdown pages."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

DEFAULT_TEMPLATES_DIR = Path(__file__).with_name("templates")


def create_environment(templates_dir: Path | None = None) -> Environment:
    """Return an environment that prefers ``templates_dir`` over the bundled templates."""
    directories: list[str] = []
    if templates_dir is not None:
        directories.append(str(templates_dir))
    if str(DEFAULT_TEMPLATES_DIR) not in directories:
        directories.append(str(DEFAULT_TEMPLATES_DIR))
    return Environment(
        loader=FileSystemLoader(directories),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


__all__ = ["DEFAULT_TEMPLATES_DIR", "create_environment"]

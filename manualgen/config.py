"""Configuration loading for manualgen (.manualgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .assembly.manifest import (
    AssemblyManifest,
    ManifestEntry,
    ManifestSection,
    build_default_manifest,
)
from .constants import (
    CATEGORY_DESCRIPTIONS,
    CONFIG_FILENAME,
    DEFAULT_CATEGORIES,
    EXAMPLES_RELDIR,
    OVERVIEW_RELPATH,
)
from .models import ManualBuildError


class ConfigError(ManualBuildError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ProjectConfig:
    """Document metadata passed to the renderer."""

    title: str = "Documentation"
    author: str = ""
    docs_url: Optional[str] = None


@dataclass
class PathsConfig:
    """Input and output locations, already resolved to absolute paths."""

    examples: Path
    source: Path
    output: Path
    header: Path
    resource_paths: List[Path] = field(default_factory=list)
    templates: Optional[Path] = None

    @property
    def overview(self) -> Path:
        return self.source / OVERVIEW_RELPATH

    @property
    def transcribed(self) -> Path:
        return self.source / EXAMPLES_RELDIR


@dataclass
class ExamplesConfig:
    """How example scripts are discovered and transcribed."""

    extension: str = ".py"
    language: str = "python"
    categories: List[str] = field(default_factory=lambda: list(DEFAULT_CATEGORIES))
    descriptions: Dict[str, str] = field(default_factory=lambda: dict(CATEGORY_DESCRIPTIONS))


@dataclass
class LookupConfig:
    """Modules imported before resolving documentation directives."""

    modules: List[str] = field(default_factory=list)


@dataclass
class RenderConfig:
    """Typesetting options forwarded to pandoc."""

    pdf_engine: str = "xelatex"
    toc_depth: int = 3
    highlight_style: str = "tango"
    geometry: str = "margin=1in"
    documentclass: str = "report"
    fontsize: str = "11pt"
    papersize: str = "letter"


@dataclass
class ManualConfig:
    """Represents the settings defined in .manualgen.yml."""

    root: Path
    project: ProjectConfig
    paths: PathsConfig
    examples: ExamplesConfig
    lookup: LookupConfig
    render: RenderConfig
    manifest: AssemblyManifest


def default_config(root: Path, *, cwd: Path | None = None) -> ManualConfig:
    """Return the configuration used when no .manualgen.yml exists."""
    return _build_config(root.resolve(), {}, cwd=cwd)


def load_config(config_path: Path, *, cwd: Path | None = None) -> ManualConfig:
    """Load configuration from disk; ``config_path`` may be a file or its directory."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return _build_config(root, {}, cwd=cwd)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")
    return _build_config(root, data, cwd=cwd)


def _build_config(root: Path, data: Dict[str, Any], *, cwd: Path | None) -> ManualConfig:
    invocation_dir = (cwd or Path.cwd()).resolve()

    project_data = _as_dict(data.get("project"))
    project = ProjectConfig(
        title=_as_str(project_data.get("title")) or ProjectConfig.title,
        author=_as_str(project_data.get("author")) or "",
        docs_url=_as_str(project_data.get("docs_url")),
    )

    paths_data = _as_dict(data.get("paths"))
    resource_strs = _as_str_list(paths_data.get("resource_paths")) or [".", "src", "src/assets"]
    paths = PathsConfig(
        examples=_resolve(root, _as_str(paths_data.get("examples")) or "../examples"),
        source=_resolve(root, _as_str(paths_data.get("source")) or "src"),
        output=_resolve(invocation_dir, _as_str(paths_data.get("output")) or "Documentation.pdf"),
        header=_resolve(root, _as_str(paths_data.get("header")) or "pdf_header.tex"),
        resource_paths=[_resolve(root, item) for item in resource_strs],
    )
    templates_str = _as_str(paths_data.get("templates"))
    if templates_str:
        paths.templates = _resolve(root, templates_str)

    examples_data = _as_dict(data.get("examples"))
    examples = ExamplesConfig()
    if examples_data:
        extension = _as_str(examples_data.get("extension"))
        if extension:
            examples.extension = extension if extension.startswith(".") else f".{extension}"
        examples.language = _as_str(examples_data.get("language")) or examples.language
        categories = _as_str_list(examples_data.get("categories"))
        if categories:
            examples.categories = categories
        descriptions = _as_dict(examples_data.get("descriptions"))
        for key, value in descriptions.items():
            text = _as_str(value)
            if text:
                examples.descriptions[str(key)] = text

    lookup = LookupConfig(modules=_as_str_list(_as_dict(data.get("lookup")).get("modules")))

    render_data = _as_dict(data.get("render"))
    render = RenderConfig()
    if render_data:
        render.pdf_engine = _as_str(render_data.get("pdf_engine")) or render.pdf_engine
        toc_depth = _as_int(render_data.get("toc_depth"))
        if toc_depth is not None:
            if toc_depth < 1:
                raise ConfigError("render.toc_depth must be a positive integer")
            render.toc_depth = toc_depth
        render.highlight_style = (
            _as_str(render_data.get("highlight_style")) or render.highlight_style
        )
        render.geometry = _as_str(render_data.get("geometry")) or render.geometry
        render.documentclass = _as_str(render_data.get("documentclass")) or render.documentclass
        render.fontsize = _as_str(render_data.get("fontsize")) or render.fontsize
        render.papersize = _as_str(render_data.get("papersize")) or render.papersize

    manifest_data = data.get("manifest")
    if manifest_data is None:
        manifest = build_default_manifest(examples.categories)
    else:
        manifest = _parse_manifest(manifest_data)

    return ManualConfig(
        root=root,
        project=project,
        paths=paths,
        examples=examples,
        lookup=lookup,
        render=render,
        manifest=manifest,
    )


def _parse_manifest(value: Any) -> AssemblyManifest:
    if not isinstance(value, list):
        raise ConfigError("manifest must be a list of sections")
    sections: List[ManifestSection] = []
    for index, raw_section in enumerate(value, start=1):
        section_data = _as_dict(raw_section)
        title = _as_str(section_data.get("title"))
        if not title:
            raise ConfigError(f"manifest section #{index} is missing a title")
        raw_entries = section_data.get("entries")
        if not isinstance(raw_entries, list):
            raise ConfigError(f"manifest section '{title}' must list its entries")
        entries = tuple(_parse_manifest_entry(title, item) for item in raw_entries)
        sections.append(ManifestSection(title=title, entries=entries))
    return AssemblyManifest(sections)


def _parse_manifest_entry(section: str, value: Any) -> ManifestEntry:
    if isinstance(value, str):
        if any(ch in value for ch in "*?["):
            return ManifestEntry.glob(value)
        return ManifestEntry.file(value)
    if isinstance(value, list):
        alternatives = _as_str_list(value)
        if alternatives:
            return ManifestEntry.file(*alternatives)
    raise ConfigError(f"Unsupported manifest entry in section '{section}': {value!r}")


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _resolve(base: Path, value: str) -> Path:
    candidate = Path(value).expanduser()
    if not candidate.is_absolute():
        candidate = base / candidate
    return candidate.resolve()


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "ConfigError",
    "ExamplesConfig",
    "LookupConfig",
    "ManualConfig",
    "PathsConfig",
    "ProjectConfig",
    "RenderConfig",
    "default_config",
    "load_config",
]

"""Tests for manualgen.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from manualgen.config import ConfigError, ManualConfig, load_config
from manualgen.constants import DEFAULT_CATEGORIES
from tests._fixtures.docs_builder import DocsTreeBuilder


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path, cwd=tmp_path)

    assert isinstance(config, ManualConfig)
    assert config.root == tmp_path.resolve()
    assert config.project.title == "Documentation"
    assert config.project.docs_url is None
    assert config.paths.source == (tmp_path / "src").resolve()
    assert config.paths.examples == (tmp_path.parent / "examples").resolve()
    assert config.paths.output == (tmp_path / "Documentation.pdf").resolve()
    assert config.paths.overview == (tmp_path / "src/examples/overview/example_overview.md").resolve()
    assert config.paths.resource_paths == [
        tmp_path.resolve(),
        (tmp_path / "src").resolve(),
        (tmp_path / "src" / "assets").resolve(),
    ]
    assert config.examples.extension == ".py"
    assert config.examples.categories == list(DEFAULT_CATEGORIES)
    assert config.lookup.modules == []
    assert config.render.pdf_engine == "xelatex"
    assert config.render.toc_depth == 3
    assert config.manifest.sections[0].title == "Introduction"


def test_load_config_parses_expected_fields(docs_builder: DocsTreeBuilder) -> None:
    config = docs_builder.config(
        """
        project:
          title: "ReservoirSim.py Documentation"
          author: "The ReservoirSim developers"
          docs_url: "https://docs.example.org/dev"
        paths:
          examples: "../examples"
          output: "build/Manual.pdf"
          resource_paths: [".", "src/assets"]
          templates: "templates"
        examples:
          extension: jl
          language: julia
          categories: [introduction, geothermal]
          descriptions:
            geothermal: "Heat extraction studies."
        lookup:
          modules:
            - reservoirsim
            - reservoirsim.wells
        render:
          toc_depth: 2
          highlight_style: pygments
          papersize: a4
        """
    )

    assert config.project.title == "ReservoirSim.py Documentation"
    assert config.project.author == "The ReservoirSim developers"
    assert config.project.docs_url == "https://docs.example.org/dev"
    assert config.paths.output == (docs_builder.base / "build" / "Manual.pdf").resolve()
    assert config.paths.resource_paths == [
        docs_builder.docs.resolve(),
        (docs_builder.docs / "src" / "assets").resolve(),
    ]
    assert config.paths.templates == (docs_builder.docs / "templates").resolve()
    assert config.examples.extension == ".jl"
    assert config.examples.language == "julia"
    assert config.examples.categories == ["introduction", "geothermal"]
    assert config.examples.descriptions["geothermal"] == "Heat extraction studies."
    assert config.examples.descriptions["introduction"].startswith("Basic examples")
    assert config.lookup.modules == ["reservoirsim", "reservoirsim.wells"]
    assert config.render.toc_depth == 2
    assert config.render.highlight_style == "pygments"
    assert config.render.papersize == "a4"
    assert config.render.documentclass == "report"
    examples_section = config.manifest.sections[-2]
    assert [entry.pattern for entry in examples_section.entries[1:]] == [
        "examples/introduction/*.md",
        "examples/geothermal/*.md",
    ]


def test_load_config_parses_manifest_override(docs_builder: DocsTreeBuilder) -> None:
    config = docs_builder.config(
        """
        manifest:
          - title: Front matter
            entries:
              - [index_pdf.md, index.md]
              - man/intro.md
          - title: Examples
            entries:
              - "examples/*/*.md"
        """
    )

    front, examples = config.manifest.sections
    assert front.title == "Front matter"
    assert front.entries[0].paths == ("index_pdf.md", "index.md")
    assert front.entries[1].paths == ("man/intro.md",)
    assert examples.entries[0].pattern == "examples/*/*.md"


@pytest.mark.parametrize(
    "text, message",
    [
        ("- just\n- a list\n", "mapping"),
        ("render:\n  toc_depth: 0\n", "toc_depth"),
        ("manifest: pages.md\n", "list of sections"),
        ("manifest:\n  - entries: [a.md]\n", "missing a title"),
        ("manifest:\n  - title: Odd\n    entries:\n      - {a: 1}\n", "Unsupported manifest entry"),
        ("project: [unclosed\n", "Failed to parse"),
    ],
)
def test_load_config_rejects_invalid_files(tmp_path: Path, text: str, message: str) -> None:
    (tmp_path / ".manualgen.yml").write_text(text, encoding="utf-8")

    with pytest.raises(ConfigError, match=message):
        load_config(tmp_path / ".manualgen.yml", cwd=tmp_path)


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".manualgen.yml").write_text("\n", encoding="utf-8")

    config = load_config(tmp_path, cwd=tmp_path)

    assert config.project.title == "Documentation"

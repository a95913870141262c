"""Tests for the example overview generator."""

from __future__ import annotations

from pathlib import Path

from manualgen.examples.overview import OverviewGenerator, extract_title
from tests._fixtures.docs_builder import DocsTreeBuilder


def test_overview_skips_empty_categories(docs_builder: DocsTreeBuilder, tmp_path: Path) -> None:
    docs_builder.write(
        {
            "examples/introduction/wells.py": """
                # # Wells and controls
                x = 1
            """,
            "examples/introduction/basic_setup.py": "x = 1\n",
        }
    )
    (docs_builder.examples() / "workflow").mkdir()

    generator = OverviewGenerator(["introduction", "workflow", "geothermal"], project_title="Demo")
    output = generator.write(docs_builder.examples(), tmp_path / "out" / "overview.md")
    text = output.read_text(encoding="utf-8")

    assert text.startswith("# Example Overview\n\nDemo comes with a number of examples")
    assert text.count("\n## ") == 1
    assert "## Introduction\n\nBasic examples that illustrate fundamental features" in text
    assert "## Workflow" not in text
    bullets = [line for line in text.splitlines() if line.startswith("- ")]
    assert bullets == ["- **Basic Setup**", "- **Wells and controls**"]
    assert text.endswith("- **Wells and controls**\n\n")


def test_overview_follows_configured_category_order(docs_builder: DocsTreeBuilder) -> None:
    docs_builder.write(
        {
            "examples/introduction/a.py": "# # Alpha\n",
            "examples/workflow/b.py": "# # Beta\n",
            "examples/unlisted/c.py": "# # Gamma\n",
        }
    )

    generator = OverviewGenerator(["workflow", "introduction"])
    sections = generator.collect(docs_builder.examples())

    assert [section.category for section in sections] == ["workflow", "introduction"]
    assert [entry.title for entry in sections[0].entries] == ["Beta"]


def test_overview_is_stable_across_runs(docs_builder: DocsTreeBuilder, tmp_path: Path) -> None:
    docs_builder.write(
        {
            "examples/introduction/z_last.py": "# # Zed\n",
            "examples/introduction/a_first.py": "print(1)\n",
            "examples/properties/pvt.py": "# ## Fluid PVT\n",
        }
    )
    generator = OverviewGenerator(docs_url="https://docs.example.org/dev")

    first = generator.write(docs_builder.examples(), tmp_path / "one.md").read_bytes()
    second = generator.write(docs_builder.examples(), tmp_path / "two.md").read_bytes()

    assert first == second
    assert b"online documentation at https://docs.example.org/dev" in first


def test_overview_ignores_other_extensions(docs_builder: DocsTreeBuilder) -> None:
    docs_builder.write(
        {
            "examples/introduction/notes.txt": "# # Not an example\n",
            "examples/introduction/run.py": "# # Run it\n",
        }
    )

    sections = OverviewGenerator().collect(docs_builder.examples())

    assert [entry.name for entry in sections[0].entries] == ["run"]


def test_extract_title_strips_markers_and_falls_back(tmp_path: Path) -> None:
    titled = tmp_path / "titled.py"
    titled.write_text("import os\n# #\n# ##   Two phase flow  \n", encoding="utf-8")
    untitled = tmp_path / "co2_brine_mixing.py"
    untitled.write_text("# plain comment\nx = 1\n", encoding="utf-8")

    assert extract_title(titled, "titled") == "Two phase flow"
    assert extract_title(untitled, "co2_brine_mixing") == "Co2 Brine Mixing"

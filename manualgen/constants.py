"""Shared constants for the manual build."""

from __future__ import annotations

DEFAULT_CATEGORIES: tuple[str, ...] = (
    "introduction",
    "workflow",
    "data_assimilation",
    "geothermal",
    "compositional",
    "discretization",
    "properties",
    "validation",
)

CATEGORY_DESCRIPTIONS: dict[str, str] = {
    "introduction": "Basic examples that illustrate fundamental features of the simulator.",
    "workflow": "Examples demonstrating complete workflows and advanced use cases.",
    "data_assimilation": "Examples of history matching, optimization, and sensitivity analysis.",
    "geothermal": "Geothermal reservoir simulation examples.",
    "compositional": "Compositional flow and multi-component examples.",
    "discretization": "Examples showing different discretization schemes.",
    "properties": "Examples focusing on fluid properties and relationships.",
    "validation": "Validation cases comparing with other simulators and benchmarks.",
}

CONFIG_FILENAME = ".manualgen.yml"

OVERVIEW_RELPATH = "examples/overview/example_overview.md"
EXAMPLES_RELDIR = "examples"


def category_title(category: str) -> str:
    """Return the human readable heading for a category directory name."""
    return category.replace("_", " ").title()


__all__ = [
    "CATEGORY_DESCRIPTIONS",
    "CONFIG_FILENAME",
    "DEFAULT_CATEGORIES",
    "EXAMPLES_RELDIR",
    "OVERVIEW_RELPATH",
    "category_title",
]

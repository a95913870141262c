"""Tests for the Python symbol lookup."""

from __future__ import annotations

import json
import os.path

from manualgen.directives.lookup import PythonSymbolLookup


def test_resolves_fully_qualified_names() -> None:
    lookup = PythonSymbolLookup()

    assert lookup.resolve("json.dumps") is json.dumps
    assert lookup.resolve("os.path.join") is os.path.join
    assert lookup.resolve("json.JSONDecoder.decode") is json.JSONDecoder.decode


def test_resolves_names_relative_to_configured_modules() -> None:
    lookup = PythonSymbolLookup(["json"])

    assert lookup.resolve("JSONEncoder") is json.JSONEncoder
    assert lookup.resolve("JSONEncoder.encode") is json.JSONEncoder.encode


def test_unknown_or_malformed_names_resolve_to_none() -> None:
    lookup = PythonSymbolLookup(["json"])

    assert lookup.resolve("json.not_a_function") is None
    assert lookup.resolve("no_such_module_xyz.Thing") is None
    assert lookup.resolve("simulate(::Case)") is None
    assert lookup.resolve("   ") is None


def test_failed_module_imports_are_recorded_not_raised() -> None:
    lookup = PythonSymbolLookup(["no_such_module_xyz", "json"])

    assert lookup.resolve("loads") is json.loads
    assert "no_such_module_xyz" in lookup.failed_imports


def test_docstring_returns_cleaned_text_or_none() -> None:
    lookup = PythonSymbolLookup()

    def undocumented() -> None:
        pass

    def blank() -> None:
        """   """

    def documented() -> None:
        """Run the simulation.

        Returns nothing.
        """

    assert lookup.docstring(undocumented) is None
    assert lookup.docstring(blank) is None
    assert lookup.docstring(documented) == "Run the simulation.\n\nReturns nothing."


def test_plain_values_do_not_borrow_their_type_docstring() -> None:
    lookup = PythonSymbolLookup(["math"])

    class Settings:
        """Simulation settings."""

    assert lookup.docstring(lookup.resolve("os.sep")) is None
    assert lookup.docstring(lookup.resolve("pi")) is None
    assert lookup.docstring(10) is None
    assert lookup.docstring({"max_iter": 10}) is None
    assert lookup.docstring(Settings()) is None
    assert lookup.docstring(Settings) == "Simulation settings."
    assert lookup.docstring(lookup.resolve("os.path")) is not None

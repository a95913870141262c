"""Build a PDF manual from markdown documentation and literate example scripts."""

__version__ = "0.3.0"

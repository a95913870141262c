"""Markdown post-processing for the print build."""

from .cleaner import MarkdownCleaner
from .crossrefs import rewrite_cross_references

__all__ = ["MarkdownCleaner", "rewrite_cross_references"]

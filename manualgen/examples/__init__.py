"""Example overview and transcription."""

from .overview import OverviewGenerator, extract_title
from .transcriber import ExampleTranscriber, TranscribedDocument, TranscriptionReport, parse_tags

__all__ = [
    "ExampleTranscriber",
    "OverviewGenerator",
    "TranscribedDocument",
    "TranscriptionReport",
    "extract_title",
    "parse_tags",
]

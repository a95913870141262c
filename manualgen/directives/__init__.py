"""Documentation directive resolution."""

from .lookup import PythonSymbolLookup, SymbolLookup
from .resolver import DirectiveResolver, ResolutionReport, ResolvedEntry

__all__ = [
    "DirectiveResolver",
    "PythonSymbolLookup",
    "ResolutionReport",
    "ResolvedEntry",
    "SymbolLookup",
]

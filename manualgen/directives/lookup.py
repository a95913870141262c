"""Symbol lookup used to inline API documentation."""

from __future__ import annotations

import importlib
import inspect
from types import ModuleType
from typing import Dict, Iterable, List, Optional, Protocol, Sequence

from ..logging import get_logger

logger = get_logger("lookup")


class SymbolLookup(Protocol):
    """Resolves symbol names and fetches their documentation.

    Implementations must never raise: unknown names resolve to ``None`` and
    objects without documentation return ``None`` from :meth:`docstring`.
    """

    def resolve(self, name: str) -> Optional[object]:
        ...

    def docstring(self, obj: object) -> Optional[str]:
        ...


class PythonSymbolLookup:
    """Resolves dotted Python names by import and attribute traversal.

    Names are tried as written first (``package.module.Class.method``), then
    relative to each configured module, so a page can list ``Simulator``
    when ``mypackage`` is configured.
    """

    def __init__(self, modules: Iterable[str] = ()) -> None:
        self._module_names: List[str] = [name for name in modules if name]
        self._loaded: Optional[List[ModuleType]] = None
        self._failed_imports: Dict[str, str] = {}

    @property
    def failed_imports(self) -> Dict[str, str]:
        return dict(self._failed_imports)

    def resolve(self, name: str) -> Optional[object]:
        cleaned = name.strip()
        if not cleaned:
            return None
        parts = cleaned.split(".")
        if not all(part.isidentifier() for part in parts):
            logger.debug("Not a valid dotted name: %s", cleaned)
            return None

        found = self._resolve_absolute(parts)
        if found is not None:
            return found
        for module in self._modules():
            found = _walk_attributes(module, parts)
            if found is not None:
                return found
        return None

    def docstring(self, obj: object) -> Optional[str]:
        if not _documents_itself(obj):
            return None
        try:
            doc = inspect.getdoc(obj)
        except Exception as exc:  # pragma: no cover - exotic descriptors
            logger.debug("inspect.getdoc failed for %r: %s", obj, exc)
            return None
        if doc is None or not doc.strip():
            return None
        return doc

    def _modules(self) -> List[ModuleType]:
        if self._loaded is None:
            self._loaded = []
            for module_name in self._module_names:
                try:
                    self._loaded.append(importlib.import_module(module_name))
                except Exception as exc:
                    self._failed_imports[module_name] = str(exc)
                    logger.warning(
                        "Could not import %s (%s); its symbols will be reported as unavailable",
                        module_name,
                        exc,
                    )
        return self._loaded

    def _resolve_absolute(self, parts: Sequence[str]) -> Optional[object]:
        # Try the longest importable module prefix, then walk the remaining attributes.
        for split in range(len(parts), 0, -1):
            module = _import(".".join(parts[:split]))
            if module is None:
                continue
            return _walk_attributes(module, parts[split:])
        return None


def _import(module_name: str) -> Optional[ModuleType]:
    try:
        return importlib.import_module(module_name)
    except Exception as exc:
        logger.debug("Import of %s failed: %s", module_name, exc)
        return None


def _documents_itself(obj: object) -> bool:
    # Plain values such as module constants only carry their type's docstring.
    if inspect.ismodule(obj) or inspect.isclass(obj) or inspect.isroutine(obj):
        return True
    if isinstance(obj, property):
        return True
    return getattr(obj, "__doc__", None) is not getattr(type(obj), "__doc__", None)


def _walk_attributes(obj: object, attributes: Sequence[str]) -> Optional[object]:
    current = obj
    for attribute in attributes:
        try:
            current = getattr(current, attribute)
        except Exception:
            return None
    return current


__all__ = ["PythonSymbolLookup", "SymbolLookup"]

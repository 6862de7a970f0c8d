"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/aspects.py
Resolves dotted aspect paths ("address.city", "owner.get_name") against models.
"""
import inspect
from collections.abc import Mapping
from typing import Any, Dict, List

from virtualgroups.core.errors import AspectError

_MISSING = object()


class AttributePath:
    """
    Extracts a value from a model by following a dotted path.

    Each part is looked up as a mapping key (for dict-like models) or as an
    attribute; a key missing from a mapping counts as a missing part.
    Bound methods found on the way are called without arguments.
    A None in the middle of the path yields None.

    How each model type resolves a part (item or attribute) is cached, so
    repeated extraction over a large homogeneous source stays cheap.
    """

    def __init__(self, aspect_name: str, ignore_missing: bool = False):
        self.aspect_name = aspect_name or ""
        self.ignore_missing = ignore_missing
        self.parts: List[str] = [p.strip() for p in self.aspect_name.split(".")] if self.aspect_name else []
        self._lookup_kinds: Dict[tuple, str] = {}

    def get_value(self, target: Any) -> Any:
        if not self.parts:
            return None
        try:
            for part in self.parts:
                if target is None:
                    break
                target = self._resolve_part(target, part)
        except AspectError:
            if self.ignore_missing:
                return None
            raise
        return target

    __call__ = get_value

    def _resolve_part(self, target: Any, part: str) -> Any:
        cache_key = (type(target), part)
        kind = self._lookup_kinds.get(cache_key)
        value = _MISSING

        if kind == "item":
            value = self._by_item(target, part)
        elif kind == "attr":
            value = getattr(target, part, _MISSING)

        if value is _MISSING:
            # First time for this type, or the cached kind no longer applies
            value, kind = self._classify(target, part)
            self._lookup_kinds[cache_key] = kind

        if inspect.ismethod(value) or inspect.isbuiltin(value):
            try:
                value = value()
            except TypeError as e:
                raise AspectError(self.aspect_name, part, target) from e
        return value

    def _classify(self, target: Any, part: str):
        # Mappings resolve by key only, so a record's missing field never
        # picks up a method of the mapping type (dict.values, dict.items...)
        if isinstance(target, Mapping):
            value = self._by_item(target, part)
            if value is not _MISSING:
                return value, "item"
            raise AspectError(self.aspect_name, part, target)

        value = getattr(target, part, _MISSING)
        if value is not _MISSING:
            return value, "attr"

        if hasattr(target, "__getitem__"):
            value = self._by_item(target, part)
            if value is not _MISSING:
                return value, "item"

        raise AspectError(self.aspect_name, part, target)

    @staticmethod
    def _by_item(target: Any, part: str) -> Any:
        try:
            return target[part]
        except (KeyError, IndexError, TypeError):
            return _MISSING

    def __repr__(self):
        return f"<AttributePath {self.aspect_name!r}>"

"""Exporter-wide static and dynamic fields."""

from __future__ import annotations

from typing import Any, Callable, Dict, List

from otel_honeycomb.errors import ValidationError


class FieldSet:
    """
    Fields added to every event an exporter sends.

    A name is either static or dynamic, never both: registering a name
    removes any earlier registration of the other kind.
    """

    def __init__(self) -> None:
        self._static: Dict[str, Any] = {}
        self._dynamic: Dict[str, Callable[[], Any]] = {}

    def add_field(self, name: str, value: Any) -> "FieldSet":
        """Add a field whose value is fixed for the exporter's lifetime."""
        _check_name(name)
        self._dynamic.pop(name, None)
        self._static[name] = value
        return self

    def add_dynamic_field(self, name: str, fn: Callable[[], Any]) -> "FieldSet":
        """Add a field whose value is produced by calling fn for each event."""
        _check_name(name)
        if fn is None or not callable(fn):
            raise ValidationError("dynamic field requires a callable", details={"field": name})
        self._static.pop(name, None)
        self._dynamic[name] = fn
        return self

    def resolve(self) -> Dict[str, Any]:
        """Static values plus one fresh call of every dynamic function."""
        values = dict(self._static)
        for name, fn in self._dynamic.items():
            values[name] = fn()
        return values

    def copy(self) -> "FieldSet":
        clone = FieldSet()
        clone._static = dict(self._static)
        clone._dynamic = dict(self._dynamic)
        return clone

    def names(self) -> List[str]:
        return list(self._static) + list(self._dynamic)

    def __contains__(self, name: object) -> bool:
        return name in self._static or name in self._dynamic

    def __len__(self) -> int:
        return len(self._static) + len(self._dynamic)

    def __repr__(self) -> str:
        return f"FieldSet(static={sorted(self._static)}, dynamic={sorted(self._dynamic)})"


def _check_name(name: str) -> None:
    if not name:
        raise ValidationError("field name must not be empty")

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from showcase.errors import ValidationError


@dataclass(frozen=True)
class PatchField:
    """
    One updatable field of a partial update.

    name:    key in the request body
    column:  model attribute (defaults to name)
    convert: converter(value, name) that validates and normalizes the value
    """
    name: str
    column: Optional[str] = None
    convert: Optional[Callable[[Any, str], Any]] = None

    @property
    def target(self) -> str:
        return self.column or self.name


def build_patch(data: Mapping[str, Any], fields: Sequence[PatchField]) -> Dict[str, Any]:
    """
    Collect only the fields explicitly present in ``data``.
    Returns {column: converted value}.
    """
    patch: Dict[str, Any] = {}
    for field in fields:
        if field.name not in data:
            continue
        value = data[field.name]
        if field.convert is not None:
            value = field.convert(value, field.name)
        patch[field.target] = value
    return patch


def ensure_not_empty(patch: Mapping[str, Any], *extra: Any) -> None:
    if not patch and not any(extra):
        raise ValidationError("Nothing to update")


def apply_patch(entity: Any, patch: Mapping[str, Any]) -> List[str]:
    """Write the patch onto ``entity``; returns the columns that actually changed."""
    changed_fields: List[str] = []
    for column, value in patch.items():
        if getattr(entity, column) != value:
            setattr(entity, column, value)
            changed_fields.append(column)
    return changed_fields

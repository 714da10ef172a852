from __future__ import annotations

from dataclasses import fields
from enum import Enum
from typing import Any


def record_to_dict(record: Any, *, rename: dict[str, str] | None = None, skip_none: tuple[str, ...] = ()) -> dict:
    """Flatten a dataclass record for the JSON envelope (enums become their values)."""
    rename = rename or {}
    out: dict[str, Any] = {}
    for f in fields(record):
        value = getattr(record, f.name)
        if value is None and f.name in skip_none:
            continue
        if isinstance(value, Enum):
            value = value.value
        out[rename.get(f.name, f.name)] = value
    return out

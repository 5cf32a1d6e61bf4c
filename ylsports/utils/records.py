from __future__ import annotations

from typing import Any, Optional

# Records arrive either as raw store dicts (camelCase keys) or as pydantic
# models / dataclasses (snake_case attributes).


def field_value(obj: Any, *keys: str) -> Any:
    """First non-``None`` value among ``keys`` on a dict or an object."""
    if obj is None:
        return None
    for key in keys:
        value = obj.get(key) if isinstance(obj, dict) else getattr(obj, key, None)
        if value is not None:
            return value
    return None


def normalized_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip().lower()
    return text or None

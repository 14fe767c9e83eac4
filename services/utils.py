from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

def deep_serialize(obj: Any) -> Any:
    """
    Recursively convert objects to JSON-safe primitives.
    """
    if obj is None:
        return None
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, Decimal):
        return float(obj)
    if isinstance(obj, date):
        return obj.isoformat()
    if hasattr(obj, "model_dump"):
        return deep_serialize(obj.model_dump())
    if isinstance(obj, dict):
        return {k: deep_serialize(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set)):
        return [deep_serialize(v) for v in obj]
    if isinstance(obj, (str, int, float, bool)):
        return obj
    try:
        return deep_serialize(vars(obj))
    except TypeError:
        return str(obj)

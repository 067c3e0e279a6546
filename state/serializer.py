# Convert stored records to and from JSON text
import json
from dataclasses import asdict, is_dataclass
from enum import Enum


def _encode(value):
    # Enums by value, dataclasses as dicts
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_json(data, indent: int | None = 2) -> str:
    """
    Convert a record to a JSON string.
    Args:
        data: A dict (or dataclass) of plain values, enums allowed.
        indent (int | None): Pretty-print indentation, None for compact.
    Returns:
        str: The JSON string representation.
    """
    return json.dumps(data, indent=indent, default=_encode)


def from_json(json_string: str):
    """
    Convert a JSON string back to plain values.
    Raises:
        json.JSONDecodeError: The text is not valid JSON.
    """
    return json.loads(json_string)

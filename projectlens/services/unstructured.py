"""Conversion of structured objects into nested attribute maps and typed access
into those maps.

Accessors return ``(value, found)``. A missing field is not an error; a field
that is present with the wrong type raises ``InvalidFieldError``.
"""

import dataclasses
from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple

from kubernetes import client
from pydantic import BaseModel

from projectlens.core.exceptions import ConversionError, InvalidFieldError


@lru_cache(maxsize=1)
def _api_client() -> client.ApiClient:
    # Only used for serialization, never for requests
    return client.ApiClient()


def to_attribute_map(obj: Any) -> Dict[str, Any]:
    """Convert a structured object into a nested ``dict``.

    Kubernetes client models keep their declared (camelCase) field names.

    Raises:
        ConversionError: if the object cannot be represented as a map
    """
    if obj is None:
        raise ConversionError("cannot convert None to an attribute map")

    try:
        if isinstance(obj, BaseModel):
            data = obj.model_dump(by_alias=True, exclude_none=True)
        elif dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            data = dataclasses.asdict(obj)
        else:
            data = _api_client().sanitize_for_serialization(obj)
    except (TypeError, ValueError, AttributeError) as e:
        raise ConversionError(
            f"failed to convert {type(obj).__name__}: {e}"
        ) from e

    if not isinstance(data, dict):
        raise ConversionError(
            f"{type(obj).__name__} does not convert to a map, got {type(data).__name__}"
        )
    return data


def nested_field(obj: Dict[str, Any], *fields: str) -> Tuple[Any, bool]:
    """Walk ``fields`` through nested maps."""
    value: Any = obj
    for i, name in enumerate(fields):
        if not isinstance(value, dict):
            raise InvalidFieldError(fields[:i], "map", value)
        if name not in value:
            return None, False
        value = value[name]
    return value, True


def nested_slice(obj: Dict[str, Any], *fields: str) -> Tuple[Optional[List[Any]], bool]:
    value, found = nested_field(obj, *fields)
    if not found or value is None:
        return None, False
    if not isinstance(value, list):
        raise InvalidFieldError(fields, "list", value)
    return value, True


def nested_map(
    obj: Dict[str, Any], *fields: str
) -> Tuple[Optional[Dict[str, Any]], bool]:
    value, found = nested_field(obj, *fields)
    if not found or value is None:
        return None, False
    if not isinstance(value, dict):
        raise InvalidFieldError(fields, "map", value)
    return value, True


def nested_string(obj: Dict[str, Any], *fields: str) -> Tuple[Optional[str], bool]:
    value, found = nested_field(obj, *fields)
    if not found or value is None:
        return None, False
    if not isinstance(value, str):
        raise InvalidFieldError(fields, "string", value)
    return value, True

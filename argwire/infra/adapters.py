from functools import lru_cache
from typing import Any, Mapping

from pydantic import TypeAdapter


@lru_cache(maxsize=256)
def get_adapter(target_type: Any) -> TypeAdapter:
    return TypeAdapter(target_type)


def validate_as(value: Any, target_type: Any) -> Any:
    """
    Validate a decoded plain value against `target_type`. `object`
    disables validation and returns the value unchanged.
    """
    if target_type is object:
        return value
    return get_adapter(target_type).validate_python(value)


def check_headers(headers: Any) -> dict[str, str]:
    if headers is None:
        return {}

    if not isinstance(headers, Mapping):
        raise TypeError(f"Headers must be a map, got {type(headers).__name__}")

    for key, value in headers.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise TypeError(f"Header {key!r} must map str to str")

    return dict(headers)

import json
from typing import Any, Mapping

from pydantic_core import to_jsonable_python

from argwire.core.ports.codec import Codec
from argwire.infra.adapters import check_headers, validate_as


class JsonCodec(Codec):
    """
    JSON implementation of the Codec interface.

    - headers are a JSON object of strings
    - bodies are any JSON document; pydantic models, dataclasses and
      other rich values are converted with pydantic before dumping
    - an empty payload decodes to `{}` (headers) or None (body)
    """
    def __init__(self, sort_keys: bool = True, ensure_ascii: bool = False) -> None:
        self._sort_keys = sort_keys
        self._ensure_ascii = ensure_ascii

    def _dumps(self, value: Any) -> bytes:
        return json.dumps(
            value,
            sort_keys=self._sort_keys,
            ensure_ascii=self._ensure_ascii,
            separators=(",", ":"),
            default=to_jsonable_python,
        ).encode("utf-8")

    def encode_headers(self, headers: Mapping[str, str]) -> bytes:
        return self._dumps(check_headers(headers))

    def decode_headers(self, data: bytes) -> dict[str, str]:
        if not data:
            return {}
        return check_headers(json.loads(data))

    def encode_body(self, value: Any) -> bytes:
        return self._dumps(value)

    def decode_body(self, data: bytes, target_type: Any = object) -> Any:
        if not data:
            return None
        return validate_as(json.loads(data), target_type)

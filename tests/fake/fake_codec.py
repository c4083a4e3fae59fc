import json
from typing import Any, Mapping

from argwire.core.ports.codec import Codec


class CountingCodec(Codec):
    """
    A JSON-like codec for tests that records how many times each
    operation ran, so tests can observe caching and build-time encoding.
    """

    def __init__(self) -> None:
        self.calls: dict[str, int] = {
            "encode_headers": 0,
            "decode_headers": 0,
            "encode_body": 0,
            "decode_body": 0,
        }

    def encode_headers(self, headers: Mapping[str, str]) -> bytes:
        self.calls["encode_headers"] += 1
        return json.dumps(dict(headers), sort_keys=True).encode()

    def decode_headers(self, data: bytes) -> dict[str, str]:
        self.calls["decode_headers"] += 1
        if not data:
            return {}
        return json.loads(data)

    def encode_body(self, value: Any) -> bytes:
        self.calls["encode_body"] += 1
        return json.dumps(value).encode()

    def decode_body(self, data: bytes, target_type: Any = object) -> Any:
        self.calls["decode_body"] += 1
        if not data:
            return None
        value = json.loads(data)
        if target_type is not object and not isinstance(value, target_type):
            raise TypeError(f"Expected {target_type.__name__}, got {type(value).__name__}")
        return value


class ExplodingCodec(Codec):
    """Codec whose every operation fails with a plain exception."""

    def encode_headers(self, headers: Mapping[str, str]) -> bytes:
        raise RuntimeError("boom")

    def decode_headers(self, data: bytes) -> dict[str, str]:
        raise RuntimeError("boom")

    def encode_body(self, value: Any) -> bytes:
        raise RuntimeError("boom")

    def decode_body(self, data: bytes, target_type: Any = object) -> Any:
        raise RuntimeError("boom")

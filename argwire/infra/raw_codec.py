from typing import Any, Mapping

from argwire.core.codecs.headers import HeaderFraming
from argwire.core.ports.codec import Codec


class RawCodec(Codec):
    """
    Pass-through codec of the raw scheme. Headers use the binary
    `HeaderFraming`; bodies are opaque bytes (str bodies are UTF-8 encoded).
    """
    def encode_headers(self, headers: Mapping[str, str]) -> bytes:
        return HeaderFraming.encode(headers)

    def decode_headers(self, data: bytes) -> dict[str, str]:
        return HeaderFraming.decode(data)

    def encode_body(self, value: Any) -> bytes:
        if isinstance(value, (bytes, bytearray, memoryview)):
            return bytes(value)
        if isinstance(value, str):
            return value.encode("utf-8")
        raise TypeError(f"Raw body must be bytes or str, got {type(value).__name__}")

    def decode_body(self, data: bytes, target_type: Any = object) -> Any:
        if target_type is str:
            return bytes(data).decode("utf-8")
        if target_type in (object, bytes):
            return bytes(data)
        raise TypeError(f"Raw body cannot be decoded as {target_type!r}")

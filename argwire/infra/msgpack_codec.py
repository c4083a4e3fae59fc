import msgpack
from typing import Any, Mapping

from pydantic_core import to_jsonable_python

from argwire.core.ports.codec import Codec
from argwire.infra.adapters import check_headers, validate_as


class MsgPackCodec(Codec):
    """
    MsgPack-based implementation of the Codec interface, used as the
    binary argument scheme.

    - deterministic binary encoding (maps keep insertion order)
    - compact
    - bytes survive a round-trip untouched
    """
    def encode_headers(self, headers: Mapping[str, str]) -> bytes:
        return msgpack.packb(check_headers(headers), use_bin_type=True)

    def decode_headers(self, data: bytes) -> dict[str, str]:
        if not data:
            return {}
        return check_headers(msgpack.unpackb(data, raw=False))

    def encode_body(self, value: Any) -> bytes:
        return msgpack.packb(value, use_bin_type=True, default=to_jsonable_python)

    def decode_body(self, data: bytes, target_type: Any = object) -> Any:
        if not data:
            return None
        return validate_as(msgpack.unpackb(data, raw=False), target_type)

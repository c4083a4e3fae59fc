import logging
from types import MappingProxyType
from typing import Any, Mapping, Callable, TypeVar

from argwire.core.errors import ArgwireError, CodecError, UnsupportedSchemeError
from argwire.core.ports.codec import Codec

R = TypeVar("R")


class SchemeRegistry:
    """
    Read-only mapping from an argument-scheme tag to the Codec handling it.

    The registry is a plain value handed to builders and responses, which
    keeps encoding and decoding testable with substitute codecs. Its
    mapping is copied at construction and never mutated afterwards;
    `with_codec` derives a new registry instead.

    Every encode/decode goes through the four delegating methods, which
    resolve the codec (UnsupportedSchemeError when missing) and wrap any
    codec failure that is not already an ArgwireError into a CodecError.
    """

    def __init__(self, codecs: Mapping[str, Codec]) -> None:
        self._codecs: Mapping[str, Codec] = MappingProxyType(
            {str(scheme): codec for scheme, codec in codecs.items()}
        )
        self._logger = logging.getLogger("core.codecs.registry")

    def get(self, scheme: str) -> Codec:
        codec = self._codecs.get(str(scheme))
        if codec is None:
            raise UnsupportedSchemeError(str(scheme))
        return codec

    def supports(self, scheme: str) -> bool:
        return str(scheme) in self._codecs

    def schemes(self) -> list[str]:
        return list(self._codecs)

    def with_codec(self, scheme: str, codec: Codec) -> "SchemeRegistry":
        codecs = dict(self._codecs)
        codecs[str(scheme)] = codec
        return SchemeRegistry(codecs)

    def encode_headers(self, headers: Mapping[str, str], scheme: str) -> bytes:
        codec = self.get(scheme)
        return self._call(scheme, "encode_headers", lambda: codec.encode_headers(headers))

    def decode_headers(self, data: bytes, scheme: str) -> dict[str, str]:
        codec = self.get(scheme)
        return self._call(scheme, "decode_headers", lambda: codec.decode_headers(data))

    def encode_body(self, value: Any, scheme: str) -> bytes:
        codec = self.get(scheme)
        return self._call(scheme, "encode_body", lambda: codec.encode_body(value))

    def decode_body(self, data: bytes, scheme: str, target_type: Any = object) -> Any:
        codec = self.get(scheme)
        return self._call(scheme, "decode_body", lambda: codec.decode_body(data, target_type))

    def _call(self, scheme: str, operation: str, func: Callable[[], R]) -> R:
        try:
            result = func()
        except ArgwireError:
            raise
        except Exception as exc:
            self._logger.error(f"{operation} failed for scheme '{scheme}': {exc}")
            raise CodecError(str(scheme), operation, str(exc)) from exc

        self._logger.debug(f"{operation} done for scheme '{scheme}'")
        return result

    def __repr__(self) -> str:
        return f"SchemeRegistry(schemes={self.schemes()})"

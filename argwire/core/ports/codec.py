from typing import Any, Mapping, Protocol


class Codec(Protocol):
    """
    Defines the interface for turning application headers and bodies
    into the opaque arg2/arg3 payloads of one argument scheme, and back.

    Implementations must be:
    - deterministic
    - pure (no side effects)
    - safe against malformed input (raise, never return garbage)

    An empty headers map must encode to a valid, non-empty payload, and an
    empty payload (b"") must decode to an empty map or to the scheme's
    canonical empty body. Normalizing an absent body to b"" before
    encoding is the caller's job, not the codec's.
    """

    def encode_headers(self, headers: Mapping[str, str]) -> bytes:
        """Encode application headers into an arg2 payload."""

    def decode_headers(self, data: bytes) -> dict[str, str]:
        """Decode an arg2 payload into application headers."""

    def encode_body(self, value: Any) -> bytes:
        """Encode a body value into an arg3 payload."""

    def decode_body(self, data: bytes, target_type: Any = object) -> Any:
        """
        Decode an arg3 payload. `target_type` drives validation of the
        decoded value; `object` returns it as-is.
        """

from typing import Mapping


class HeaderFraming:
    """
    Binary framing of a string map, as used for application headers of
    the raw scheme:

        headers = nh:2 || (len(key):2 || key || len(value):2 || value){nh}

    Counts and lengths are big-endian uint16, keys and values UTF-8.
    An empty map encodes to two zero bytes; an empty payload decodes to
    an empty map.
    """
    COUNT_SIZE: int = 2
    LEN_SIZE: int = 2
    MAX_LEN: int = 0xFFFF

    @classmethod
    def _field(cls, text: str) -> bytes:
        raw = text.encode("utf-8")
        if len(raw) > cls.MAX_LEN:
            raise ValueError(f"Header field too long: {len(raw)} bytes (max {cls.MAX_LEN})")
        return len(raw).to_bytes(cls.LEN_SIZE, "big") + raw

    @classmethod
    def encode(cls, headers: Mapping[str, str]) -> bytes:
        if len(headers) > cls.MAX_LEN:
            raise ValueError(f"Too many headers: {len(headers)} (max {cls.MAX_LEN})")

        out = bytearray(len(headers).to_bytes(cls.COUNT_SIZE, "big"))
        for key, value in headers.items():
            if not isinstance(key, str) or not isinstance(value, str):
                raise TypeError(f"Header {key!r} must map str to str")
            out += cls._field(key)
            out += cls._field(value)

        return bytes(out)

    @classmethod
    def _read_field(cls, data: bytes, pos: int) -> tuple[str, int]:
        if len(data) < pos + cls.LEN_SIZE:
            raise ValueError("Truncated headers: missing field length")

        size = int.from_bytes(data[pos: pos + cls.LEN_SIZE], "big")
        pos += cls.LEN_SIZE

        if len(data) < pos + size:
            raise ValueError("Truncated headers: field shorter than declared")

        return data[pos: pos + size].decode("utf-8"), pos + size

    @classmethod
    def decode(cls, data: bytes) -> dict[str, str]:
        if not data:
            return {}

        if len(data) < cls.COUNT_SIZE:
            raise ValueError("Truncated headers: missing header count")

        count = int.from_bytes(data[:cls.COUNT_SIZE], "big")
        pos = cls.COUNT_SIZE
        headers: dict[str, str] = {}

        for _ in range(count):
            key, pos = cls._read_field(data, pos)
            value, pos = cls._read_field(data, pos)
            headers[key] = value

        if pos != len(data):
            raise ValueError(f"Trailing bytes after headers: {len(data) - pos}")

        return headers

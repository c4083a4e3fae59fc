from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType
from typing import Any, Mapping, Literal

from argwire.core.models.request import Request


class ResponseCode(IntEnum):
    OK = 0x00
    ERROR = 0x01


class ErrorType(IntEnum):
    """
    Error codes carried by an error reply. The numeric values are the
    ones used on the wire by the TChannel protocol family.
    """
    TIMEOUT = 0x01
    CANCELLED = 0x02
    BUSY = 0x03
    DECLINED = 0x04
    UNEXPECTED_ERROR = 0x05
    BAD_REQUEST = 0x06
    NETWORK_ERROR = 0x07
    UNHEALTHY = 0x08
    FATAL_PROTOCOL_ERROR = 0xFF


@dataclass(frozen=True)
class ErrorResponse:
    """
    Error variant of a reply. It carries no headers and no body: the
    accessors shared with `EncodedResponse` return empty values instead
    of raising, so a consumer that forgot to branch on the variant still
    gets a definite answer.
    """
    id: int
    error_type: ErrorType
    message: str
    transport_headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def response_code(self) -> ResponseCode:
        return ResponseCode.ERROR

    @property
    def is_error(self) -> Literal[True]:
        return True

    def get_headers(self) -> Mapping[str, str]:
        return MappingProxyType({})

    def get_header(self, key: str) -> str | None:
        return None

    def get_body(self, target_type: Any = object) -> None:
        return None

    @classmethod
    def for_request(
        cls,
        request: Request,
        id: int,
        error_type: ErrorType,
        message: str,
    ) -> "ErrorResponse":
        return cls(
            id=id,
            error_type=ErrorType(error_type),
            message=message,
            transport_headers=MappingProxyType(dict(request.transport_headers)),
        )

    def __str__(self) -> str:
        return (
            f"<{type(self).__name__} id={self.id} errorType={self.error_type.name} "
            f"message={self.message}>"
        )

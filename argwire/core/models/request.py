from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Generic, Mapping, TypeVar

from argwire.core.errors import MissingRequiredFieldError
from argwire.core.models.scheme import TransportHeader

T = TypeVar("T")


@dataclass(frozen=True)
class Request(Generic[T]):
    """
    Immutable description of an outbound call.

    A Request stays structured: headers and body are never encoded here.
    The transport component consuming it encodes them (see
    `argwire.core.transport.outbound.encode_request`).

    Instances are produced by `RequestBuilder.build()` and are safe to
    share read-only across threads.
    """
    service: str
    """
    Name of the target service.
    """

    endpoint: str
    """
    Name of the endpoint (method) to call on the service.
    """

    transport_headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    """
    Transport-level metadata, passed through unmodified.
    """

    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    """
    Structured application headers.
    """

    body: T | None = None
    """
    Structured body, may be absent.
    """

    @property
    def arg_scheme(self) -> str | None:
        return self.transport_headers.get(TransportHeader.arg_scheme)

    def __str__(self) -> str:
        return (
            f"<{type(self).__name__} service={self.service} "
            f"transport_headers={dict(self.transport_headers)} endpoint={self.endpoint} "
            f"headers={dict(self.headers)} body={self.body}>"
        )


class RequestBuilder(Generic[T]):
    """
    Staging object for a `Request`. Setters merge into the pending maps
    (last write wins per key) and return the builder for chaining.
    """

    def __init__(self, body: T | None, service: str | None, endpoint: str | None) -> None:
        self._body = body
        self._service = service
        self._endpoint = endpoint
        self._transport_headers: dict[str, str] = {}
        self._headers: dict[str, str] = {}

    def set_transport_header(self, key: str, value: str) -> "RequestBuilder[T]":
        self._transport_headers[key] = value
        return self

    def set_transport_headers(self, transport_headers: Mapping[str, str]) -> "RequestBuilder[T]":
        self._transport_headers.update(transport_headers)
        return self

    def set_arg_scheme(self, scheme: str) -> "RequestBuilder[T]":
        return self.set_transport_header(str(TransportHeader.arg_scheme), str(scheme))

    def set_header(self, key: str, value: str) -> "RequestBuilder[T]":
        self._headers[key] = value
        return self

    def set_headers(self, headers: Mapping[str, str]) -> "RequestBuilder[T]":
        self._headers.update(headers)
        return self

    def validate(self) -> "RequestBuilder[T]":
        if not self._service:
            raise MissingRequiredFieldError("service")

        if not self._endpoint:
            raise MissingRequiredFieldError("endpoint")

        return self

    def build(self) -> Request[T]:
        self.validate()
        return Request(
            service=self._service,  # type: ignore[arg-type]
            endpoint=self._endpoint,  # type: ignore[arg-type]
            transport_headers=MappingProxyType(dict(self._transport_headers)),
            headers=MappingProxyType(dict(self._headers)),
            body=self._body,
        )

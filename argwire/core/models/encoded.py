import logging
from enum import StrEnum
from types import MappingProxyType
from typing import Any, Generic, Literal, Mapping, TypeVar

from argwire.core.codecs.registry import SchemeRegistry
from argwire.core.errors import ConflictingRepresentationError, MissingRequiredFieldError
from argwire.core.models.lazy import Lazy
from argwire.core.models.request import Request
from argwire.core.models.response import ErrorResponse, ResponseCode
from argwire.core.models.scheme import ArgScheme

T = TypeVar("T")

EMPTY_PAYLOAD: bytes = b""
"""
Canonical arg3 payload of a reply built without a body.
"""


class EncodedResponse(Generic[T]):
    """
    Success variant of a reply, holding wire-ready arg2 (headers) and
    arg3 (body) payloads.

    `arg2` and `arg3` are always present and never change. The structured
    headers and body live in write-once `Lazy` cells: they are either
    resolved at build time (when the caller supplied structured values)
    or decoded from arg2/arg3 with the response's registry and arg scheme
    on first access, then cached.

    Decoding is a pure function of the raw payloads and the scheme, so
    concurrent first accesses may both decode and store an equal value.
    A decode failure raises and leaves the cell unresolved.
    """

    def __init__(
        self,
        id: int,
        response_code: ResponseCode,
        transport_headers: Mapping[str, str],
        arg_scheme: str,
        arg2: bytes,
        arg3: bytes,
        registry: SchemeRegistry,
        headers: Lazy[Mapping[str, str]] | None = None,
        body: Lazy[T | None] | None = None,
    ) -> None:
        self._id = id
        self._response_code = response_code
        self._transport_headers = MappingProxyType(dict(transport_headers))
        self._arg_scheme = str(arg_scheme)
        self._arg2 = bytes(arg2)
        self._arg3 = bytes(arg3)
        self._registry = registry
        self._headers: Lazy[Mapping[str, str]] = headers if headers is not None else Lazy()
        self._body: Lazy[T | None] = body if body is not None else Lazy()
        self._logger = logging.getLogger("core.models.encoded")

    @classmethod
    def from_raw(
        cls,
        id: int,
        registry: SchemeRegistry,
        arg2: bytes | None,
        arg3: bytes | None,
        arg_scheme: str = ArgScheme.json,
        response_code: ResponseCode = ResponseCode.OK,
        transport_headers: Mapping[str, str] | None = None,
    ) -> "EncodedResponse[T]":
        """
        Wrap payloads handed over by a transport. Decoding is deferred
        until the headers or the body are read.
        """
        builder: EncodedResponseBuilder[T] = EncodedResponseBuilder(id, registry, arg_scheme)
        return (
            builder
            .set_response_code(response_code)
            .set_transport_headers(transport_headers or {})
            .set_arg2(arg2 if arg2 is not None else EMPTY_PAYLOAD)
            .set_arg3(arg3 if arg3 is not None else EMPTY_PAYLOAD)
            .build()
        )

    @property
    def id(self) -> int:
        return self._id

    @property
    def response_code(self) -> ResponseCode:
        return self._response_code

    @property
    def transport_headers(self) -> Mapping[str, str]:
        return self._transport_headers

    @property
    def arg_scheme(self) -> str:
        return self._arg_scheme

    @property
    def arg2(self) -> bytes:
        return self._arg2

    @property
    def arg3(self) -> bytes:
        return self._arg3

    @property
    def is_error(self) -> Literal[False]:
        return False

    def get_headers(self) -> Mapping[str, str]:
        return self._headers.resolve(self._decode_headers)

    def get_header(self, key: str) -> str | None:
        return self.get_headers().get(key)

    def get_body(self, target_type: Any = object) -> T | None:
        """
        Return the body, decoding arg3 on first call. `target_type`
        drives the decode of that first call only; later calls return
        the cached value.
        """
        return self._body.resolve(lambda: self._decode_body(target_type))

    def _decode_headers(self) -> Mapping[str, str]:
        if not self._arg2:
            return MappingProxyType({})

        self._logger.debug(f"Decoding headers of response {self._id} ({self._arg_scheme})")
        headers = self._registry.decode_headers(self._arg2, self._arg_scheme)
        return MappingProxyType(dict(headers))

    def _decode_body(self, target_type: Any) -> T | None:
        self._logger.debug(f"Decoding body of response {self._id} ({self._arg_scheme})")
        return self._registry.decode_body(self._arg3, self._arg_scheme, target_type)

    def __str__(self) -> str:
        return (
            f"<{type(self).__name__} responseCode={self._response_code.name} "
            f"transportHeaders={dict(self._transport_headers)} "
            f"headers={self._headers.peek()} body={self._body.peek()}>"
        )

    __repr__ = __str__


Response = EncodedResponse | ErrorResponse
"""
A reply is either a success (`EncodedResponse`) or an error
(`ErrorResponse`). Consumers branch with `match`.
"""


class BuilderState(StrEnum):
    unvalidated = "unvalidated"
    headers_resolved = "headers_resolved"
    body_resolved = "body_resolved"
    built = "built"


class EncodedResponseBuilder(Generic[T]):
    """
    Staging object for an `EncodedResponse`.

    For each of headers and body the caller supplies at most one form:
    raw bytes (`set_arg2` / `set_arg3`) or a structured value
    (`set_header(s)` / `set_body`). Supplying both is rejected by the
    second setter with ConflictingRepresentationError.

    `validate()` (run by `build()`) checks the required fields, then
    resolves the payloads:
    - headers: encoded into arg2 when no arg2 was given (an empty map
      still yields a valid payload), otherwise left to lazy decode;
    - body: encoded into arg3 when no arg3 was given, an absent body
      becoming EMPTY_PAYLOAD, otherwise left to lazy decode.

    State: unvalidated -> headers_resolved -> body_resolved -> built.
    Setters are only accepted while unvalidated. A builder is owned by a
    single call chain and builds at most once.
    """

    def __init__(
        self,
        id: int,
        registry: SchemeRegistry,
        arg_scheme: str = ArgScheme.json,
    ) -> None:
        self._id = id
        self._registry = registry
        self._arg_scheme = str(arg_scheme)
        self._response_code: ResponseCode | None = ResponseCode.OK
        self._transport_headers: dict[str, str] = {}
        self._headers: dict[str, str] = {}
        self._body: T | None = None
        self._arg2: bytes | None = None
        self._arg3: bytes | None = None
        self._headers_cell: Lazy[Mapping[str, str]] = Lazy()
        self._body_cell: Lazy[T | None] = Lazy()
        self._state = BuilderState.unvalidated
        self._logger = logging.getLogger("core.models.encoded")

    @classmethod
    def for_request(
        cls,
        request: Request,
        id: int,
        registry: SchemeRegistry,
        default_scheme: str = ArgScheme.json,
    ) -> "EncodedResponseBuilder[T]":
        """
        Start a reply to `request`: transport headers are copied and the
        arg scheme is taken from the request's `as` transport header,
        or `default_scheme` when the request carries none.
        """
        arg_scheme = request.arg_scheme or default_scheme
        builder: EncodedResponseBuilder[T] = cls(id, registry, arg_scheme)
        builder.set_transport_headers(request.transport_headers)
        return builder

    @property
    def state(self) -> BuilderState:
        return self._state

    def _ensure_mutable(self) -> None:
        if self._state is not BuilderState.unvalidated:
            raise RuntimeError(f"EncodedResponseBuilder is {self._state}, setters are closed")

    def set_response_code(self, response_code: ResponseCode | None) -> "EncodedResponseBuilder[T]":
        self._ensure_mutable()
        self._response_code = None if response_code is None else ResponseCode(response_code)
        return self

    def set_transport_header(self, key: str, value: str) -> "EncodedResponseBuilder[T]":
        self._ensure_mutable()
        self._transport_headers[key] = value
        return self

    def set_transport_headers(self, transport_headers: Mapping[str, str]) -> "EncodedResponseBuilder[T]":
        self._ensure_mutable()
        self._transport_headers.update(transport_headers)
        return self

    def set_arg_scheme(self, arg_scheme: str) -> "EncodedResponseBuilder[T]":
        self._ensure_mutable()
        self._arg_scheme = str(arg_scheme)
        return self

    def set_arg2(self, arg2: bytes | None) -> "EncodedResponseBuilder[T]":
        self._ensure_mutable()
        if arg2 is not None and self._headers:
            raise ConflictingRepresentationError("arg2", "headers")
        self._arg2 = None if arg2 is None else bytes(arg2)
        return self

    def set_arg3(self, arg3: bytes | None) -> "EncodedResponseBuilder[T]":
        self._ensure_mutable()
        if arg3 is not None and self._body is not None:
            raise ConflictingRepresentationError("arg3", "body")
        self._arg3 = None if arg3 is None else bytes(arg3)
        return self

    def set_header(self, key: str, value: str) -> "EncodedResponseBuilder[T]":
        self._ensure_mutable()
        if self._arg2 is not None:
            raise ConflictingRepresentationError("arg2", "headers")
        self._headers[key] = value
        return self

    def set_headers(self, headers: Mapping[str, str]) -> "EncodedResponseBuilder[T]":
        self._ensure_mutable()
        if self._arg2 is not None:
            raise ConflictingRepresentationError("arg2", "headers")
        self._headers = dict(headers)
        return self

    def set_body(self, body: T | None) -> "EncodedResponseBuilder[T]":
        self._ensure_mutable()
        if self._arg3 is not None:
            raise ConflictingRepresentationError("arg3", "body")
        self._body = body
        return self

    def _validate_headers(self) -> tuple[bytes, Lazy[Mapping[str, str]]]:
        if self._arg2 is None:
            headers = MappingProxyType(dict(self._headers))
            return self._registry.encode_headers(headers, self._arg_scheme), Lazy.of(headers)
        return self._arg2, Lazy()

    def _validate_body(self) -> tuple[bytes, Lazy[T | None]]:
        if self._arg3 is None:
            if self._body is None:
                return EMPTY_PAYLOAD, Lazy()
            return self._registry.encode_body(self._body, self._arg_scheme), Lazy.of(self._body)
        return self._arg3, Lazy()

    def validate(self) -> "EncodedResponseBuilder[T]":
        if self._state is BuilderState.built:
            raise RuntimeError("EncodedResponseBuilder has already been built")

        if self._id is None:
            raise MissingRequiredFieldError("id")

        if self._response_code is None:
            raise MissingRequiredFieldError("responseCode")

        if self._state is not BuilderState.unvalidated:
            return self

        # Nothing is committed until both payloads are resolved.
        arg2, headers_cell = self._validate_headers()
        arg3, body_cell = self._validate_body()

        if self._arg2 is not None:
            self._headers = {}
        self._arg2, self._headers_cell = arg2, headers_cell
        self._state = BuilderState.headers_resolved

        if self._arg3 is not None:
            self._body = None
        self._arg3, self._body_cell = arg3, body_cell
        self._state = BuilderState.body_resolved

        return self

    def build(self) -> EncodedResponse[T]:
        self.validate()

        response: EncodedResponse[T] = EncodedResponse(
            id=self._id,
            response_code=self._response_code,  # type: ignore[arg-type]
            transport_headers=self._transport_headers,
            arg_scheme=self._arg_scheme,
            arg2=self._arg2,  # type: ignore[arg-type]
            arg3=self._arg3,  # type: ignore[arg-type]
            registry=self._registry,
            headers=self._headers_cell,
            body=self._body_cell,
        )
        self._state = BuilderState.built
        self._logger.debug(f"Built {response}")
        return response

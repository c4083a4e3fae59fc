import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from argwire.core.codecs.registry import SchemeRegistry
from argwire.core.models.request import Request
from argwire.core.models.scheme import ArgScheme, TransportHeader


logger = logging.getLogger("core.transport.outbound")


@dataclass(frozen=True)
class OutboundCall:
    """
    Wire-ready form of a `Request`, handed to the framing layer.
    """
    service: str
    arg_scheme: str
    arg1: bytes
    """
    Endpoint name, UTF-8 encoded.
    """

    arg2: bytes
    """
    Encoded application headers.
    """

    arg3: bytes
    """
    Encoded body; b"" when the request has no body.
    """

    transport_headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


def encode_request(
    request: Request,
    registry: SchemeRegistry,
    default_scheme: str = ArgScheme.json,
) -> OutboundCall:
    """
    Encode a structured Request with the same registry contract used for
    replies. The arg scheme comes from the request's `as` transport
    header, or `default_scheme`, which is then recorded in the outgoing
    transport headers.
    """
    scheme = request.arg_scheme or str(default_scheme)

    transport_headers = dict(request.transport_headers)
    transport_headers.setdefault(str(TransportHeader.arg_scheme), scheme)

    arg2 = registry.encode_headers(request.headers, scheme)
    arg3 = b"" if request.body is None else registry.encode_body(request.body, scheme)

    logger.debug(f"Encoded call {request.service}::{request.endpoint} ({scheme})")

    return OutboundCall(
        service=request.service,
        arg_scheme=scheme,
        arg1=request.endpoint.encode("utf-8"),
        arg2=arg2,
        arg3=arg3,
        transport_headers=MappingProxyType(transport_headers),
    )

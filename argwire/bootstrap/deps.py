import json
from functools import lru_cache
from typing import Callable

from pydantic import ValidationError

from argwire.bootstrap.config.settings import ArgwireConfig
from argwire.core.codecs.registry import SchemeRegistry
from argwire.core.errors import UnsupportedSchemeError
from argwire.core.models.encoded import EncodedResponseBuilder
from argwire.core.models.request import Request
from argwire.core.models.scheme import ArgScheme
from argwire.core.ports.codec import Codec
from argwire.core.transport.outbound import OutboundCall, encode_request
from argwire.infra.json_codec import JsonCodec
from argwire.infra.msgpack_codec import MsgPackCodec
from argwire.infra.raw_codec import RawCodec


CODEC_FACTORIES: dict[str, Callable[[ArgwireConfig], Codec]] = {
    ArgScheme.raw: lambda config: RawCodec(),
    ArgScheme.json: lambda config: JsonCodec(
        sort_keys=config.json_codec.sort_keys,
        ensure_ascii=config.json_codec.ensure_ascii,
    ),
    ArgScheme.msgpack: lambda config: MsgPackCodec(),
}


def build_registry(config: ArgwireConfig) -> SchemeRegistry:
    codecs: dict[str, Codec] = {}
    for scheme in config.schemes:
        factory = CODEC_FACTORIES.get(scheme)
        if factory is None:
            raise UnsupportedSchemeError(scheme)
        codecs[scheme] = factory(config)
    return SchemeRegistry(codecs)


@lru_cache
def get_registry() -> SchemeRegistry:
    config = get_config()
    try:
        return build_registry(config)
    except UnsupportedSchemeError as ex:
        raise SystemExit(f"Configuration error: {ex}")


@lru_cache
def get_config() -> ArgwireConfig:
    try:
        return ArgwireConfig()  # type: ignore[call-arg]
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}")
        raise SystemExit("\n".join(msg))



def get_response_builder(request: Request, id: int) -> EncodedResponseBuilder:
    """
    Start a reply to `request` with the process-wide registry; requests
    without an `as` transport header get the configured default scheme.
    """
    return EncodedResponseBuilder.for_request(
        request,
        id,
        get_registry(),
        default_scheme=get_config().default_scheme,
    )


def get_outbound_call(request: Request) -> OutboundCall:
    return encode_request(request, get_registry(), default_scheme=get_config().default_scheme)

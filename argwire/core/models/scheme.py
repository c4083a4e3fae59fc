from enum import StrEnum


class ArgScheme(StrEnum):
    """
    Argument-encoding schemes a call can be made with. The tag travels in
    the `as` transport header and selects the codec for arg2/arg3.
    """
    raw = "raw"
    json = "json"
    http = "http"
    thrift = "thrift"
    sthrift = "sthrift"
    msgpack = "msgpack"


class TransportHeader(StrEnum):
    """Well-known transport header keys."""
    arg_scheme = "as"
    caller_name = "cn"
    retry_flags = "re"
    speculative_execution = "se"
    failure_domain = "fd"
    shard_key = "sk"
    routing_delegate = "rd"

import pytest

from argwire.core.codecs.registry import SchemeRegistry
from argwire.core.errors import ArgwireError, CodecError, UnsupportedSchemeError
from argwire.core.models.scheme import ArgScheme
from tests.fake.fake_codec import CountingCodec, ExplodingCodec


@pytest.mark.ut
def test_get_returns_registered_codec(counting_codec):
    registry = SchemeRegistry({ArgScheme.json: counting_codec})

    assert registry.get("json") is counting_codec
    assert registry.get(ArgScheme.json) is counting_codec
    assert registry.supports("json")
    assert not registry.supports("thrift")
    assert registry.schemes() == ["json"]


@pytest.mark.ut
def test_unknown_scheme_raises():
    registry = SchemeRegistry({})

    with pytest.raises(UnsupportedSchemeError) as info:
        registry.get("thrift")

    assert info.value.scheme == "thrift"
    assert isinstance(info.value, LookupError)
    assert isinstance(info.value, ArgwireError)


@pytest.mark.ut
def test_registry_copies_its_mapping(counting_codec):
    codecs = {"json": counting_codec}
    registry = SchemeRegistry(codecs)

    codecs["raw"] = CountingCodec()

    assert not registry.supports("raw")


@pytest.mark.ut
def test_with_codec_returns_a_new_registry(counting_codec):
    registry = SchemeRegistry({"json": counting_codec})
    other = CountingCodec()

    derived = registry.with_codec("json", other).with_codec("raw", other)

    assert registry.get("json") is counting_codec
    assert not registry.supports("raw")
    assert derived.get("json") is other
    assert derived.get("raw") is other


@pytest.mark.ut
def test_delegating_operations(counting_codec):
    registry = SchemeRegistry({"json": counting_codec})

    arg2 = registry.encode_headers({"a": "1"}, "json")
    arg3 = registry.encode_body([1, 2], "json")

    assert registry.decode_headers(arg2, "json") == {"a": "1"}
    assert registry.decode_body(arg3, "json", list) == [1, 2]
    assert counting_codec.calls == {
        "encode_headers": 1,
        "decode_headers": 1,
        "encode_body": 1,
        "decode_body": 1,
    }


@pytest.mark.ut
@pytest.mark.parametrize("operation, args", [
    ("encode_headers", ({},)),
    ("decode_headers", (b"x",)),
    ("encode_body", (1,)),
    ("decode_body", (b"x",)),
])
def test_codec_failures_are_wrapped(operation, args):
    registry = SchemeRegistry({"boom": ExplodingCodec()})

    with pytest.raises(CodecError) as info:
        getattr(registry, operation)(*args, "boom")

    assert info.value.scheme == "boom"
    assert info.value.operation == operation
    assert "boom" in str(info.value)
    assert isinstance(info.value.__cause__, RuntimeError)

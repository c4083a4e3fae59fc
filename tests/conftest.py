import pytest

from tests.fake.fake_codec import CountingCodec

from argwire.core.codecs.registry import SchemeRegistry
from argwire.core.models.scheme import ArgScheme
from argwire.infra.json_codec import JsonCodec
from argwire.infra.msgpack_codec import MsgPackCodec
from argwire.infra.raw_codec import RawCodec


@pytest.fixture
def counting_codec() -> CountingCodec:
    return CountingCodec()


@pytest.fixture
def registry() -> SchemeRegistry:
    return SchemeRegistry({
        ArgScheme.raw: RawCodec(),
        ArgScheme.json: JsonCodec(),
        ArgScheme.msgpack: MsgPackCodec(),
    })


@pytest.fixture
def counting_registry(counting_codec) -> SchemeRegistry:
    return SchemeRegistry({ArgScheme.json: counting_codec})

import dataclasses

import pytest

from argwire.core.errors import MissingRequiredFieldError
from argwire.core.models.request import Request, RequestBuilder
from argwire.core.models.scheme import ArgScheme


@pytest.mark.ut
def test_build_request_with_headers_and_body():
    request = (
        RequestBuilder({"x": 1}, "echo-service", "echo")
        .set_transport_header("cn", "caller")
        .set_header("k", "v")
        .build()
    )

    assert isinstance(request, Request)
    assert request.service == "echo-service"
    assert request.endpoint == "echo"
    assert request.transport_headers == {"cn": "caller"}
    assert request.headers == {"k": "v"}
    assert request.body == {"x": 1}


@pytest.mark.ut
def test_setters_merge_last_write_wins():
    request = (
        RequestBuilder(None, "svc", "ep")
        .set_headers({"a": "1", "b": "2"})
        .set_header("a", "3")
        .set_headers({"c": "4"})
        .set_transport_headers({"cn": "one"})
        .set_transport_header("cn", "two")
        .build()
    )

    assert request.headers == {"a": "3", "b": "2", "c": "4"}
    assert request.transport_headers == {"cn": "two"}
    assert request.body is None


@pytest.mark.ut
def test_missing_service_is_rejected():
    with pytest.raises(MissingRequiredFieldError, match="service") as info:
        RequestBuilder(b"body", None, "echo").build()

    assert info.value.field == "service"


@pytest.mark.ut
def test_missing_endpoint_is_rejected_by_validate():
    builder = RequestBuilder(b"body", "svc", None)

    with pytest.raises(MissingRequiredFieldError, match="endpoint"):
        builder.validate()


@pytest.mark.ut
def test_empty_service_is_rejected():
    with pytest.raises(MissingRequiredFieldError):
        RequestBuilder(None, "", "echo").build()


@pytest.mark.ut
def test_request_is_immutable():
    request = RequestBuilder(None, "svc", "ep").set_header("a", "1").build()

    with pytest.raises(dataclasses.FrozenInstanceError):
        request.service = "other"  # type: ignore[misc]

    with pytest.raises(TypeError):
        request.headers["a"] = "2"  # type: ignore[index]


@pytest.mark.ut
def test_builder_changes_do_not_leak_into_built_request():
    builder = RequestBuilder(None, "svc", "ep").set_header("a", "1")
    request = builder.build()

    builder.set_header("b", "2")

    assert request.headers == {"a": "1"}


@pytest.mark.ut
def test_arg_scheme_comes_from_transport_headers():
    request = RequestBuilder(None, "svc", "ep").set_arg_scheme(ArgScheme.msgpack).build()

    assert request.arg_scheme == "msgpack"
    assert request.transport_headers == {"as": "msgpack"}
    assert RequestBuilder(None, "svc", "ep").build().arg_scheme is None

"""Tests for custom router with query/form parsing and response handling."""

import inspect

import pytest
from asgi_correlation_id import correlation_id
from pydantic import BaseModel
from robyn import Response

from app.core.router import (
    BAD_REQUEST_HTML,
    _create_method_wrapper,
    parse_endpoint_signature,
    parse_request_params,
    parse_response,
    request_id_for,
)
from app.models.core import FormData, Page, ParamSource, QueryData


# -----------------------------------------------------------------------------
# Test Models
# -----------------------------------------------------------------------------


class SampleModel(BaseModel):
    """Sample Pydantic model for testing."""

    name: str
    value: int


def _identity_route(*args, **kwargs):
    """Stand-in for a Robyn route method: returns a decorator that keeps the handler."""

    def decorator(handler):
        return handler

    return decorator


# -----------------------------------------------------------------------------
# parse_endpoint_signature Tests
# -----------------------------------------------------------------------------


class TestParseEndpointSignature:
    """Tests for parse_endpoint_signature function."""

    def test_query_annotation(self) -> None:
        """Verify QueryData annotations are read from the query string."""

        async def handler(query: QueryData) -> None:
            pass

        assert parse_endpoint_signature(inspect.signature(handler)) == {"query": ParamSource.QUERY}

    def test_form_annotation(self) -> None:
        """Verify FormData annotations are read from the body."""

        async def handler(form: FormData) -> None:
            pass

        assert parse_endpoint_signature(inspect.signature(handler)) == {"form": ParamSource.FORM}

    def test_no_parsed_parameters(self) -> None:
        """Verify handlers without query/form params return empty dict."""

        async def handler(request, global_dependencies) -> None:
            pass

        assert parse_endpoint_signature(inspect.signature(handler)) == {}


# -----------------------------------------------------------------------------
# parse_request_params Tests
# -----------------------------------------------------------------------------


class TestParseRequestParams:
    """Tests for parse_request_params function."""

    def test_query_filled(self, make_get_request) -> None:
        """Verify query kwargs are populated from the request."""
        kwargs: dict = {}

        error = parse_request_params({"query": ParamSource.QUERY}, make_get_request({"a": ["1"]}), kwargs)

        assert error is None
        assert kwargs["query"].get("a") == "1"

    def test_form_filled(self, make_post_request) -> None:
        """Verify form kwargs are populated from the body."""
        kwargs: dict = {}
        request = make_post_request("a=1", "application/x-www-form-urlencoded")

        error = parse_request_params({"form": ParamSource.FORM}, request, kwargs)

        assert error is None
        assert kwargs["form"].fields.get("a") == "1"

    def test_unreadable_form_returns_400(self, make_post_request) -> None:
        """Verify malformed bodies short-circuit with a 400 Response."""
        kwargs: dict = {}
        request = make_post_request("{}", "application/json")

        error = parse_request_params({"form": ParamSource.FORM}, request, kwargs)

        assert isinstance(error, Response)
        assert error.status_code == 400
        assert error.description == BAD_REQUEST_HTML
        assert "form" not in kwargs


# -----------------------------------------------------------------------------
# parse_response Tests
# -----------------------------------------------------------------------------


class TestParseResponse:
    """Tests for parse_response function."""

    def test_response_passthrough(self) -> None:
        """Verify Response objects pass through unchanged."""
        original = Response(status_code=201, headers={}, description="created")
        result = parse_response(original)
        assert result is original

    def test_page_wrapped_as_html(self) -> None:
        """Verify Page results are wrapped in the page shell."""
        result = parse_response(Page("GET /search", "<h2>hi</h2>"))

        assert result.status_code == 200
        assert result.headers["content-type"].startswith("text/html")
        assert "<h2>hi</h2>" in result.description
        assert "<!DOCTYPE html>" in result.description

    def test_page_status_code_kept(self) -> None:
        """Verify Page status codes are honoured."""
        assert parse_response(Page("t", "", status_code=418)).status_code == 418

    def test_pydantic_model_to_json(self) -> None:
        """Verify Pydantic models are serialized to JSON."""
        result = parse_response(SampleModel(name="test", value=123))

        assert result.status_code == 200
        assert result.headers["content-type"] == "application/json"
        assert "123" in result.description

    def test_dict_to_json(self) -> None:
        """Verify dicts are serialized to JSON."""
        result = parse_response({"key": "value"})

        assert result.headers["content-type"] == "application/json"
        assert "value" in result.description

    @pytest.mark.parametrize(
        "input_val",
        [
            Response(status_code=200, headers={}, description=""),
            Page("t", "b"),
            SampleModel(name="x", value=1),
            {"a": 1},
            "text",
            123,
        ],
    )
    def test_always_returns_response(self, input_val) -> None:
        """Verify parse_response always returns a Response."""
        assert isinstance(parse_response(input_val), Response)


# -----------------------------------------------------------------------------
# Wrapped handler Tests
# -----------------------------------------------------------------------------


class TestWrappedHandler:
    """Tests for the handler wrapper applied by Router methods."""

    def test_signature_exposes_only_request_and_injected_params(self) -> None:
        """Verify parsed params are hidden from Robyn's injection."""

        async def handler(query: QueryData, global_dependencies) -> Page:
            return Page("t", "b")

        wrapped = _create_method_wrapper(_identity_route)("/x")(handler)

        assert list(inspect.signature(wrapped).parameters) == ["request", "global_dependencies"]

    async def test_query_injected_and_page_rendered(self, make_get_request) -> None:
        """Verify the wrapper reads the query and renders the returned Page."""

        async def handler(query: QueryData) -> Page:
            return Page("echo", f"<p>{query.get('q')}</p>")

        wrapped = _create_method_wrapper(_identity_route)("/echo")(handler)
        response = await wrapped(make_get_request({"q": ["value"]}))

        assert response.status_code == 200
        assert "<p>value</p>" in response.description

    async def test_request_passed_when_declared(self, make_get_request) -> None:
        """Verify handlers declaring request receive it."""
        seen = []

        async def handler(request) -> str:
            seen.append(request)
            return "ok"

        request = make_get_request()
        wrapped = _create_method_wrapper(_identity_route)("/r")(handler)
        await wrapped(request)

        assert seen == [request]

    async def test_correlation_id_set_during_handler(self, make_get_request) -> None:
        """Verify the caller's X-Request-ID is visible while handling and reset afterwards."""
        seen = []

        async def handler() -> str:
            seen.append(correlation_id.get())
            return "ok"

        wrapped = _create_method_wrapper(_identity_route)("/c")(handler)
        await wrapped(make_get_request(x_request_id="req-123"))

        assert seen == ["req-123"]
        assert correlation_id.get() is None


def test_request_id_generated_when_missing(make_get_request) -> None:
    """Verify a fresh id is minted when the header is absent."""
    first = request_id_for(make_get_request())
    second = request_id_for(make_get_request())

    assert first and second and first != second

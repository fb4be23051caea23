"""Test fixtures for form-demo unit tests."""

from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import quote

import pytest
import structlog

from app.core.lifespan import State

# Let structlog.testing.capture_logs see every call, including module-level loggers.
structlog.configure(cache_logger_on_first_use=False)


# -----------------------------------------------------------------------------
# Mock classes for Robyn Request/Response
# -----------------------------------------------------------------------------


@dataclass
class MockHeaders:
    """Mock Headers object for Robyn Request and Response."""

    _data: dict = field(default_factory=dict)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._data.get(key.lower(), default)

    def set(self, key: str, value: str) -> None:
        self._data[key.lower()] = value

    def __getitem__(self, key: str) -> str:
        return self._data[key.lower()]

    def __setitem__(self, key: str, value: str) -> None:
        self._data[key.lower()] = value


@dataclass
class MockQueryParams:
    """Mock QueryParams object for Robyn Request."""

    _data: dict[str, list[str]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, list[str]]:
        return self._data


@dataclass
class MockRequest:
    """Mock Request object for Robyn."""

    query_params: MockQueryParams = field(default_factory=MockQueryParams)
    headers: MockHeaders = field(default_factory=MockHeaders)
    body: str | bytes = ""
    form_data: dict[str, str] = field(default_factory=dict)
    files: dict[str, bytes] = field(default_factory=dict)
    method: str = "GET"
    path: str = "/"
    path_params: dict = field(default_factory=dict)


@dataclass
class MockResponse:
    """Mock Response object for after-request middlewares."""

    headers: MockHeaders = field(default_factory=MockHeaders)
    status_code: int = 200
    description: str = ""


# -----------------------------------------------------------------------------
# Request shapes as Robyn delivers them
# -----------------------------------------------------------------------------

BOUNDARY = "----formdemoBoundary7MA4YWxkTrZu0gW"


def encode_query(query: dict[str, list[str]] | None) -> dict[str, list[str]]:
    """Percent-encode keys and values the way QueryParams.to_dict() returns them."""
    return {quote(key): [quote(value) for value in values] for key, values in (query or {}).items()}


def build_multipart(
    fields: list[tuple[str, str]] | None = None,
    files: list[tuple[str, bytes]] | None = None,
    boundary: str = BOUNDARY,
) -> dict:
    """Request attributes Robyn leaves after parsing a multipart body.

    Text fields land in ``form_data``, files in ``files`` keyed by filename,
    and ``body`` holds only the part payloads run together.
    """
    fields = fields or []
    files = files or []
    payloads = [value.encode() for _, value in fields] + [data for _, data in files]
    return {
        "body": b"".join(payloads),
        "content_type": f"multipart/form-data; boundary={boundary}",
        "form_data": dict(fields),
        "files": dict(files),
    }


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(scope="session")
def test_state() -> State:
    """Create a test state container."""
    return State()


@pytest.fixture
def global_dependencies(test_state: State) -> dict:
    """Setup global dependencies for tests."""
    yield {"state": test_state}
    test_state.clear()


@pytest.fixture
def make_get_request():
    """Factory fixture for GET requests with a query string."""

    def _make(query: dict[str, list[str]] | None = None, path: str = "/", **headers: str) -> MockRequest:
        return MockRequest(
            query_params=MockQueryParams(encode_query(query)),
            headers=MockHeaders({k.replace("_", "-").lower(): v for k, v in headers.items()}),
            path=path,
        )

    return _make


@pytest.fixture
def make_wire_get_request():
    """Factory fixture for GET requests whose query mapping is used verbatim."""

    def _make(query: dict[str, list[str]], path: str = "/") -> MockRequest:
        return MockRequest(query_params=MockQueryParams(query), path=path)

    return _make


@pytest.fixture
def make_post_request():
    """Factory fixture for POST requests with a body."""

    def _make(
        body: str | bytes,
        content_type: str | None,
        path: str = "/",
        form_data: dict[str, str] | None = None,
        files: dict[str, bytes] | None = None,
    ) -> MockRequest:
        headers = MockHeaders()
        if content_type is not None:
            headers.set("content-type", content_type)
        return MockRequest(
            headers=headers,
            body=body,
            form_data=form_data or {},
            files=files or {},
            method="POST",
            path=path,
        )

    return _make


@pytest.fixture
def static_root(tmp_path: Path) -> Path:
    """A throwaway static directory with a form page and a stylesheet."""
    root = tmp_path / "static"
    root.mkdir()
    (root / "index.html").write_text("<h1>forms</h1>", encoding="utf-8")
    (root / "site.css").write_text("body { margin: 0; }", encoding="utf-8")
    (tmp_path / "private.txt").write_text("outside the root", encoding="utf-8")
    return root


@pytest.fixture
def make_multipart():
    """Expose the multipart request builder to tests."""
    return build_multipart


@pytest.fixture
def make_response():
    """Factory fixture for responses passed through after-request hooks."""

    def _make(status_code: int = 200, description: str = "") -> MockResponse:
        return MockResponse(status_code=status_code, description=description)

    return _make

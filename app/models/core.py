"""Core models for request/response handling."""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Self
from urllib.parse import quote, urlencode


class ParamSource(StrEnum):
    """Where a handler parameter is read from."""

    QUERY = "query"
    FORM = "form"


class RequestParams:
    """Ordered key/value pairs exactly as received.

    Duplicate keys are kept in arrival order. Named lookups are first-wins;
    iteration yields every pair so nothing the client sent is hidden.
    """

    __slots__ = ("_pairs",)

    def __init__(self, pairs: Iterable[tuple[str, str | None]] | None = None) -> None:
        self._pairs: list[tuple[str, str | None]] = list(pairs or [])

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, list[str] | str]) -> Self:
        """Build from a multi-value mapping such as ``QueryParams.to_dict()``."""
        pairs: list[tuple[str, str | None]] = []
        for key, values in mapping.items():
            if isinstance(values, str):
                pairs.append((key, values))
            elif not values:
                pairs.append((key, None))
            else:
                pairs.extend((key, value) for value in values)
        return cls(pairs)

    def __bool__(self) -> bool:
        return bool(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self) -> Iterator[tuple[str, str | None]]:
        return iter(self._pairs)

    def __contains__(self, key: object) -> bool:
        return any(k == key for k, _ in self._pairs)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._pairs!r})"

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the first value for key, or default when absent."""
        for k, value in self._pairs:
            if k == key:
                return value
        return default

    def get_all(self, key: str) -> list[str | None]:
        """Return every value received for key."""
        return [value for k, value in self._pairs if k == key]

    def keys(self) -> list[str]:
        """Distinct keys in first-seen order."""
        return list(dict.fromkeys(k for k, _ in self._pairs))


class QueryData(RequestParams):
    """Parameters read from the URL query string."""

    __slots__ = ()

    @property
    def raw(self) -> str | None:
        """Query string re-encoded with a leading ``?``, or None when empty."""
        if not self:
            return None
        return "?" + urlencode([(k, v or "") for k, v in self], quote_via=quote)


@dataclass(frozen=True, slots=True)
class UploadedFile:
    """One file part of a multipart body.

    ``name`` is the key the part is reported under. Robyn reports files by
    filename, so for uploads read off a request it equals ``filename``.
    """

    name: str
    filename: str
    content_type: str | None
    data: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(slots=True)
class FormData:
    """Fields and files read from a request body."""

    fields: RequestParams = field(default_factory=RequestParams)
    files: list[UploadedFile] = field(default_factory=list)
    content_type: str | None = None

    def __bool__(self) -> bool:
        return bool(self.fields) or bool(self.files)


@dataclass(frozen=True, slots=True)
class Page:
    """An HTML fragment to be wrapped in the shared page shell."""

    title: str
    body: str
    status_code: int = 200

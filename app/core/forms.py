"""Read query strings and form bodies off a Robyn request."""

import mimetypes
from urllib.parse import parse_qsl, unquote_plus

from multipart import parse_options_header
from robyn import Request

from app.models.core import FormData, QueryData, RequestParams, UploadedFile

DEFAULT_FILE_TYPE = "application/octet-stream"


class FormParseError(Exception):
    """Raised when a request body cannot be read as a form."""


def body_bytes(body: str | bytes | bytearray | list[int] | None) -> bytes:
    """Normalise Robyn's body (str when valid UTF-8, bytes otherwise)."""
    match body:
        case None:
            return b""
        case str():
            return body.encode("utf-8")
        case _:
            return bytes(body)


def read_query(request: Request) -> QueryData:
    """Read the query string, decoding keys and values.

    Robyn hands ``end%20date`` over as is, so ``+`` and ``%XX`` escapes are
    undone here.
    """
    params = RequestParams.from_mapping(request.query_params.to_dict())
    return QueryData(
        (unquote_plus(key), value if value is None else unquote_plus(value))
        for key, value in params
    )


def parse_urlencoded(raw: bytes) -> RequestParams:
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as ex:
        raise FormParseError(f"Form body is not valid UTF-8: {ex}") from ex
    return RequestParams(parse_qsl(text, keep_blank_values=True))


def guess_file_type(filename: str) -> str:
    content_type, _encoding = mimetypes.guess_type(filename)
    return content_type or DEFAULT_FILE_TYPE


def read_multipart(request: Request, boundary: str | None) -> tuple[RequestParams, list[UploadedFile]]:
    """Collect the fields and files Robyn already split out of a multipart body.

    Robyn keeps only the part payloads: ``form_data`` maps field names to text
    and ``files`` maps each uploaded filename to its bytes. The part headers
    are gone, so the content type is guessed from the filename. A file input
    left empty arrives with no filename and no bytes; it is dropped.
    """
    if not boundary:
        raise FormParseError("Multipart body without boundary")

    form_data = getattr(request, "form_data", None) or {}
    uploads = getattr(request, "files", None) or {}

    fields = RequestParams(form_data.items())
    files = [
        UploadedFile(
            name=filename,
            filename=filename,
            content_type=guess_file_type(filename),
            data=bytes(data),
        )
        for filename, data in uploads.items()
        if filename or data
    ]
    return fields, files


def read_form(request: Request) -> FormData:
    """Parse the request body as a URL-encoded or multipart form."""
    content_type = request.headers.get("content-type")
    mimetype, options = parse_options_header(content_type or "")

    match mimetype.strip().lower():
        case "application/x-www-form-urlencoded":
            fields = parse_urlencoded(body_bytes(request.body))
            return FormData(fields=fields, content_type=content_type)
        case "multipart/form-data":
            fields, files = read_multipart(request, options.get("boundary"))
            return FormData(fields=fields, files=files, content_type=content_type)
        case _ if not body_bytes(request.body):
            return FormData(content_type=content_type)
        case _:
            raise FormParseError(f"Unsupported form content type: {content_type}")

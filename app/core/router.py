"""Router with automatic query/form parsing, request correlation and response handling."""

import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any
from uuid import uuid4

import orjson
from asgi_correlation_id import correlation_id
from pydantic import BaseModel
from robyn import Request, Response, SubRouter, status_codes
from robyn.robyn import HttpMethod

from app.core.forms import FormParseError, read_form, read_query
from app.core.html import wrap_in_page
from app.core.logger import LogIcon, logger
from app.models.core import FormData, Page, ParamSource, QueryData

HTML_CONTENT_TYPE = "text/html; charset=utf-8"
REQUEST_ID_HEADER = "x-request-id"

BAD_REQUEST_HTML = "<h1>400 - Bad Request</h1><p>The form body could not be read.</p>"


def html_response(description: str | bytes, status_code: int = status_codes.HTTP_200_OK) -> Response:
    return Response(
        status_code=status_code,
        headers={"content-type": HTML_CONTENT_TYPE},
        description=description,
    )


def parse_endpoint_signature(sig: inspect.Signature) -> dict[str, ParamSource]:
    """Find parameters that should be filled from the query string or the body."""
    parsed: dict[str, ParamSource] = {}

    for name, param in sig.parameters.items():
        annotation = param.annotation

        match annotation:
            case type() if issubclass(annotation, QueryData):
                parsed[name] = ParamSource.QUERY
            case type() if issubclass(annotation, FormData):
                parsed[name] = ParamSource.FORM

    return parsed


def parse_request_params(
    param_config: dict[str, ParamSource],
    request: Request,
    kwargs: dict[str, Any],
) -> Response | None:
    """Fill query/form kwargs. Returns a 400 Response for unreadable bodies."""
    for param_name, source in param_config.items():
        match source:
            case ParamSource.QUERY:
                kwargs[param_name] = read_query(request)
            case ParamSource.FORM:
                try:
                    kwargs[param_name] = read_form(request)
                except FormParseError as ex:
                    logger.warning("Rejected unreadable form body", icon=LogIcon.FORBIDDEN, error=str(ex))
                    return html_response(BAD_REQUEST_HTML, status_codes.HTTP_400_BAD_REQUEST)
    return None


def parse_response(result: Any) -> Response:
    """Convert handler result to Response."""
    match result:
        case Response():
            return result
        case Page():
            return html_response(wrap_in_page(result.title, result.body), result.status_code)
        case BaseModel():
            return Response(
                status_code=status_codes.HTTP_200_OK,
                headers={"content-type": "application/json"},
                description=result.model_dump_json(indent=4),
            )
        case dict():
            return Response(
                status_code=status_codes.HTTP_200_OK,
                headers={"content-type": "application/json"},
                description=orjson.dumps(result).decode(),
            )
        case _:
            return Response(
                status_code=status_codes.HTTP_200_OK,
                headers={},
                description=str(result),
            )


def request_id_for(request: Request) -> str:
    """Reuse the caller's X-Request-ID or mint a new one."""
    return request.headers.get(REQUEST_ID_HEADER) or uuid4().hex


HTTP_METHODS = (
    HttpMethod.GET,
    HttpMethod.POST,
    HttpMethod.PUT,
    HttpMethod.DELETE,
    HttpMethod.PATCH,
    HttpMethod.HEAD,
    HttpMethod.OPTIONS,
    HttpMethod.TRACE,
    HttpMethod.CONNECT,
)


def _create_method_wrapper(original_method: Callable) -> Callable:
    @wraps(original_method)
    def method_wrapper(*args, **kwargs) -> Callable:
        decorator = original_method(*args, **kwargs)

        def handler_decorator(handler: Callable) -> Callable:
            sig = inspect.signature(handler)
            param_config = parse_endpoint_signature(sig)
            has_request_param = "request" in sig.parameters

            @wraps(handler)
            async def wrapped_handler(request: Request, **h_kwargs):
                token = correlation_id.set(request_id_for(request))
                try:
                    if error := parse_request_params(param_config, request, h_kwargs):
                        return error

                    # Pass request to handler only if it declared it
                    if has_request_param:
                        h_kwargs["request"] = request

                    result = await handler(**h_kwargs)
                    return parse_response(result)
                finally:
                    correlation_id.reset(token)

            # Build signature: always include request for Robyn injection
            new_params = [inspect.Parameter("request", inspect.Parameter.POSITIONAL_OR_KEYWORD, annotation=Request)]
            for name, param in sig.parameters.items():
                if name == "request" or name in param_config:
                    continue
                new_params.append(param)

            wrapped_handler.__signature__ = sig.replace(parameters=new_params)  # type: ignore[attr-defined]
            return decorator(wrapped_handler)

        return handler_decorator

    return method_wrapper


class Router(SubRouter):
    """Enhanced SubRouter with automatic query/form parsing and response handling."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._wrap_methods()

    def _wrap_methods(self) -> None:
        """Wrap HTTP methods with parsing logic."""
        for method in HTTP_METHODS:
            method_name = str(method).split(".")[-1].lower()
            if hasattr(self, method_name):
                original_method = getattr(self, method_name)
                wrapped_method = _create_method_wrapper(original_method)
                setattr(self, method_name, wrapped_method)

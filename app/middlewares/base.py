"""Base middleware architecture for Robyn applications."""

from collections.abc import Callable

from robyn import Request, Response, Robyn

from app.core.logger import LogIcon, logger


class BaseMiddleware:
    """Base class for middlewares with before/after hooks.

    Subclasses override at least one hook; only overridden hooks are
    registered. An empty ``endpoints`` set means every request.
    """

    endpoints: frozenset[str] = frozenset()

    def __init__(self, endpoints: frozenset[str] | list[str] | None = None) -> None:
        if endpoints:
            self.endpoints = frozenset(endpoints)

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        if not (cls.overrides("before") or cls.overrides("after")):
            raise TypeError(f"{cls.__name__} must implement at least one of before/after")

    @classmethod
    def overrides(cls, hook: str) -> bool:
        """True when the subclass defines its own version of hook."""
        return getattr(cls, hook) is not getattr(BaseMiddleware, hook)

    def before(self, request: Request) -> Request | Response:
        """Called before request handling. Return Request to continue or Response to short-circuit."""
        return request

    def after(self, response: Response) -> Response:
        """Called after request handling. Return modified Response."""
        return response


class MiddlewareHandler:
    """Attaches middlewares to a Robyn application.

    A middleware without endpoints is registered once as a global hook, so it
    also covers routes included later and the static file route.
    """

    def __init__(self, app: Robyn) -> None:
        self._app = app
        self._middlewares: list[BaseMiddleware] = []

    @property
    def middlewares(self) -> list[BaseMiddleware]:
        return self._middlewares

    def register(self, middleware: BaseMiddleware) -> "MiddlewareHandler":
        """Register a middleware. Returns self for chaining."""
        self._middlewares.append(middleware)
        self._apply_middleware(middleware)
        logger.info(
            f"Registered middleware: {middleware.__class__.__name__}",
            icon=LogIcon.ADAPTER,
            scope=sorted(middleware.endpoints) or "global",
        )
        return self

    def _apply_middleware(self, middleware: BaseMiddleware) -> None:
        """Apply middleware to its endpoints, or globally when it names none."""
        endpoints: list[str | None] = sorted(middleware.endpoints) or [None]
        has_before = middleware.overrides("before")
        has_after = middleware.overrides("after")

        for endpoint in endpoints:
            if has_before:
                self._register_before(endpoint, middleware.before)
            if has_after:
                self._register_after(endpoint, middleware.after)

    def _register_before(self, endpoint: str | None, handler: Callable) -> None:
        """Register a before_request handler for an endpoint (None for all)."""
        @self._app.before_request(endpoint)
        async def before_wrapper(request: Request) -> Request | Response:
            return handler(request)

    def _register_after(self, endpoint: str | None, handler: Callable) -> None:
        """Register an after_request handler for an endpoint (None for all)."""
        @self._app.after_request(endpoint)
        def after_wrapper(response: Response) -> Response:
            return handler(response)

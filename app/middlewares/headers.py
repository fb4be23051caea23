"""Response headers added to every routed response."""

from robyn import Response

from app.middlewares.base import BaseMiddleware

SECURITY_HEADERS: dict[str, str] = {
    "x-content-type-options": "nosniff",
    # Keeps /login-wrong URLs, password included, out of Referer on outbound links.
    "referrer-policy": "no-referrer",
}


class SecurityHeadersMiddleware(BaseMiddleware):
    """Stamps browser hardening headers onto responses."""

    def after(self, response: Response) -> Response:
        for name, value in SECURITY_HEADERS.items():
            response.headers.set(name, value)
        return response

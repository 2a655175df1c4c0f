"""Accept-Language detection middleware."""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from backend.posgo.core.i18n import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES


class LanguageMiddleware(BaseHTTPMiddleware):
    """Parse ``Accept-Language`` and expose ``request.state.language``.

    Receipts and reports are rendered in ``en`` or ``es``; the resolved
    language is echoed back in ``Content-Language``.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        language = parse_preferred(request.headers.get("Accept-Language", ""))
        request.state.language = language

        response = await call_next(request)
        response.headers["Content-Language"] = language
        return response


def parse_preferred(header: str) -> str:
    """Return the best supported language from an Accept-Language header."""
    for part in header.split(","):
        tag = part.split(";")[0].strip().lower()
        # "es-PE" matches "es"
        if tag in SUPPORTED_LANGUAGES:
            return tag
        primary = tag.split("-")[0]
        if primary in SUPPORTED_LANGUAGES:
            return primary
    return DEFAULT_LANGUAGE

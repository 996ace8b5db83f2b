"""
CORS gate backed by the database allow-list.

Unlike Starlette's CORSMiddleware, the set of allowed origins is not fixed
at startup: every request that carries an ``Origin`` header recomputes it
from the `origins` collection plus the built-in origins of the current
environment (see OriginService.allowed_origins()).

Decisions:
- allowed origin      → CORS headers echo the origin, credentials allowed
- disallowed preflight → 400, no CORS headers
- disallowed request  → passed through without CORS headers (browser blocks)
- unhandled exception → JSON 500 built here, so an allowed origin still gets
  its CORS headers
- allow-list unreadable → 500 for any cross-origin request (fail closed)
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from errors import DependencyError, internal_error_response
from services.origin_service import OriginService
from shared.logging import get_logger

log = get_logger(__name__)

ALLOW_METHODS = "GET, POST, PUT, PATCH, DELETE, OPTIONS"
DEFAULT_ALLOW_HEADERS = "Authorization, Content-Type"


def _append_vary(response: Response) -> None:
    vary = response.headers.get("Vary")
    if not vary:
        response.headers["Vary"] = "Origin"
    elif "origin" not in vary.lower():
        response.headers["Vary"] = f"{vary}, Origin"


class DynamicCORSMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        origin = request.headers.get("origin")
        if not origin:
            return await call_next(request)

        settings = request.app.state.settings
        service = OriginService(
            request.app.state.origin_repository, settings.builtin_origins
        )
        preflight = (
            request.method == "OPTIONS"
            and "access-control-request-method" in request.headers
        )

        try:
            allowed = await service.is_allowed(origin)
        except DependencyError as e:
            log.error("cors_allow_list_unavailable", origin=origin, error=e.message)
            err = DependencyError("Unable to verify CORS origin")
            return JSONResponse(status_code=err.status_code, content=err.to_dict())

        if preflight:
            if not allowed:
                log.warning("cors_origin_rejected", origin=origin, preflight=True)
                response: Response = PlainTextResponse(
                    "Disallowed CORS origin", status_code=400
                )
                _append_vary(response)
                return response
            return self._preflight_response(request, origin, settings.cors.cors_max_age)

        try:
            response = await call_next(request)
        except Exception as e:
            response = internal_error_response(request, e)
        if allowed:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Credentials"] = "true"
        else:
            log.warning("cors_origin_rejected", origin=origin, preflight=False)
        _append_vary(response)
        return response

    @staticmethod
    def _preflight_response(request: Request, origin: str, max_age: int) -> Response:
        requested_headers = request.headers.get("access-control-request-headers")
        headers = {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Credentials": "true",
            "Access-Control-Allow-Methods": ALLOW_METHODS,
            "Access-Control-Allow-Headers": requested_headers or DEFAULT_ALLOW_HEADERS,
            "Access-Control-Max-Age": str(max_age),
            "Vary": "Origin",
        }
        return PlainTextResponse("OK", status_code=200, headers=headers)

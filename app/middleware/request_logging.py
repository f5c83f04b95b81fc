from __future__ import annotations

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from app.metrics import observe_http_request, resolve_http_path_label


logger = logging.getLogger("app.request")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):  # type: ignore[no-untyped-def]
        method = request.method
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._record(request, method, 500, started, failed=True)
            raise

        self._record(request, method, response.status_code, started)
        return response

    @staticmethod
    def _record(request: Request, method: str, status_code: int, started: float, *, failed: bool = False) -> None:
        # Routing has run by now, so the matched template is in the scope.
        path = resolve_http_path_label(request)
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        observe_http_request(method=method, path=path, status=status_code, duration=duration_ms / 1000)
        extra = {"method": method, "path": path, "status_code": status_code, "duration_ms": duration_ms}
        if failed:
            logger.error("http.error", exc_info=True, extra=extra)
        else:
            logger.info("http.request", extra=extra)

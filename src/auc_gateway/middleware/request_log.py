"""HTTP request logging for the deployment root.

The client page, roster and health routes are logged at INFO together with
the number of live WebSocket connections. Static assets from the deployment
root are noisy during an auction (every client reload fetches them), so
they go out at DEBUG, and a failed asset lookup (including the hidden
ledger snapshot) goes out at WARNING.

Every response carries the request id in ``X-Request-ID``.

Log format:
    INFO [GET] /api/v1/teams → 200 (3ms) ws=12 req_a1b2c3d4e5f6
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("auc.request")

REQUEST_ID_HEADER = "X-Request-ID"
_APP_PATHS = ("/", "/health")
_APP_PREFIXES = ("/api/",)


def is_app_route(path: str) -> bool:
    return path in _APP_PATHS or path.startswith(_APP_PREFIXES)


def _level(path: str, status_code: int) -> int:
    if is_app_route(path):
        return logging.INFO
    return logging.WARNING if status_code >= 400 else logging.DEBUG


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = f"req_{uuid.uuid4().hex[:12]}"
        request.state.request_id = request_id

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        response.headers[REQUEST_ID_HEADER] = request_id

        hub = getattr(request.app.state, "hub", None)
        logger.log(
            _level(request.url.path, response.status_code),
            "[%s] %s → %d (%.0fms) ws=%s %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            len(hub) if hub is not None else "-",
            request_id,
        )
        return response

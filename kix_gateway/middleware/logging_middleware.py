"""
Logging Middleware - analyze request outcomes

Every analyze call is logged once with its ticket ID and the outcome of the
accept phase. What happens after the 202 is logged by the analyzer itself.
"""
import logging
import re
import time
from typing import Callable, Optional

from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware

from kix_gateway.utils.logger import get_logger

logger = get_logger(__name__)

ANALYZE_PATH = re.compile(r"^/azureopenai/tickets/(?P<ticket_id>[^/]+)/analyze/?$")

OUTCOMES = {
    status.HTTP_202_ACCEPTED: "accepted",
    status.HTTP_400_BAD_REQUEST: "invalid input",
    status.HTTP_404_NOT_FOUND: "not found",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "auth failed",
}


def analyzed_ticket_id(path: str) -> Optional[str]:
    """Ticket ID segment of an analyze path, None for any other path"""
    match = ANALYZE_PATH.match(path)
    return match.group("ticket_id") if match else None


def outcome_of(status_code: int) -> str:
    return OUTCOMES.get(status_code, f"unexpected status {status_code}")


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs analyze outcomes and times every request

    - analyze: "Ticket <id> accepted|invalid input|not found|auth failed"
    - other paths except /health: method, path, status at DEBUG
    - X-Process-Time header (ms) on every response
    """

    async def dispatch(self, request: Request, call_next: Callable):
        if request.url.path == "/health":
            return await call_next(request)

        start_time = time.time()
        path = request.url.path
        ticket_id = analyzed_ticket_id(path)

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = int((time.time() - start_time) * 1000)
            logger.error(
                f"✗ {request.method} {path} ERROR ({duration_ms}ms): {e}",
                extra={"ticket_id": ticket_id, "duration_ms": duration_ms},
                exc_info=True
            )
            raise

        duration_ms = int((time.time() - start_time) * 1000)
        response.headers["X-Process-Time"] = str(duration_ms)

        if ticket_id is None:
            logger.debug(f"{request.method} {path} {response.status_code} ({duration_ms}ms)")
            return response

        outcome = outcome_of(response.status_code)
        level = logging.INFO if response.status_code == status.HTTP_202_ACCEPTED else logging.WARNING
        logger.log(
            level,
            f"Ticket {ticket_id} {outcome} ({response.status_code}, {duration_ms}ms)",
            extra={
                "ticket_id": ticket_id,
                "outcome": outcome,
                "status_code": response.status_code,
                "duration_ms": duration_ms
            }
        )
        return response

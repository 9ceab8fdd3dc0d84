import uuid
import logging
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-Id"

# Current request id, read by the logging filter
request_id_context: ContextVar[str] = ContextVar("request_id", default="N/A")

logger = logging.getLogger("city_registry.middleware")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach an X-Request-Id to every request and response."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        request.state.request_id = request_id
        token = request_id_context.set(request_id)

        try:
            logger.debug("%s %s", request.method, request.url.path)
            response: Response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            request_id_context.reset(token)

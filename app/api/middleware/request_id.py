from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Attaches a correlation id to every request and response."""

    _MAX_INCOMING_LENGTH = 64

    async def dispatch(self, request: Request, call_next):
        incoming = request.headers.get(REQUEST_ID_HEADER, "").strip()
        if not incoming or len(incoming) > self._MAX_INCOMING_LENGTH:
            incoming = uuid4().hex
        request.state.request_id = incoming
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = incoming
        return response

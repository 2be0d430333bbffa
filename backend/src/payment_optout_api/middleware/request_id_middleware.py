"""Request ID middleware."""

from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from payment_optout_api.utils.request_id import generate_request_id


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag every request and response with a request ID for tracing."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Process the request.

        Args:
            request: Incoming request
            call_next: Next middleware/handler

        Returns:
            Response from downstream handler
        """
        request.state.request_id = generate_request_id()

        response = await call_next(request)
        response.headers["X-Request-ID"] = request.state.request_id

        return response

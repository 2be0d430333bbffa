"""Middleware package."""

from payment_optout_api.middleware.request_id_middleware import RequestIDMiddleware

__all__ = [
    "RequestIDMiddleware",
]

"""ASGI middleware."""

from taskboard.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]

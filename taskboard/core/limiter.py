"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and the auth routes use the same
instance. The limit string is read from settings on each request, so it is
never resolved at import time.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from taskboard.core.config import get_settings

limiter = Limiter(key_func=get_remote_address)


def _auth_limit() -> str:
    return get_settings().auth_rate_limit


limit_auth = limiter.limit(_auth_limit)

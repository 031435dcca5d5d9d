"""Rate limiting for the password endpoints.

The limiter is process-wide: route decorators bind to this one ``Limiter``
instance at import time, so every app built in the process shares it, and the
settings passed to the most recent ``configure_limiter`` call (made by
``create_app``) apply to all of them.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from cloudspace.config import Settings

limiter = Limiter(key_func=get_remote_address)

_auth_limit = "20/minute"

def configure_limiter(settings: Settings) -> Limiter:
    global _auth_limit
    limiter.enabled = settings.RATE_LIMIT_ENABLED
    _auth_limit = settings.AUTH_RATE_LIMIT
    return limiter

def auth_rate_limit() -> str:
    """Limit applied to workspace create/access, read per request"""
    return _auth_limit

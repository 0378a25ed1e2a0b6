"""Rate limit helpers."""

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address


def key_client_ip(request: Request) -> str:
    """Rate limit key: X-Forwarded-For (first hop) > client IP."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return f"ip:{first_hop}"
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(key_func=key_client_ip)

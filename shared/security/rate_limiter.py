from slowapi import Limiter
from slowapi.util import get_remote_address
from fastapi import Request

from shared.config.settings import CHECKOUT_RATE_LIMIT
from .dependencies import extract_token
from .jwt_handler import verify_access_token


def user_id_or_ip(request: Request) -> str:
    """Key function for SlowAPI: the caller's user id when authenticated, else the client IP."""
    user_id = getattr(request.state, "user_id", None)
    if user_id is None:
        token = extract_token(request)
        payload = verify_access_token(token) if token else None
        if payload:
            user_id = payload.get("sub")

    if user_id is not None:
        return f"user:{user_id}"
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(key_func=user_id_or_ip)

checkout_limit = CHECKOUT_RATE_LIMIT

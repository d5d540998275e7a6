from .jwt_handler import create_access_token, verify_access_token
from .dependencies import get_current_user
from .rate_limiter import checkout_limit, limiter, user_id_or_ip

__all__ = [
    "create_access_token",
    "verify_access_token",
    "get_current_user",
    "checkout_limit",
    "limiter",
    "user_id_or_ip",
]

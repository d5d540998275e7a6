from .auth import AuthSession
from .cart import Cart
from .checkout import CheckoutSubmitter
from .context import StorefrontContext
from .storage import FileStorage, MemoryStorage

__all__ = [
    "AuthSession",
    "Cart",
    "CheckoutSubmitter",
    "StorefrontContext",
    "FileStorage",
    "MemoryStorage",
]

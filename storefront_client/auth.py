import json
from typing import Any, Optional

from .storage import AUTH_KEY, Storage


class AuthSession:
    """
    The signed-in user and their token.

    Created once at app start (``restore``) and torn down by ``logout``.
    Persisted under the ``auth`` storage key as ``{"user": ..., "token": ...}``.
    """

    def __init__(self, storage: Storage):
        self._storage = storage
        self.user: Optional[dict[str, Any]] = None
        self.token: str = ""

    def restore(self) -> "AuthSession":
        raw = self._storage.get_item(AUTH_KEY)
        if raw:
            # Invalid JSON raises.
            data = json.loads(raw)
            self.user = data.get("user")
            self.token = data.get("token") or ""
        return self

    def login(self, user: dict[str, Any], token: str) -> None:
        self.user = user
        self.token = token
        self._storage.set_item(AUTH_KEY, json.dumps({"user": user, "token": token}))

    def logout(self) -> None:
        self.user = None
        self.token = ""
        self._storage.remove_item(AUTH_KEY)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user and self.token)

    @property
    def has_address(self) -> bool:
        return bool(self.user and (self.user.get("address") or "").strip())

    @property
    def headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

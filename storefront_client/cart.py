import json
from decimal import Decimal
from typing import Any, List, Optional

from .storage import CART_KEY, Storage


class Cart:
    """
    Client-held cart: an ordered list of product snapshots
    (``{"_id", "name", "price", "description"}``) captured when the item was
    added. Prices here are for display only; the server recomputes the charge.

    Every mutation is written through to storage.
    """

    def __init__(self, storage: Storage):
        self._storage = storage
        self._items: List[dict[str, Any]] = []

    @property
    def items(self) -> List[dict[str, Any]]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def restore(self) -> "Cart":
        raw = self._storage.get_item(CART_KEY)
        self._items = json.loads(raw) if raw else []
        return self

    def add(self, product: dict[str, Any]) -> None:
        snapshot = {
            "_id": product.get("_id", product.get("id")),
            "name": product.get("name"),
            "price": product.get("price"),
            "description": product.get("description"),
        }
        self._items.append(snapshot)
        self._persist()

    def remove(self, product_id: Any) -> Optional[dict[str, Any]]:
        """Removes the first entry for ``product_id``; duplicates stay."""
        for index, item in enumerate(self._items):
            if item.get("_id") == product_id:
                removed = self._items.pop(index)
                self._persist()
                return removed
        return None

    def clear(self) -> None:
        self._items = []
        self._storage.remove_item(CART_KEY)

    def total(self) -> Decimal:
        return sum((Decimal(str(item.get("price") or 0)) for item in self._items), Decimal("0"))

    def formatted_total(self) -> str:
        return f"${self.total():,.2f}"

    def _persist(self) -> None:
        self._storage.set_item(CART_KEY, json.dumps(self._items))

from typing import Iterable, List, Optional
import logging

from app.models.checkout import CartItem

logger = logging.getLogger(__name__)

def compute_total(items: Iterable[CartItem]) -> float:
    """Sum of quantity x price over all cart lines"""
    return sum(item.quantity * item.price for item in items)

class CartState:
    """Cart contents shared between the storefront and the checkout form.

    The form receives an instance explicitly instead of reaching for a
    global; it only reads the lines and calls clear() after a successful
    order.
    """

    def __init__(self, items: Optional[Iterable[CartItem]] = None):
        self._items: List[CartItem] = list(items or [])

    @property
    def items(self) -> List[CartItem]:
        return list(self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def add_item(self, item: CartItem):
        """Append a cart line"""
        self._items.append(item)
        logger.debug(f"[Cart] Added {item.quantity} x {item.id}")

    def remove_item(self, product_id: str):
        """Remove every line for a product"""
        self._items = [item for item in self._items if item.id != product_id]
        logger.debug(f"[Cart] Removed {product_id}")

    def update_quantity(self, product_id: str, quantity: int):
        """Set quantity on every line for a product; zero or less removes it"""
        if quantity <= 0:
            self.remove_item(product_id)
            return
        self._items = [
            item.model_copy(update={"quantity": quantity}) if item.id == product_id else item
            for item in self._items
        ]

    def clear(self):
        self._items = []
        logger.debug("[Cart] Cleared")

    def total_price(self) -> float:
        return compute_total(self._items)

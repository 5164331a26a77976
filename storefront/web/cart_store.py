"""
Server-side cart storage.

The session cookie only carries a random cart id; the cart itself lives in
process memory. The cookie has no expiry, so a cart is unreachable once the
browser session ends, and idle carts are dropped after a timeout.
"""

import threading
import uuid
from datetime import datetime, timedelta
from typing import Dict, Optional, Tuple

from storefront.models.cart import Cart
from monitoring.logger import get_logger

logger = get_logger(__name__)

DEFAULT_IDLE_TIMEOUT = timedelta(hours=12)
MAX_CARTS = 10000


class CartStore:
    """In-memory carts keyed by the id stored in the visitor's session."""

    def __init__(self, idle_timeout: timedelta = DEFAULT_IDLE_TIMEOUT, max_carts: int = MAX_CARTS):
        self.idle_timeout = idle_timeout
        self.max_carts = max_carts
        self._carts: Dict[str, Tuple[Cart, datetime]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def new_id() -> str:
        return uuid.uuid4().hex

    def get(self, cart_id: str) -> Optional[Cart]:
        """A copy of the stored cart, or None when unknown or expired."""
        now = datetime.now()
        with self._lock:
            entry = self._carts.get(cart_id)
            if entry is None:
                return None
            cart, last_seen = entry
            if now - last_seen > self.idle_timeout:
                del self._carts[cart_id]
                return None
            self._carts[cart_id] = (cart, now)
            return cart.model_copy(deep=True)

    def save(self, cart_id: str, cart: Cart) -> None:
        """Store a snapshot; later changes to `cart` need another save."""
        now = datetime.now()
        with self._lock:
            self._carts[cart_id] = (cart.model_copy(deep=True), now)
            if len(self._carts) > self.max_carts:
                self._evict(now)

    def __len__(self) -> int:
        return len(self._carts)

    def _evict(self, now: datetime) -> None:
        """Drop expired carts, then the least recently used ones over the cap."""
        expired = [key for key, (_, seen) in self._carts.items() if now - seen > self.idle_timeout]
        for key in expired:
            del self._carts[key]

        overflow = len(self._carts) - self.max_carts
        if overflow > 0:
            oldest = sorted(self._carts, key=lambda key: self._carts[key][1])[:overflow]
            for key in oldest:
                del self._carts[key]

        logger.info(
            f"Evicted {len(expired) + max(overflow, 0)} carts",
            extra={"remaining": len(self._carts)},
        )

"""
Order View Controller
=====================

Keeps the admin's local view of the orders in sync with the content store.

The order list is fetched once when the dashboard is mounted. Filtering and
row expansion only touch local state. Status changes and deletions go to the
store first and the local list is reconciled from the result, so the page
never has to be reloaded from the store after a mutation. A failed store call
leaves the local list exactly as it was.
"""

import logging
import secrets
import threading
import time
from collections import namedtuple
from typing import Callable, Dict, List, Optional, Tuple

from ...core import LoggingService, StoreError
from .models import FILTER_ALL, ORDER_STATUSES, ORDERS_QUERY, STATUS_FILTERS, Order

logger = logging.getLogger(__name__)

Notification = namedtuple('Notification', ['title', 'text', 'level'])


def filter_orders(orders: List[Order], status_filter: str) -> List[Order]:
    """Orders matching a status filter, in their original order"""
    if status_filter not in STATUS_FILTERS:
        raise ValueError(f"Unknown status filter: {status_filter}")
    if status_filter == FILTER_ALL:
        return list(orders)
    return [order for order in orders if order.status == status_filter]


class OrderViewController:
    """Local order list, active filter and expanded row for one admin view"""

    def __init__(self, store):
        self.store = store
        self.orders: List[Order] = []
        self.active_filter = FILTER_ALL
        self.expanded_order_id: Optional[str] = None
        self.loaded = False
        self._lock = threading.Lock()

    @property
    def visible_orders(self) -> List[Order]:
        return filter_orders(self.orders, self.active_filter)

    def get(self, order_id: str) -> Optional[Order]:
        return next((order for order in self.orders if order.id == order_id), None)

    def load(self) -> Optional[Notification]:
        """Replace the local list with every order in the store"""
        try:
            documents = self.store.fetch(ORDERS_QUERY)
            orders = [Order.from_document(doc) for doc in documents or []]
        except (StoreError, KeyError, TypeError) as e:
            logger.error(f"Error fetching orders: {e}")
            LoggingService.log_error_with_traceback('orders', e, {'operation': 'fetch'})
            return Notification('Error!', 'Something went wrong while fetching orders.', 'error')

        with self._lock:
            self.orders = orders
            self.loaded = True
        return None

    def set_filter(self, status_filter: str) -> List[Order]:
        if status_filter not in STATUS_FILTERS:
            raise ValueError(f"Unknown status filter: {status_filter}")
        self.active_filter = status_filter
        return self.visible_orders

    def toggle_details(self, order_id: str) -> Optional[str]:
        """Expand a row's cart items, or collapse it if it is already expanded"""
        with self._lock:
            if self.expanded_order_id == order_id:
                self.expanded_order_id = None
            else:
                self.expanded_order_id = order_id
            return self.expanded_order_id

    def update_status(self, order_id: str, new_status: str) -> Notification:
        if new_status not in ORDER_STATUSES:
            raise ValueError(f"Invalid order status: {new_status}")

        try:
            self.store.patch(order_id).set({'status': new_status}).commit()
        except StoreError as e:
            logger.error(f"Error updating order status: {e}")
            LoggingService.log_error_with_traceback('orders', e, {
                'operation': 'update_status',
                'order_id': order_id,
                'status': new_status,
            })
            return Notification('Error!', 'Something went wrong while updating the status.', 'error')

        # Store calls run unlocked; only the read-modify-write of the list is serialised
        with self._lock:
            self.orders = [
                order.with_status(new_status) if order.id == order_id else order
                for order in self.orders
            ]
        LoggingService.log_user_action('orders', f"Order {order_id} status changed to {new_status}")
        return Notification('Updated!', f"Order status changed to {new_status}.", 'success')

    def delete(self, order_id: str, confirm: Callable[[str], bool]) -> Optional[Notification]:
        """Delete an order once confirm(order_id) agrees; None when cancelled"""
        if not confirm(order_id):
            return None

        try:
            self.store.delete(order_id)
        except StoreError as e:
            logger.error(f"Error deleting order: {e}")
            LoggingService.log_error_with_traceback('orders', e, {
                'operation': 'delete',
                'order_id': order_id,
            })
            return Notification('Error!', 'Something went wrong while deleting.', 'error')

        with self._lock:
            self.orders = [order for order in self.orders if order.id != order_id]
            if self.expanded_order_id == order_id:
                self.expanded_order_id = None
        LoggingService.log_user_action('orders', f"Order {order_id} deleted")
        return Notification('Deleted!', 'Your order has been deleted.', 'success')


class ControllerRegistry:
    """One OrderViewController per admin session, keyed by a random view id.

    Views idle for longer than max_idle seconds are dropped the next time the
    registry is touched, so sessions that expire or lose their cookie without
    logging out do not keep their order list alive.
    """

    def __init__(self, store_factory: Callable[[], object], max_idle: Optional[float] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.store_factory = store_factory
        self.max_idle = max_idle
        self._clock = clock
        self._controllers: Dict[str, Tuple[OrderViewController, float]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def new_view_id() -> str:
        return secrets.token_urlsafe(16)

    def _evict_idle(self, now: float) -> None:
        if self.max_idle is None:
            return
        stale = [view_id for view_id, (_, last_seen) in self._controllers.items()
                 if now - last_seen > self.max_idle]
        for view_id in stale:
            del self._controllers[view_id]
        if stale:
            logger.info(f"Dropped {len(stale)} idle order view(s)")

    def get(self, view_id: str) -> OrderViewController:
        with self._lock:
            now = self._clock()
            self._evict_idle(now)
            entry = self._controllers.get(view_id)
            controller = entry[0] if entry else OrderViewController(self.store_factory())
            self._controllers[view_id] = (controller, now)
            return controller

    def discard(self, view_id: Optional[str]) -> None:
        with self._lock:
            self._controllers.pop(view_id, None)

    def __len__(self):
        return len(self._controllers)

"""Storefront session — the single owner of one shopper's cart and checkout.

A ``Storefront`` ties the pieces of a session together: the catalog it was
opened with, its cart, its order history, the clock that decides when a
reservation window is over, and the timer that wakes it up when it is.

Every intent and every timer callback runs under one re-entrant lock, and the
order handlers only ever resolve an order that is still pending. Together
that makes each pending order end exactly once, whether the shopper pays,
cancels, or the timer gets there first.

Usage:
    shop = Storefront(catalog=DEFAULT_MENU)
    shop.add_item("1")
    shop.checkout()
    shop.pay()
"""

import json
import threading
from contextlib import contextmanager
from uuid import uuid4

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.cart.items import AddItem, RemoveItem
from storefront.cart.management import CreateCart
from storefront.catalog.loading import LoadCatalog
from storefront.catalog.menu import DEFAULT_MENU
from storefront.catalog.store import list_items, stock_levels
from storefront.domain import storefront
from storefront.exceptions import InsufficientStock, NoPendingOrder, OrderExpired
from storefront.history.history import OrderHistory
from storefront.history.management import CreateHistory
from storefront.order.checkout import PlaceOrder
from storefront.order.order import Order, OrderStatus, as_utc
from storefront.order.resolution import CancelOrder, ExpireOrder, PayOrder
from storefront.scheduling import SystemClock, ThreadingTimer

logger = structlog.get_logger(__name__)


class Storefront:
    def __init__(self, domain=storefront, clock=None, timer=None, catalog=DEFAULT_MENU, session_id=None):
        """Open a session.

        Args:
            domain: Initialized Protean domain holding the session's state.
            clock: ``Clock`` adapter; defaults to the wall clock.
            timer: ``Timer`` adapter; defaults to daemon threads.
            catalog: Static list of catalog entries to load, or None to use
                     the items already in the catalog store.
            session_id: Label carried by the cart and history.
        """
        self._domain = domain
        self.clock = clock or SystemClock()
        self.timer = timer or ThreadingTimer()
        self.session_id = session_id or str(uuid4())

        self._lock = threading.RLock()
        self._expiry = None  # (order_id, TimerHandle) of the armed expiry
        self._last_order_id = None

        with self._context():
            if catalog is not None:
                self._process(LoadCatalog(items=json.dumps(list(catalog))))
            self.cart_id = self._process(CreateCart(session_id=self.session_id))
            self.history_id = self._process(CreateHistory(session_id=self.session_id))

        logger.info("Session opened", session_id=self.session_id, cart_id=self.cart_id)

    # -------------------------------------------------------------------
    # Plumbing
    # -------------------------------------------------------------------
    @contextmanager
    def _context(self):
        with self._lock, self._domain.domain_context():
            yield

    @staticmethod
    def _process(command):
        return current_domain.process(command, asynchronous=False)

    def _pending_order_id(self):
        cart = current_domain.repository_for(Cart).get(self.cart_id)
        if cart.pending_order_id:
            return str(cart.pending_order_id)

        # The timer may already have closed the last order
        if self._last_order_id:
            last = current_domain.repository_for(Order).get(self._last_order_id)
            if OrderStatus(last.status) == OrderStatus.EXPIRED:
                raise OrderExpired({"order": [f"Order {last.id} expired at {last.expires_at.isoformat()}"]})
        raise NoPendingOrder({"order": ["There is no pending order"]})

    def _expire_overdue(self):
        """Close a pending order whose window has passed before its timer fired."""
        cart = current_domain.repository_for(Cart).get(self.cart_id)
        if not cart.pending_order_id:
            return
        order = current_domain.repository_for(Order).get(cart.pending_order_id)
        if order.has_expired(self.clock.now()):
            self.expire(str(order.id))

    def _arm(self, order):
        delay = (as_utc(order.expires_at) - as_utc(self.clock.now())).total_seconds()
        order_id = str(order.id)
        if self._expiry:
            self._expiry[1].cancel()
        handle = self.timer.schedule(delay, lambda: self.expire(order_id))
        self._expiry = (order_id, handle)

    def _disarm(self, order_id):
        if self._expiry and self._expiry[0] == order_id:
            self._expiry[1].cancel()
            self._expiry = None

    def _resolve(self, command_cls, **kwargs):
        order_id = self._pending_order_id()
        status = self._process(
            command_cls(
                order_id=order_id,
                history_id=self.history_id,
                as_of=self.clock.now(),
                **kwargs,
            )
        )
        self._disarm(order_id)
        order = current_domain.repository_for(Order).get(order_id)

        if OrderStatus(status) == OrderStatus.EXPIRED:
            raise OrderExpired({"order": [f"Order {order_id} expired at {order.expires_at.isoformat()}"]})
        if OrderStatus(status) == OrderStatus.FAILED:
            raise InsufficientStock({"stock": [order.reason]})
        return order

    # -------------------------------------------------------------------
    # Intents
    # -------------------------------------------------------------------
    def add_item(self, item_id):
        """Add one unit; returns False when stock leaves no room."""
        with self._context():
            self._expire_overdue()
            return self._process(AddItem(cart_id=self.cart_id, item_id=str(item_id)))

    def remove_item(self, item_id):
        """Remove one unit; returns False when the item is not in the cart."""
        with self._context():
            self._expire_overdue()
            return self._process(RemoveItem(cart_id=self.cart_id, item_id=str(item_id)))

    def checkout(self):
        """Place an order for the cart and start its reservation window."""
        with self._context():
            self._expire_overdue()
            order_id = self._process(PlaceOrder(cart_id=self.cart_id, placed_at=self.clock.now()))
            order = current_domain.repository_for(Order).get(order_id)
            self._arm(order)
            self._last_order_id = order_id
            return order

    def pay(self):
        """Complete the pending order, taking its lines out of stock."""
        with self._context():
            return self._resolve(PayOrder)

    def cancel(self, reason="Cancelled by customer"):
        with self._context():
            return self._resolve(CancelOrder, reason=reason)

    def expire(self, order_id):
        """Timer callback: expire ``order_id`` if its window has closed.

        A timer that fires for an order that is already resolved does
        nothing. One that fires early is re-armed for the time left.
        """
        with self._context():
            try:
                status = self._process(
                    ExpireOrder(order_id=order_id, history_id=self.history_id, as_of=self.clock.now())
                )
            except (ValidationError, ObjectNotFoundError) as exc:
                logger.warning("Failed to expire order", order_id=order_id, error=str(exc))
                return None

            if OrderStatus(status) == OrderStatus.PENDING:
                self._arm(current_domain.repository_for(Order).get(order_id))
            else:
                self._disarm(order_id)
            return status

    # -------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------
    def cart(self):
        with self._context():
            return current_domain.repository_for(Cart).get(self.cart_id)

    def pending_order(self):
        with self._context():
            cart = current_domain.repository_for(Cart).get(self.cart_id)
            if not cart.pending_order_id:
                return None
            return current_domain.repository_for(Order).get(cart.pending_order_id)

    def remaining_seconds(self):
        """Countdown for the pending order; None when nothing is pending."""
        order = self.pending_order()
        return order.remaining_seconds(self.clock.now()) if order else None

    def order(self, order_id):
        with self._context():
            return current_domain.repository_for(Order).get(order_id)

    def history(self):
        with self._context():
            return current_domain.repository_for(OrderHistory).get(self.history_id).list()

    def catalog(self):
        with self._context():
            return list_items()

    def stock_levels(self):
        with self._context():
            return stock_levels()

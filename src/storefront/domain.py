"""Storefront bounded context — Catalog, Cart, Checkout and Order History.

Handles a single shopper session: a fixed catalog with live stock, a cart
that never oversells, and a checkout that holds a 15 minute reservation
window before the order is paid, cancelled or expired.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)

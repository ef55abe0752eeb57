"""Storefront bounded context — Ordering, Carts, Coupons and Store catalogues.

Places orders from a customer's cart (one order per seller), serves the
customer's order history, and exposes a store's public catalogue.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging

# Configure logging for the application
configure_logging(log_dir="logs", log_file_prefix="storefront")

# Domain Composition Root
storefront = Domain(name="storefront")

"""Storefront bounded context — order placement, order history and store catalogues."""

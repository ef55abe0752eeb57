"""Auth context abstraction — pluggable source of the caller's identity."""

import os

from fastapi import Request

from storefront.auth.port import AuthContext


def membership_capability() -> str:
    """The capability that marks a caller as a member (``plan:plus`` by default)."""
    return f"plan:{os.environ.get('MEMBERSHIP_PLAN', 'plus')}"


def get_auth_context(request: Request) -> AuthContext:
    """FastAPI dependency building the configured auth adapter for a request.

    Uses the header adapter by default. Configure via the AUTH_ADAPTER
    environment variable.
    """
    adapter = os.environ.get("AUTH_ADAPTER", "header")
    if adapter == "header":
        from storefront.auth.header_adapter import HeaderAuthContext

        return HeaderAuthContext(request.headers)
    raise ValueError(f"Unknown auth adapter: {adapter}")

"""Auth context port — who is calling and what their plan allows.

Authentication itself happens upstream. The ordering code only ever asks
these two questions, so the adapter can be swapped via configuration.
"""

from abc import ABC, abstractmethod


class AuthContext(ABC):
    """Abstract interface for the authenticated caller of a request."""

    @abstractmethod
    def current_user_id(self) -> str | None:
        """Return the caller's user id, or None for anonymous requests."""
        ...

    @abstractmethod
    def has_capability(self, capability: str) -> bool:
        """Return whether the caller holds a capability, e.g. ``plan:plus``."""
        ...

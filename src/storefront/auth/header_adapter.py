"""Header auth adapter — trusts identity headers set by the API gateway.

The gateway in front of the service authenticates the session and forwards:
    X-User-Id:     the authenticated user id
    X-User-Plans:  comma-separated plan names held by the user
"""

from collections.abc import Mapping

from storefront.auth.port import AuthContext

USER_ID_HEADER = "x-user-id"
PLANS_HEADER = "x-user-plans"


class HeaderAuthContext(AuthContext):
    def __init__(self, headers: Mapping[str, str]):
        self._user_id = (headers.get(USER_ID_HEADER) or "").strip() or None
        raw_plans = headers.get(PLANS_HEADER) or ""
        self._plans = {plan.strip().lower() for plan in raw_plans.split(",") if plan.strip()}

    def current_user_id(self) -> str | None:
        return self._user_id

    def has_capability(self, capability: str) -> bool:
        if self._user_id is None:
            return False
        kind, _, name = capability.partition(":")
        if kind != "plan" or not name:
            return False
        return name.lower() in self._plans

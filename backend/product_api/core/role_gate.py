"""Role Gate — allows or denies a resolved identity against a required role set.

Invariants:
    - PURE: no IO, no side effects
    - Returns an error on violation, None on success
"""

from typing import Collection

from product_api.core.domain_types import Role
from product_api.core.errors import ApiError, Forbidden, Unauthenticated
from product_api.core.request_context import AuthenticatedIdentity


def check_role(
    identity: AuthenticatedIdentity | None, allowed: Collection[Role],
) -> ApiError | None:
    if identity is None:
        # unreachable when authentication ran first
        return Unauthenticated()
    if identity.role not in allowed:
        return Forbidden()
    return None

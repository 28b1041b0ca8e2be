"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO; pure core functions never await
"""

from typing import Protocol

from product_api.core.domain_types import UserId
from product_api.core.request_context import AuthenticatedIdentity


class UserLookup(Protocol):
    """What the authentication step needs: one lookup by identifier."""
    async def get_identity(self, user_id: UserId) -> AuthenticatedIdentity | None: ...

"""Request Context — typed per-request state threaded through the pipeline.

Invariants:
    - identity is None until the authentication step resolves a user
    - Contexts are immutable; steps return a new context via with_identity()
    - path_params hold raw strings; int_param() is only safe after validation

Design Decisions:
    - Explicit optional identity field over attaching attributes to the request object
    - AuthenticatedIdentity never carries the password hash
"""

from dataclasses import dataclass, field, replace
from typing import Any

from product_api.core.domain_types import Role, UserId


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """The resolved user for one request."""
    id: UserId
    email: str
    name: str
    role: Role

    def to_public(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role.value,
        }


@dataclass(frozen=True)
class RequestContext:
    method: str
    path: str
    authorization: str | None = None
    path_params: dict[str, str] = field(default_factory=dict)
    body: dict[str, Any] = field(default_factory=dict)
    identity: AuthenticatedIdentity | None = None

    def with_identity(self, identity: AuthenticatedIdentity) -> "RequestContext":
        return replace(self, identity=identity)

    def int_param(self, name: str) -> int:
        return int(self.path_params[name])

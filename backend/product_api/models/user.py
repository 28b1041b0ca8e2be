"""User ORM — registered accounts and their single role.

Invariants:
    - email is unique and stored lowercase
    - password holds a bcrypt hash, never plaintext
    - role is one of Role; defaults to user

Design Decisions:
    - role stored as a short string, validated at the boundary: portable across
      PostgreSQL and SQLite without a native enum type
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from product_api.core.domain_types import Role, UserId
from product_api.core.request_context import AuthenticatedIdentity
from product_api.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password: Mapped[str] = mapped_column(String(100), nullable=False)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    role: Mapped[str] = mapped_column(
        String(10), nullable=False, default=Role.USER.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )

    def to_identity(self) -> AuthenticatedIdentity:
        return AuthenticatedIdentity(
            id=UserId(self.id), email=self.email, name=self.name,
            role=Role(self.role),
        )

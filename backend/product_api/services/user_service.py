"""User Service — registration, login, and identity lookup.

Invariants:
    - Duplicate emails are rejected before any write (Conflict)
    - Passwords are hashed before insert and never returned
    - Login failures share one message whether the email or the password was wrong
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from product_api.core.domain_types import MAX_ROW_ID, Role, UserId
from product_api.core.errors import Conflict, Unauthenticated
from product_api.core.passwords import check_password, hash_password
from product_api.core.request_context import AuthenticatedIdentity
from product_api.models.user import User
from product_api.schemas.auth import UserLogin, UserRegister
from product_api.services.persistence import persistence_guard

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL = "email is already registered"
INVALID_CREDENTIALS = "invalid credentials"


class UserService:
    """Implements UserLookup (core/repository_protocols.py) plus account operations."""

    def __init__(
        self, db: AsyncSession, bcrypt_rounds: int = 10,
        duplicate_email_status: int = 409,
    ):
        self._db = db
        self._rounds = bcrypt_rounds
        self._duplicate_status = duplicate_email_status

    async def get_identity(self, user_id: UserId) -> AuthenticatedIdentity | None:
        if not 1 <= user_id <= MAX_ROW_ID:
            return None
        async with persistence_guard(self._db, "get_user"):
            user = await self._db.get(User, user_id)
        return user.to_identity() if user else None

    async def find_by_email(self, email: str) -> User | None:
        async with persistence_guard(self._db, "find_user"):
            result = await self._db.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()

    async def exists_with_role(self, role: Role) -> bool:
        async with persistence_guard(self._db, "find_user"):
            result = await self._db.execute(
                select(User.id).where(User.role == role.value).limit(1),
            )
            return result.first() is not None

    async def register(self, payload: UserRegister) -> AuthenticatedIdentity:
        if await self.find_by_email(payload.email):
            raise Conflict(DUPLICATE_EMAIL, self._duplicate_status)
        user = User(
            email=payload.email,
            password=hash_password(payload.password, self._rounds),
            name=payload.name,
            role=payload.role.value,
        )
        async with persistence_guard(self._db, "register_user"):
            self._db.add(user)
            try:
                await self._db.commit()
            except IntegrityError:
                # lost a race with a concurrent registration of the same email
                await self._db.rollback()
                raise Conflict(DUPLICATE_EMAIL, self._duplicate_status)
            await self._db.refresh(user)
        logger.info("User registered", extra={"user_id": user.id})
        return user.to_identity()

    async def authenticate(self, payload: UserLogin) -> AuthenticatedIdentity:
        user = await self.find_by_email(payload.email)
        if user is None or not check_password(payload.password, user.password):
            raise Unauthenticated(INVALID_CREDENTIALS)
        return user.to_identity()

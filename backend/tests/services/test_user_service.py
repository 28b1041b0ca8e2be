"""User Service — registration, authentication, identity lookup."""

import pytest

from product_api.core.domain_types import Role, UserId
from product_api.core.errors import Conflict, Unauthenticated
from product_api.models.user import User
from product_api.schemas.auth import UserLogin, UserRegister
from product_api.services.user_service import (
    DUPLICATE_EMAIL, INVALID_CREDENTIALS, UserService,
)
from tests.factories import TEST_PASSWORD, create_user


def _register_payload(email="someone@demo.com", role=Role.USER):
    return UserRegister(email=email, password="secret123", name="Someone", role=role)


async def test_register_hashes_password(db_manager):
    async with db_manager.session() as db:
        identity = await UserService(db, bcrypt_rounds=4).register(_register_payload())
    async with db_manager.session() as db:
        stored = await db.get(User, identity.id)
    assert stored.password != "secret123"
    assert stored.password.startswith("$2")


async def test_register_normalizes_email(db_manager):
    async with db_manager.session() as db:
        identity = await UserService(db, bcrypt_rounds=4).register(
            _register_payload(email="  MiXeD@Demo.COM"),
        )
    assert identity.email == "mixed@demo.com"


async def test_register_duplicate_raises_conflict(db_manager):
    await create_user(db_manager, "dup@demo.com")
    async with db_manager.session() as db:
        with pytest.raises(Conflict) as exc_info:
            await UserService(db, bcrypt_rounds=4).register(
                _register_payload(email="DUP@demo.com"),
            )
    assert exc_info.value.message == DUPLICATE_EMAIL
    assert exc_info.value.http_status == 409


async def test_duplicate_status_follows_configuration(db_manager):
    await create_user(db_manager, "dup@demo.com")
    async with db_manager.session() as db:
        service = UserService(db, bcrypt_rounds=4, duplicate_email_status=400)
        with pytest.raises(Conflict) as exc_info:
            await service.register(_register_payload(email="dup@demo.com"))
    assert exc_info.value.http_status == 400


async def test_authenticate_accepts_correct_password(db_manager):
    created = await create_user(db_manager, "login@demo.com")
    async with db_manager.session() as db:
        identity = await UserService(db).authenticate(
            UserLogin(email="LOGIN@demo.com", password=TEST_PASSWORD),
        )
    assert identity == created


@pytest.mark.parametrize("email,password", [
    ("login@demo.com", "wrong-password"),
    ("missing@demo.com", TEST_PASSWORD),
])
async def test_authenticate_rejects_with_one_message(db_manager, email, password):
    await create_user(db_manager, "login@demo.com")
    async with db_manager.session() as db:
        with pytest.raises(Unauthenticated) as exc_info:
            await UserService(db).authenticate(UserLogin(email=email, password=password))
    assert exc_info.value.message == INVALID_CREDENTIALS


async def test_get_identity(db_manager):
    created = await create_user(db_manager, "who@demo.com", Role.ADMIN, "Who")
    async with db_manager.session() as db:
        service = UserService(db)
        assert await service.get_identity(UserId(created.id)) == created
        assert await service.get_identity(UserId(created.id + 1)) is None
        assert await service.get_identity(UserId(2**63)) is None


async def test_exists_with_role(db_manager):
    await create_user(db_manager, "plain@demo.com")
    async with db_manager.session() as db:
        service = UserService(db)
        assert await service.exists_with_role(Role.USER)
        assert not await service.exists_with_role(Role.ADMIN)

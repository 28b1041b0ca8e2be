"""Create the first admin account (out-of-band bootstrap).

Usage:
    python -m product_api.scripts.create_admin --email admin@demo.com \\
        --password s3cret-pass --name Administrator

Exits 0 without changes when an admin already exists.
"""

import argparse
import asyncio
import logging
import sys

from product_api.config import get_settings
from product_api.core.domain_types import Role
from product_api.core.errors import ApiError
from product_api.infrastructure.database import DatabaseSessionManager
from product_api.infrastructure.observability import setup_logging
from product_api.schemas.auth import UserRegister
from product_api.services.user_service import UserService

logger = logging.getLogger(__name__)


async def create_admin(
    db_manager: DatabaseSessionManager, email: str, password: str, name: str,
    bcrypt_rounds: int = 10,
) -> bool:
    """Return True if an admin was created, False if one already existed."""
    async with db_manager.session() as db:
        users = UserService(db, bcrypt_rounds=bcrypt_rounds)
        if await users.exists_with_role(Role.ADMIN):
            logger.info("An admin user already exists")
            return False
        identity = await users.register(UserRegister(
            email=email, password=password, name=name, role=Role.ADMIN,
        ))
        logger.info(f"Admin user created: {identity.email}", extra={"user_id": identity.id})
        return True


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create the first admin user.")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--name", default="Administrator")
    return parser.parse_args(argv)


async def _main(args: argparse.Namespace) -> int:
    settings = get_settings()
    db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    try:
        if settings.database_create_schema:
            await db_manager.create_schema()
        await create_admin(
            db_manager, args.email, args.password, args.name,
            bcrypt_rounds=settings.bcrypt_rounds,
        )
    except ApiError as e:
        logger.error(f"Could not create admin: {e.message}")
        return 1
    finally:
        await db_manager.close()
    return 0


def main(argv: list[str] | None = None) -> int:
    setup_logging(get_settings().log_level, "text")
    return asyncio.run(_main(_parse_args(argv)))


if __name__ == "__main__":
    sys.exit(main())

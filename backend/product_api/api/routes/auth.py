"""Auth Routes — registration, login, and the caller's own profile.

Invariants:
    - register/login are public and validate their bodies before any lookup
    - profile requires a bearer token and no particular role
    - Tokens are issued by the app's TokenCodec (24h by default)
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from product_api.api import rule_sets
from product_api.api.pipeline import Authenticate, RequestPipeline, ValidateFields
from product_api.core.request_context import AuthenticatedIdentity, RequestContext
from product_api.infrastructure.database import get_db
from product_api.schemas.auth import (
    AuthResponse, ProfileResponse, UserLogin, UserOut, UserRegister,
)
from product_api.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])

register_pipeline = RequestPipeline(ValidateFields(rule_sets.REGISTER))
login_pipeline = RequestPipeline(ValidateFields(rule_sets.LOGIN))
profile_pipeline = RequestPipeline(Authenticate())


def get_user_service(
    request: Request, db: AsyncSession = Depends(get_db),
) -> UserService:
    settings = request.app.state.settings
    return UserService(
        db, bcrypt_rounds=settings.bcrypt_rounds,
        duplicate_email_status=settings.duplicate_email_status,
    )


def _auth_response(
    request: Request, message: str, identity: AuthenticatedIdentity,
) -> AuthResponse:
    token = request.app.state.token_codec.issue(identity.id)
    return AuthResponse(
        message=message, user=UserOut(**identity.to_public()), token=token,
    )


@router.post(
    "/register", response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    request: Request,
    ctx: RequestContext = Depends(register_pipeline),
    users: UserService = Depends(get_user_service),
):
    identity = await users.register(UserRegister.model_validate(ctx.body))
    return _auth_response(request, "User registered successfully", identity)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: Request,
    ctx: RequestContext = Depends(login_pipeline),
    users: UserService = Depends(get_user_service),
):
    identity = await users.authenticate(UserLogin.model_validate(ctx.body))
    logger.info("User logged in", extra={"user_id": identity.id})
    return _auth_response(request, "Login successful", identity)


@router.get("/profile", response_model=ProfileResponse)
async def profile(ctx: RequestContext = Depends(profile_pipeline)):
    return ProfileResponse(user=UserOut(**ctx.identity.to_public()))

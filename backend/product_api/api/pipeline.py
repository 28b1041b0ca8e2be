"""Request Pipeline — ordered gates every routed request passes before its handler.

Invariants:
    - Order is parse → authenticate → authorize → validate, fixed when the route
      module is imported; a pipeline declared out of order raises ValueError then
    - The first Reject ends the request; no later step runs and the handler never runs
    - Public routes simply declare no authentication/authorization steps
    - The body is parsed only when some step reads it

Design Decisions:
    - Steps return Continue/Reject values instead of raising: the pipeline owns the
      short-circuit, and steps stay testable without an app
    - The pipeline is exposed to FastAPI as a dependency returning the final
      RequestContext; a rejection is raised as its ApiError so the global handler
      shapes the response
    - Per-request collaborators (user lookup, token codec) arrive as PipelineServices,
      never as module globals
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Protocol

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from product_api.core.credentials import TokenCodec
from product_api.core.domain_types import ParamSource, PipelineStage, Role
from product_api.core.errors import (
    ApiError, FieldError, Unauthenticated, ValidationFailed,
)
from product_api.core.field_rules import FieldRule, validate_fields
from product_api.core.repository_protocols import UserLookup
from product_api.core.request_context import RequestContext
from product_api.core.role_gate import check_role
from product_api.infrastructure.database import get_db
from product_api.services.user_service import UserService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Continue:
    context: RequestContext


@dataclass(frozen=True)
class Reject:
    error: ApiError


StepOutcome = Continue | Reject


@dataclass(frozen=True)
class PipelineServices:
    users: UserLookup
    tokens: TokenCodec


class Step(Protocol):
    stage: PipelineStage
    reads_body: bool

    async def __call__(
        self, context: RequestContext, services: PipelineServices,
    ) -> StepOutcome: ...


# ─── Steps ───────────────────────────────────────────────────────

class Authenticate:
    """Resolve the bearer token to a stored user and attach it as the identity."""
    stage = PipelineStage.AUTHENTICATE
    reads_body = False

    async def __call__(
        self, context: RequestContext, services: PipelineServices,
    ) -> StepOutcome:
        try:
            user_id = services.tokens.verify_header(context.authorization)
        except ApiError as e:
            return Reject(e)
        identity = await services.users.get_identity(user_id)
        if identity is None:
            return Reject(Unauthenticated("user not found"))
        return Continue(context.with_identity(identity))


class RequireRole:
    stage = PipelineStage.AUTHORIZE
    reads_body = False

    def __init__(self, *roles: Role):
        self.roles = frozenset(roles)

    async def __call__(
        self, context: RequestContext, services: PipelineServices,
    ) -> StepOutcome:
        error = check_role(context.identity, self.roles)
        return Reject(error) if error else Continue(context)


class ValidateFields:
    stage = PipelineStage.VALIDATE

    def __init__(self, rules: Iterable[FieldRule]):
        self.rules = tuple(rules)
        self.reads_body = any(r.source == ParamSource.BODY for r in self.rules)

    async def __call__(
        self, context: RequestContext, services: PipelineServices,
    ) -> StepOutcome:
        errors = validate_fields(self.rules, context)
        return Reject(ValidationFailed(errors)) if errors else Continue(context)


# ─── Parsing ─────────────────────────────────────────────────────

async def parse_request(request: Request, read_body: bool) -> StepOutcome:
    """Build the initial context from the raw request."""
    body: dict = {}
    if read_body and (await request.body()).strip():
        try:
            parsed = await request.json()
        except ValueError:
            return Reject(ValidationFailed([FieldError("malformed JSON body")]))
        if not isinstance(parsed, dict):
            return Reject(ValidationFailed(
                [FieldError("request body must be a JSON object")],
            ))
        body = parsed
    return Continue(RequestContext(
        method=request.method,
        path=request.url.path,
        authorization=request.headers.get("authorization"),
        path_params={k: str(v) for k, v in request.path_params.items()},
        body=body,
    ))


# ─── Pipeline ────────────────────────────────────────────────────

class RequestPipeline:
    """An ordered, immutable list of steps bound to one route."""

    def __init__(self, *steps: Step):
        stages = [step.stage for step in steps]
        if stages != sorted(stages):
            raise ValueError(
                "pipeline steps must run authenticate → authorize → validate, "
                f"got {[s.name for s in stages]}",
            )
        self.steps = steps
        self.reads_body = any(step.reads_body for step in steps)

    async def run(
        self, context: RequestContext, services: PipelineServices,
    ) -> RequestContext:
        """Apply every step in order; raise the first rejection."""
        for step in self.steps:
            outcome = await step(context, services)
            if isinstance(outcome, Reject):
                _log_rejection(context, outcome.error)
                raise outcome.error
            context = outcome.context
        return context

    async def __call__(
        self, request: Request, db: AsyncSession = Depends(get_db),
    ) -> RequestContext:
        """FastAPI dependency entry point."""
        outcome = await parse_request(request, self.reads_body)
        if isinstance(outcome, Reject):
            raise outcome.error
        settings = request.app.state.settings
        services = PipelineServices(
            users=UserService(
                db, bcrypt_rounds=settings.bcrypt_rounds,
                duplicate_email_status=settings.duplicate_email_status,
            ),
            tokens=request.app.state.token_codec,
        )
        return await self.run(outcome.context, services)


def _log_rejection(context: RequestContext, error: ApiError) -> None:
    logger.warning(
        f"Request rejected: {error.message}",
        extra={
            "error_code": error.code,
            "path": context.path,
            "method": context.method,
            "status_code": error.http_status,
            "user_id": context.identity.id if context.identity else None,
        },
    )

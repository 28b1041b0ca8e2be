"""Credential Verifier — bearer header parsing and signed token issue/verify.

Invariants:
    - Pure computation: no IO (the user lookup happens in the pipeline step)
    - Missing header or token segment → Unauthenticated (401)
    - Bad signature, expiry, or payload → InvalidToken (403)
    - Issued tokens always carry user_id, iat and exp

Design Decisions:
    - user_id claim instead of sub: PyJWT requires sub to be a string and the
      identifier is an int everywhere else
    - TokenCodec is constructed once per app from settings and injected, never global
"""

from datetime import datetime, timedelta, timezone

import jwt

from product_api.core.domain_types import UserId
from product_api.core.errors import InvalidToken, Unauthenticated

USER_ID_CLAIM = "user_id"


def extract_bearer_token(header: str | None) -> str:
    """Return the token from 'Bearer <token>' or raise Unauthenticated."""
    if not header:
        raise Unauthenticated("access token required")
    parts = header.split()
    if len(parts) < 2 or parts[0].lower() != "bearer":
        raise Unauthenticated("access token required")
    return parts[1]


class TokenCodec:
    """Issues and verifies HS256 access tokens."""

    def __init__(
        self, secret: str, algorithm: str = "HS256", expiration_hours: int = 24,
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = timedelta(hours=expiration_hours)

    def issue(self, user_id: int, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            USER_ID_CLAIM: user_id,
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> UserId:
        """Verify signature and expiry, return the embedded user id."""
        try:
            payload = jwt.decode(
                token, self._secret, algorithms=[self._algorithm],
                options={"require": ["exp", USER_ID_CLAIM]},
            )
        except jwt.PyJWTError as e:
            raise InvalidToken() from e
        user_id = payload.get(USER_ID_CLAIM)
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise InvalidToken()
        return UserId(user_id)

    def verify_header(self, header: str | None) -> UserId:
        return self.decode(extract_bearer_token(header))

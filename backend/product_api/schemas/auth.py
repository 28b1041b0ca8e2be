"""Auth Schemas — registration/login payloads and the public user shape.

Invariants:
    - Emails are stripped and lowercased before any lookup or write
    - UserOut is the only user representation that leaves the API
"""

from pydantic import BaseModel, ConfigDict, field_validator

from product_api.core.domain_types import Role


class _EmailPayload(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserRegister(_EmailPayload):
    name: str
    role: Role = Role.USER


class UserLogin(_EmailPayload):
    pass


class UserOut(BaseModel):
    id: int
    email: str
    name: str
    role: Role


class AuthResponse(BaseModel):
    message: str
    user: UserOut
    token: str


class ProfileResponse(BaseModel):
    user: UserOut

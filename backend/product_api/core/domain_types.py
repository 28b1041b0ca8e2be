"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId and ProductId wrap ints — never pass a raw path string to persistence
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
ProductId = NewType("ProductId", int)

# Integer primary key range; ids outside it cannot exist
MAX_ROW_ID = 2**31 - 1


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """User roles. Exactly one per user."""
    ADMIN = "admin"
    USER = "user"


class ProductOrder(str, Enum):
    """Listing order for GET /api/products."""
    ID_DESC = "id_desc"
    PRICE_DESC = "price_desc"


class ParamSource(str, Enum):
    """Where a validated field is read from."""
    PATH = "path"
    BODY = "body"


class PipelineStage(int, Enum):
    """Pipeline stages in their mandatory order."""
    AUTHENTICATE = 1
    AUTHORIZE = 2
    VALIDATE = 3

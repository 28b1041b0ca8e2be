"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Importing this package registers every table on Base.metadata

Design Decisions:
    - One file per entity for locality
"""

from product_api.models.user import User  # noqa: F401
from product_api.models.product import Product  # noqa: F401

"""Field rule sets for each route, in evaluation order.

An empty product body reports four errors (name required; price numeric,
required and > 0). A replace body also needs availability, so an empty one
reports five.
"""

from product_api.core.domain_types import Role
from product_api.core.field_rules import (
    FieldRule, id_rule, is_boolean, is_email, is_numeric, is_positive,
    is_text, length_between, one_of, required,
)

_PRODUCT_NAME = (
    FieldRule("name", required, "product name cannot be empty"),
    FieldRule("name", length_between(max_len=100), "product name cannot exceed 100 characters"),
    FieldRule("name", is_text, "product name must be text", optional=True),
)

_PRODUCT_PRICE = (
    FieldRule("price", is_numeric, "invalid value"),
    FieldRule("price", required, "product price cannot be empty"),
    FieldRule("price", is_positive, "invalid price"),
)

PRODUCT_ID = (id_rule(),)

PRODUCT_CREATE = _PRODUCT_NAME + _PRODUCT_PRICE + (
    FieldRule("availability", is_boolean, "invalid availability value", optional=True),
)

PRODUCT_REPLACE = PRODUCT_ID + _PRODUCT_NAME + _PRODUCT_PRICE + (
    FieldRule("availability", is_boolean, "invalid availability value"),
)

REGISTER = (
    FieldRule("email", is_email, "invalid email"),
    FieldRule("password", length_between(min_len=6), "password must be at least 6 characters"),
    FieldRule("password", is_text, "password must be text", optional=True),
    FieldRule("name", length_between(2, 50), "name must be between 2 and 50 characters"),
    FieldRule("name", is_text, "name must be text", optional=True),
    FieldRule("role", one_of(*(r.value for r in Role)), "invalid role", optional=True),
)

LOGIN = (
    FieldRule("email", is_email, "invalid email"),
    FieldRule("password", required, "password is required"),
    FieldRule("password", is_text, "password must be text", optional=True),
)

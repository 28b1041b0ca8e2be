"""Field Validator — declarative per-route rules checked against path params and body.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Every rule is evaluated; ALL failures are returned, in declaration order
    - Optional rules are skipped when the key is absent from its source
    - Checks receive the raw JSON value; nothing is coerced in place

Design Decisions:
    - Rules are (field, check, message) triples instead of a pydantic model: one
      bad value can violate several rules and each must be reported separately
      (e.g. price "Hola" is both non-numeric and not > 0)
    - Check helpers mirror the loose string semantics clients already rely on:
      numbers may arrive as numeric strings, booleans as "true"/"false"/"0"/"1"
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from email_validator import EmailNotValidError, validate_email

from product_api.core.domain_types import ParamSource
from product_api.core.errors import FieldError
from product_api.core.request_context import RequestContext

Check = Callable[[Any], bool]

_INT_RE = re.compile(r"[+-]?[0-9]+")
_NUMERIC_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)")
_BOOLEAN_STRINGS = frozenset({"true", "false", "0", "1"})

_MISSING = object()


@dataclass(frozen=True)
class FieldRule:
    """One declarative check on one input field."""
    field: str
    check: Check
    message: str
    source: ParamSource = ParamSource.BODY
    optional: bool = False


# ─── Checks ──────────────────────────────────────────────────────

def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def required(value: Any) -> bool:
    """Non-empty after stripping whitespace."""
    return _as_text(value).strip() != ""


def is_integer(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, str) and bool(_INT_RE.fullmatch(value))


def to_number(value: Any) -> float | None:
    """Numeric value of a JSON number or numeric string, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        raw = value
    elif isinstance(value, str) and _NUMERIC_RE.fullmatch(value.strip()):
        raw = value.strip()
    else:
        return None
    try:
        number = float(raw)
    except OverflowError:
        # ints beyond the float range
        return None
    return number if math.isfinite(number) else None


def is_numeric(value: Any) -> bool:
    return to_number(value) is not None


def is_positive(value: Any) -> bool:
    number = to_number(value)
    return number is not None and number > 0


def is_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return True
    if value is None:
        return False
    return _as_text(value) in _BOOLEAN_STRINGS


def is_text(value: Any) -> bool:
    """Strings and plain numbers read as text; objects, lists, booleans do not."""
    if value is None:
        return True
    if isinstance(value, bool):
        return False
    return isinstance(value, (str, int, float))


def is_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def length_between(min_len: int = 0, max_len: int | None = None) -> Check:
    def check(value: Any) -> bool:
        size = len(_as_text(value))
        if size < min_len:
            return False
        return max_len is None or size <= max_len
    return check


def one_of(*allowed: str) -> Check:
    choices = frozenset(allowed)

    def check(value: Any) -> bool:
        return isinstance(value, str) and value in choices
    return check


# ─── Evaluation ──────────────────────────────────────────────────

def _lookup(context: RequestContext, rule: FieldRule) -> Any:
    source = (
        context.path_params if rule.source == ParamSource.PATH else context.body
    )
    return source.get(rule.field, _MISSING)


def validate_fields(
    rules: Iterable[FieldRule], context: RequestContext,
) -> list[FieldError]:
    """Evaluate every rule against the context. Empty list means valid."""
    errors: list[FieldError] = []
    for rule in rules:
        value = _lookup(context, rule)
        if value is _MISSING:
            if rule.optional:
                continue
            value = None
        if not rule.check(value):
            errors.append(FieldError(field=rule.field, message=rule.message))
    return errors


def id_rule(field: str = "id") -> FieldRule:
    """Path identifier must be syntactically an integer."""
    return FieldRule(
        field, is_integer, "invalid identifier", source=ParamSource.PATH,
    )

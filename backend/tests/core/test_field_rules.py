"""Field Validator — tests for pure rule evaluation.

Tests cover:
    - Every failing rule is reported, in declaration order
    - Optional rules skip absent keys but still check present ones
    - Path identifiers must be syntactically integers
    - Product create/replace rule sets produce the documented error counts
"""

import pytest

from product_api.api import rule_sets
from product_api.core.domain_types import ParamSource
from product_api.core.field_rules import (
    FieldRule, id_rule, is_boolean, is_email, is_integer, is_numeric,
    is_positive, is_text, length_between, one_of, required, validate_fields,
)
from product_api.core.request_context import RequestContext


def _ctx(body=None, path_params=None) -> RequestContext:
    return RequestContext(
        method="POST", path="/api/products",
        body=body or {}, path_params=path_params or {},
    )


def _messages(errors) -> list[str]:
    return [e.message for e in errors]


# ─── checks ──────────────────────────────────────────────────────

@pytest.mark.parametrize("value", ["x", 0, False, "  a "])
def test_required_accepts_non_empty(value):
    assert required(value)


@pytest.mark.parametrize("value", [None, "", "   "])
def test_required_rejects_empty(value):
    assert not required(value)


@pytest.mark.parametrize("value", ["1", "-3", "+7", 42])
def test_is_integer_accepts_integers(value):
    assert is_integer(value)


@pytest.mark.parametrize(
    "value", ["not-valid-url", "1.5", "", True, 1.0, None, "\u0661", "7\n", " 7"],
)
def test_is_integer_rejects_non_integers(value):
    assert not is_integer(value)


@pytest.mark.parametrize("value", [50, 0, 1.5, "12", "3.25", "-4"])
def test_is_numeric_accepts_numbers_and_numeric_strings(value):
    assert is_numeric(value)


@pytest.mark.parametrize(
    "value", ["Hola", "", None, True, [], float("nan"), "\u0661", 10**400],
)
def test_is_numeric_rejects_other_values(value):
    assert not is_numeric(value)


def test_is_positive_requires_strictly_greater_than_zero():
    assert is_positive(0.01)
    assert is_positive("10")
    assert not is_positive(0)
    assert not is_positive(-5)
    assert not is_positive("Hola")
    assert not is_positive(None)


@pytest.mark.parametrize("value", [True, False, "true", "false", "0", "1", 0, 1])
def test_is_boolean_accepts_loose_booleans(value):
    assert is_boolean(value)


@pytest.mark.parametrize("value", [None, "yes", "TRUE", 2, "maybe"])
def test_is_boolean_rejects_others(value):
    assert not is_boolean(value)


def test_is_text_accepts_strings_and_numbers_only():
    assert is_text("Monitor")
    assert is_text(123)
    assert not is_text(True)
    assert not is_text({"a": 1})
    assert not is_text(["a"])


def test_length_between_bounds_are_inclusive():
    check = length_between(2, 5)
    assert check("ab")
    assert check("abcde")
    assert not check("a")
    assert not check("abcdef")
    assert not check(None)


def test_one_of_matches_exact_strings():
    check = one_of("admin", "user")
    assert check("admin")
    assert not check("Admin")
    assert not check(None)


def test_is_email():
    assert is_email("user@demo.com")
    assert not is_email("not-an-email")
    assert not is_email(None)


# ─── validate_fields ─────────────────────────────────────────────

def test_all_failures_collected_in_declaration_order():
    rules = [
        FieldRule("a", required, "a missing"),
        FieldRule("b", required, "b missing"),
        FieldRule("a", is_numeric, "a not numeric"),
    ]
    errors = validate_fields(rules, _ctx())
    assert _messages(errors) == ["a missing", "b missing", "a not numeric"]
    assert [e.field for e in errors] == ["a", "b", "a"]


def test_valid_input_returns_no_errors():
    rules = [FieldRule("a", required, "a missing")]
    assert validate_fields(rules, _ctx({"a": "x"})) == []


def test_optional_rule_skipped_when_absent():
    rules = [FieldRule("flag", is_boolean, "bad flag", optional=True)]
    assert validate_fields(rules, _ctx()) == []


def test_optional_rule_checked_when_present():
    rules = [FieldRule("flag", is_boolean, "bad flag", optional=True)]
    errors = validate_fields(rules, _ctx({"flag": "nope"}))
    assert _messages(errors) == ["bad flag"]


def test_path_rules_read_path_params_not_body():
    rules = [id_rule()]
    assert validate_fields(rules, _ctx({"id": "x"}, {"id": "7"})) == []
    errors = validate_fields(rules, _ctx({"id": "7"}, {"id": "abc"}))
    assert _messages(errors) == ["invalid identifier"]
    assert errors[0].field == "id"


def test_id_rule_reads_from_path():
    assert id_rule().source == ParamSource.PATH


# ─── product rule sets ──────────────────────────────────────────

def test_empty_create_body_reports_four_errors():
    errors = validate_fields(rule_sets.PRODUCT_CREATE, _ctx({}))
    assert _messages(errors) == [
        "product name cannot be empty",
        "invalid value",
        "product price cannot be empty",
        "invalid price",
    ]


def test_zero_price_reports_only_invalid_price():
    errors = validate_fields(
        rule_sets.PRODUCT_CREATE, _ctx({"name": "Monitor Curvo", "price": 0}),
    )
    assert _messages(errors) == ["invalid price"]


def test_text_price_reports_not_numeric_and_not_positive():
    errors = validate_fields(
        rule_sets.PRODUCT_CREATE, _ctx({"name": "Monitor Curvo", "price": "Hola"}),
    )
    assert _messages(errors) == ["invalid value", "invalid price"]


def test_price_beyond_float_range_reports_not_numeric_and_not_positive():
    errors = validate_fields(
        rule_sets.PRODUCT_CREATE, _ctx({"name": "X", "price": 10**400}),
    )
    assert _messages(errors) == ["invalid value", "invalid price"]


def test_name_over_100_characters_rejected():
    errors = validate_fields(
        rule_sets.PRODUCT_CREATE, _ctx({"name": "x" * 101, "price": 10}),
    )
    assert _messages(errors) == ["product name cannot exceed 100 characters"]


def test_create_availability_is_optional_but_typed():
    ok = validate_fields(rule_sets.PRODUCT_CREATE, _ctx({"name": "A", "price": 1}))
    bad = validate_fields(
        rule_sets.PRODUCT_CREATE,
        _ctx({"name": "A", "price": 1, "availability": "sometimes"}),
    )
    assert ok == []
    assert _messages(bad) == ["invalid availability value"]


def test_empty_replace_body_reports_five_errors():
    errors = validate_fields(
        rule_sets.PRODUCT_REPLACE, _ctx({}, {"id": "1"}),
    )
    assert len(errors) == 5
    assert errors[-1].field == "availability"


def test_replace_with_bad_id_and_valid_body_reports_one_error():
    body = {"name": "Monitor Curvo", "availability": True, "price": 300}
    errors = validate_fields(
        rule_sets.PRODUCT_REPLACE, _ctx(body, {"id": "not-valid-url"}),
    )
    assert _messages(errors) == ["invalid identifier"]


# ─── auth rule sets ─────────────────────────────────────────────

def test_register_rules_report_each_bad_field():
    errors = validate_fields(
        rule_sets.REGISTER,
        _ctx({"email": "nope", "password": "123", "name": "J", "role": "root"}),
    )
    assert [e.field for e in errors] == ["email", "password", "name", "role"]


def test_register_role_optional():
    body = {"email": "a@demo.com", "password": "secret1", "name": "Jo"}
    assert validate_fields(rule_sets.REGISTER, _ctx(body)) == []


def test_login_requires_password():
    errors = validate_fields(rule_sets.LOGIN, _ctx({"email": "a@demo.com"}))
    assert _messages(errors) == ["password is required"]

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from graphcalc.errors import LexError
from graphcalc.tokenizer import IDENT, LPAREN, NUMBER, OP, RPAREN, tokenize


def _kinds(text: str) -> list[str]:
    return [t.kind for t in tokenize(text)]


def test_tokenize_mixed_expression_skips_whitespace() -> None:
    tokens = tokenize(" 2 * sin( x ) ^ 3")
    assert [t.kind for t in tokens] == [NUMBER, OP, IDENT, LPAREN, IDENT, RPAREN, OP, NUMBER]
    assert [t.position for t in tokens] == [1, 3, 5, 8, 10, 12, 14, 16]


@pytest.mark.parametrize(
    "text, value",
    [("12", 12.0), ("1.5", 1.5), (".5", 0.5), ("3.", 3.0), ("1e-3", 0.001), ("2.5E4", 25000.0)],
)
def test_number_literals(text: str, value: float) -> None:
    tokens = tokenize(text)
    assert len(tokens) == 1
    assert tokens[0].kind == NUMBER
    assert tokens[0].value == value


@given(st.floats(min_value=0, max_value=1e300, allow_nan=False, allow_infinity=False))
def test_any_nonnegative_float_repr_is_one_number_token(value: float) -> None:
    tokens = tokenize(repr(value))
    assert len(tokens) == 1
    assert tokens[0].kind == NUMBER
    assert tokens[0].value == value


def test_exponent_needs_digits_so_2exp_is_number_then_function() -> None:
    tokens = tokenize("2exp(x)")
    assert [(t.kind, t.text) for t in tokens[:2]] == [(NUMBER, "2"), (IDENT, "exp")]


def test_names_are_case_insensitive() -> None:
    assert [t.text for t in tokenize("SIN(X)") if t.kind == IDENT] == ["sin", "x"]


def test_letter_run_is_split_longest_name_first() -> None:
    assert [t.text for t in tokenize("xsin")] == ["x", "sin"]
    assert [(t.text, t.position) for t in tokenize("2xexp")] == [("2", 0), ("x", 1), ("exp", 2)]
    assert [t.text for t in tokenize("sqrt")] == ["sqrt"]


def test_unknown_letter_run_is_one_identifier() -> None:
    tokens = tokenize("foo(1)")
    assert (tokens[0].kind, tokens[0].text, tokens[0].position) == (IDENT, "foo", 0)


def test_operators_are_not_merged_and_no_implicit_multiplication_is_inserted() -> None:
    assert _kinds("2x") == [NUMBER, IDENT]
    assert _kinds("2++3") == [NUMBER, OP, OP, NUMBER]


@pytest.mark.parametrize("text, position, char", [("2 $ 3", 2, "$"), ("x=1", 1, "="), ("sin(x)#", 6, "#"), ("1,5", 1, ",")])
def test_unrecognized_character_reports_offset(text: str, position: int, char: str) -> None:
    with pytest.raises(LexError) as excinfo:
        tokenize(text)
    assert excinfo.value.position == position
    assert excinfo.value.char == char


def test_second_decimal_point_is_rejected() -> None:
    with pytest.raises(LexError) as excinfo:
        tokenize("1.2.3")
    assert excinfo.value.position == 3


def test_overflowing_literal_is_rejected() -> None:
    with pytest.raises(LexError):
        tokenize("1e999")


def test_lone_decimal_point_is_rejected() -> None:
    with pytest.raises(LexError) as excinfo:
        tokenize("x + .")
    assert excinfo.value.position == 4


@pytest.mark.parametrize("text", ["٣x", "x + １", "2²"])
def test_non_ascii_digits_are_unrecognized(text: str) -> None:
    position = next(i for i, ch in enumerate(text) if ch not in "0123456789x +")
    with pytest.raises(LexError) as excinfo:
        tokenize(text)
    assert excinfo.value.position == position

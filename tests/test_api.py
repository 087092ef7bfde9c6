from __future__ import annotations

import logging
import math

import pytest

from graphcalc.api import (
    EvalError,
    GraphSession,
    LexError,
    ParseError,
    Viewport,
    evaluate_at,
    find_zero_crossings,
    parse_and_validate,
    sample_for_viewport,
)
from graphcalc.errors import ParseErrorReason


def test_boundary_functions_compose() -> None:
    tree = parse_and_validate("x - 2")
    assert evaluate_at(tree, 5.0) == 3.0
    zeros = find_zero_crossings(sample_for_viewport(tree, -5.0, 5.0, 200))
    assert len(zeros) == 1
    assert zeros[0].x == pytest.approx(2.0, abs=0.05)


def test_boundary_reports_errors() -> None:
    with pytest.raises(EvalError):
        evaluate_at(parse_and_validate("1/x"), 0.0)
    with pytest.raises(EvalError):
        evaluate_at(parse_and_validate("sqrt(x)"), -1.0)
    with pytest.raises(LexError):
        parse_and_validate("2 ? 3")
    with pytest.raises(TypeError):
        parse_and_validate(None)


def test_session_keeps_last_valid_tree_on_parse_failure() -> None:
    session = GraphSession()
    assert session.submit("x^2") is None
    tree, version = session.tree, session.version

    for bad in ("2++", "(1+2", "foo(1)"):
        error = session.submit(bad)
        assert isinstance(error, ParseError)
        assert session.tree is tree
        assert session.version == version
        assert session.text == "x^2"
        assert session.error_message
        assert session.hint

    assert session.error.reason is ParseErrorReason.UNKNOWN_FUNCTION
    assert session.evaluate_at(3.0) == 9.0


def test_successful_submit_clears_error_and_advances_version() -> None:
    session = GraphSession()
    session.submit("x")
    session.submit("x $")
    assert isinstance(session.error, LexError)
    session.submit("2x")
    assert session.error is None
    assert session.error_message == ""
    assert session.version == 2
    assert session.canonical == "(2.0*x)"


def test_render_replaces_zeros_per_expression() -> None:
    session = GraphSession()
    session.submit("x - 2")
    first = session.render(Viewport(width=400, height=300, pixels_per_unit=20.0))
    assert [round(z.x, 6) for z in first.zeros] == [2.0]
    assert len(first.samples) == 401

    session.submit("sin(x)")
    second = session.render(Viewport(width=400, height=300, pixels_per_unit=20.0))
    # visible range is [-10, 10]: crossings at -3pi .. 3pi
    assert len(second.zeros) == 7
    assert second.zeros[3].x == pytest.approx(0.0, abs=0.05)
    assert not session.is_current(first.version)
    assert session.is_current(second.version)


def test_render_with_max_jump_ignores_poles() -> None:
    session = GraphSession()
    session.submit("tan(x)")
    vp = Viewport(width=600, height=400, pixels_per_unit=50.0)
    plain = session.render(vp)
    guarded = session.render(vp, max_jump=50.0)
    assert len(guarded.zeros) < len(plain.zeros)
    for z in guarded.zeros:
        assert z.x / math.pi == pytest.approx(round(z.x / math.pi), abs=0.01)


def test_render_without_expression_is_an_error() -> None:
    with pytest.raises(RuntimeError):
        GraphSession().render()


def test_rejected_submission_is_logged(caplog) -> None:
    session = GraphSession()
    with caplog.at_level(logging.DEBUG, logger="graphcalc.api"):
        session.submit("2++")
    assert any("rejected" in r.getMessage() for r in caplog.records)


def test_too_deep_submission_keeps_previous_tree() -> None:
    session = GraphSession()
    session.submit("x - 1")
    tree, version = session.tree, session.version

    for text in ("(" * 200 + "x" + ")" * 200, "+".join(["x"] * 1200)):
        error = session.submit(text)
        assert isinstance(error, ParseError)
        assert error.reason is ParseErrorReason.TOO_DEEP
        assert session.tree is tree
        assert session.version == version
        assert session.hint

    frame = session.render(Viewport(width=200, height=200, pixels_per_unit=20.0))
    assert [round(z.x, 6) for z in frame.zeros] == [1.0]

"""Tab expansion and the column mapping between chars and render."""
from __future__ import annotations

import pytest

from zen.constants import TAB_STOP
from zen.rows import row_cx_to_rx, row_rx_to_cx

LINES = ["", "plain", "\tx", "a\tb\t\tc", "abc\t", "\t\t"]


@pytest.mark.parametrize("text", LINES)
def test_render_matches_forward_mapping(make_session, text: str) -> None:
    session = make_session([text])
    row = session.rows[0]
    assert row.rsize == row_cx_to_rx(row, row.size)
    assert "\t" not in row.render
    assert len(row.hl) == row.rsize


def test_tab_advances_to_next_stop(make_session) -> None:
    session = make_session(["a\tb"])
    row = session.rows[0]
    assert row.render == "a" + " " * (TAB_STOP - 1) + "b"
    assert row_cx_to_rx(row, 1) == 1
    assert row_cx_to_rx(row, 2) == TAB_STOP


@pytest.mark.parametrize("text", LINES)
def test_rx_to_cx_is_left_inverse(make_session, text: str) -> None:
    session = make_session([text])
    row = session.rows[0]
    for cx in range(row.size + 1):
        assert row_rx_to_cx(row, row_cx_to_rx(row, cx)) == cx


@pytest.mark.parametrize("text", LINES)
def test_rx_rounds_down_to_char_boundary(make_session, text: str) -> None:
    session = make_session([text])
    row = session.rows[0]
    for rx in range(row.rsize + 1):
        assert row_cx_to_rx(row, row_rx_to_cx(row, rx)) <= rx


def test_rx_inside_tab_maps_to_the_tab(make_session) -> None:
    session = make_session(["\tx"])
    row = session.rows[0]
    for rx in range(TAB_STOP):
        assert row_rx_to_cx(row, rx) == 0
    assert row_rx_to_cx(row, TAB_STOP) == 1

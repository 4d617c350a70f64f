"""Tests for the row operations in :mod:`zen.rows`."""
from __future__ import annotations

from conftest import texts

from zen.rows import (
    del_char,
    del_row,
    delete_char_at,
    insert_char,
    insert_char_at,
    insert_newline,
    insert_row,
    row_append_string,
    rows_to_string,
    split_line,
)


def test_insert_row_shifts_and_renumbers(make_session) -> None:
    session = make_session(["a", "c"])
    insert_row(session, 1, "b")
    assert texts(session) == ["a", "b", "c"]
    assert [row.idx for row in session.rows] == [0, 1, 2]
    assert session.dirty


def test_insert_row_out_of_range_is_noop(make_session) -> None:
    session = make_session(["a"])
    insert_row(session, 5, "x")
    insert_row(session, -1, "x")
    assert texts(session) == ["a"]
    assert session.dirty == 0


def test_del_row_and_out_of_range(make_session) -> None:
    session = make_session(["a", "b", "c"])
    del_row(session, 0)
    assert texts(session) == ["b", "c"]
    assert [row.idx for row in session.rows] == [0, 1]
    del_row(session, 2)
    del_row(session, -1)
    assert texts(session) == ["b", "c"]


def test_insert_char_appends_to_line(make_session) -> None:
    session = make_session(["abc", "def"])
    insert_char_at(session, 0, 3, "X")
    assert texts(session) == ["abcX", "def"]
    assert session.rows[0].render == "abcX"
    assert session.dirty


def test_insert_char_past_eof_extends_document(make_session) -> None:
    session = make_session(["abc"])
    insert_char_at(session, 1, 0, "z")
    assert texts(session) == ["abc", "z"]


def test_insert_char_clamps_column(make_session) -> None:
    session = make_session(["ab"])
    insert_char_at(session, 0, 99, "c")
    insert_char_at(session, 0, -4, "_")
    assert texts(session) == ["_abc"]


def test_insert_char_row_out_of_range_is_noop(make_session) -> None:
    session = make_session(["ab"])
    insert_char_at(session, 3, 0, "c")
    assert texts(session) == ["ab"]


def test_backspace_joins_lines(make_session) -> None:
    session = make_session(["abc", "def"])
    assert delete_char_at(session, 1, 0) == (0, 3)
    assert texts(session) == ["abcdef"]


def test_backspace_at_document_start_is_noop(make_session) -> None:
    session = make_session(["abc"])
    assert delete_char_at(session, 0, 0) == (0, 0)
    assert texts(session) == ["abc"]
    assert session.dirty == 0


def test_backspace_removes_previous_char(make_session) -> None:
    session = make_session(["abc"])
    assert delete_char_at(session, 0, 2) == (0, 1)
    assert texts(session) == ["ac"]


def test_backspace_out_of_range_is_noop(make_session) -> None:
    session = make_session(["abc"])
    assert delete_char_at(session, 4, 1) == (4, 1)
    assert texts(session) == ["abc"]


def test_split_at_end_of_line_adds_empty_line(make_session) -> None:
    session = make_session(["hello"])
    assert split_line(session, 0, 5) == (1, 0)
    assert texts(session) == ["hello", ""]


def test_split_in_middle_and_at_start(make_session) -> None:
    session = make_session(["hello"])
    split_line(session, 0, 2)
    assert texts(session) == ["he", "llo"]
    split_line(session, 1, 0)
    assert texts(session) == ["he", "", "llo"]


def test_row_append_string_rebuilds_render(make_session) -> None:
    session = make_session(["a"])
    row_append_string(session, session.rows[0], "\tb")
    assert session.rows[0].render == "a   b"
    assert len(session.rows[0].hl) == session.rows[0].rsize


def test_cursor_level_editing(make_session) -> None:
    session = make_session([])
    for ch in "hi":
        insert_char(session, ch)
    insert_newline(session)
    insert_char(session, "!")
    assert texts(session) == ["hi", "!"]
    assert (session.cy, session.cx) == (1, 1)

    session.cx = 0
    del_char(session)
    assert texts(session) == ["hi!"]
    assert (session.cy, session.cx) == (0, 2)


def test_rows_to_string_terminates_every_line(make_session) -> None:
    session = make_session(["a", "", "b"])
    assert rows_to_string(session) == "a\n\nb\n"

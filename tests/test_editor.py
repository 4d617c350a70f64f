"""Key dispatch in :class:`zen.editor.Editor`, driven without a terminal."""
from __future__ import annotations

from conftest import texts

from zen.constants import (
    ARROW_DOWN,
    BACKSPACE,
    CTRL_F,
    CTRL_L,
    CTRL_Q,
    CTRL_S,
    DEL_KEY,
    END_KEY,
    ENTER,
    ESC,
    HOME_KEY,
    QUIT_TIMES,
    TAB,
)
from zen.editor import Editor, build_parser


def feed(editor: Editor, keys) -> list[bool]:
    results = []
    for key in keys:
        results.append(editor.process_key(ord(key) if isinstance(key, str) else key))
    return results


def test_typing_builds_document(make_session) -> None:
    editor = Editor(make_session([]))
    feed(editor, ["h", "i", ENTER, TAB, "x"])
    assert texts(editor.session) == ["hi", "\tx"]
    assert editor.session.rows[1].render == "    x"
    assert editor.session.dirty


def test_backspace_and_delete_forward(make_session) -> None:
    editor = Editor(make_session(["abc", "def"]))
    session = editor.session
    session.cx = 3
    feed(editor, [DEL_KEY])
    assert texts(session) == ["abcdef"]
    assert (session.cy, session.cx) == (0, 3)
    feed(editor, [BACKSPACE])
    assert texts(session) == ["abdef"]


def test_home_end_and_ignored_keys(make_session) -> None:
    editor = Editor(make_session(["hello"]))
    feed(editor, [END_KEY])
    assert editor.session.cx == 5
    feed(editor, [HOME_KEY, CTRL_L, ESC, 2000])
    assert editor.session.cx == 0
    assert texts(editor.session) == ["hello"]


def test_quit_clean_document_exits_immediately(make_session) -> None:
    editor = Editor(make_session(["a"]))
    assert editor.process_key(CTRL_Q) is True


def test_quit_dirty_document_needs_confirmation(make_session) -> None:
    editor = Editor(make_session(["a"]))
    feed(editor, ["b"])
    results = feed(editor, [CTRL_Q] * (QUIT_TIMES + 1))
    assert results == [False] * QUIT_TIMES + [True]
    assert "unsaved changes" in editor.session.statusmsg


def test_other_key_resets_quit_counter(make_session) -> None:
    editor = Editor(make_session(["a"]))
    feed(editor, ["b", CTRL_Q, CTRL_Q, ARROW_DOWN])
    assert editor.quit_times == QUIT_TIMES


def test_find_routes_keys_to_search(make_session) -> None:
    editor = Editor(make_session(["abc", "xyz"]))
    feed(editor, [CTRL_F, "y"])
    assert editor.search is not None
    assert (editor.session.cy, editor.session.cx) == (1, 1)
    assert texts(editor.session) == ["abc", "xyz"]
    feed(editor, [ENTER])
    assert editor.search is None
    assert (editor.session.cy, editor.session.cx) == (1, 1)


def test_save_with_filename(make_session, tmp_path) -> None:
    path = tmp_path / "doc.txt"
    session = make_session(["a"])
    session.filename = str(path)
    editor = Editor(session)
    feed(editor, ["b", CTRL_S])
    assert path.read_bytes() == b"ba\n"
    assert session.dirty == 0


def test_save_as_prompt(make_session, tmp_path) -> None:
    path = tmp_path / "new.py"
    editor = Editor(make_session(["x = 1"]))
    feed(editor, [CTRL_S])
    assert editor.save_prompt is not None
    feed(editor, list(str(path)) + [ENTER])
    assert editor.save_prompt is None
    assert editor.session.filename == str(path)
    assert editor.session.syntax is not None and editor.session.syntax.filetype == "python"
    assert path.read_bytes() == b"x = 1\n"


def test_save_as_escape_keeps_state(make_session) -> None:
    session = make_session(["a"])
    editor = Editor(session)
    feed(editor, ["z", CTRL_S, "f", ESC])
    assert editor.save_prompt is None
    assert session.filename is None
    assert session.dirty
    assert session.statusmsg == "Save aborted"
    assert texts(session) == ["za"]


def test_parser_accepts_optional_filename() -> None:
    args = build_parser().parse_args([])
    assert args.filename is None
    args = build_parser().parse_args(["--log-level", "DEBUG", "f.c"])
    assert args.filename == "f.c"
    assert args.log_level == "DEBUG"

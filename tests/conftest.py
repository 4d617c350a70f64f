"""Shared fixtures: in-memory sessions that never touch a terminal."""
from __future__ import annotations

from typing import Callable

import pytest

from zen.models import Session
from zen.rows import insert_row
from zen.syntax import select_syntax_highlight


def build_session(
    lines: list[str] | None = None,
    filename: str | None = None,
    screenrows: int = 10,
    screencols: int = 20,
) -> Session:
    session = Session(screenrows=screenrows, screencols=screencols)
    if filename is not None:
        session.filename = filename
        select_syntax_highlight(session, filename)
    for line in lines or []:
        insert_row(session, session.numrows, line)
    session.dirty = 0
    return session


@pytest.fixture
def make_session() -> Callable[..., Session]:
    return build_session


def texts(session: Session) -> list[str]:
    return [row.chars for row in session.rows]

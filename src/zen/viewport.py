from __future__ import annotations

import time
from dataclasses import dataclass

from .constants import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    HL_NORMAL,
    PAGE_UP,
    STATUS_MSG_TIMEOUT,
)
from .models import Session
from .rows import row_cx_to_rx


@dataclass(slots=True)
class Frame:
    """Everything the output layer needs to draw one screen.

    ``rows`` has one entry per screen row: ``None`` past the end of the
    document, otherwise the visible ``(char, hl)`` pairs.
    """

    rows: list[list[tuple[str, int]] | None]
    cursor: tuple[int, int]
    status: str
    rstatus: str
    message: str


def scroll(session: Session) -> None:
    row = session.current_row
    session.rx = row_cx_to_rx(row, session.cx) if row is not None else 0

    if session.cy < session.rowoff:
        session.rowoff = session.cy
    if session.cy >= session.rowoff + session.screenrows:
        session.rowoff = session.cy - session.screenrows + 1
    if session.rx < session.coloff:
        session.coloff = session.rx
    if session.rx >= session.coloff + session.screencols:
        session.coloff = session.rx - session.screencols + 1


def row_len(session: Session, y: int | None = None) -> int:
    y = session.cy if y is None else y
    if 0 <= y < session.numrows:
        return session.rows[y].size
    return 0


def move_cursor(session: Session, key: int) -> None:
    row = session.current_row

    if key == ARROW_LEFT:
        if session.cx > 0:
            session.cx -= 1
        elif session.cy > 0:
            session.cy -= 1
            session.cx = row_len(session)
    elif key == ARROW_RIGHT:
        if row is not None and session.cx < row.size:
            session.cx += 1
        elif row is not None and session.cx == row.size:
            session.cy += 1
            session.cx = 0
    elif key == ARROW_UP:
        if session.cy > 0:
            session.cy -= 1
    elif key == ARROW_DOWN:
        if session.cy < session.numrows:
            session.cy += 1

    session.cy = max(0, min(session.cy, session.numrows))
    session.cx = max(0, min(session.cx, row_len(session)))


def move_home(session: Session) -> None:
    session.cx = 0


def move_end(session: Session) -> None:
    if session.cy < session.numrows:
        session.cx = session.rows[session.cy].size


def page(session: Session, key: int) -> None:
    if key == PAGE_UP:
        session.cy = session.rowoff
    else:
        session.cy = min(session.rowoff + session.screenrows - 1, session.numrows)
    session.cx = min(session.cx, row_len(session))

    for _ in range(session.screenrows):
        move_cursor(session, ARROW_UP if key == PAGE_UP else ARROW_DOWN)


def visible_rows(session: Session) -> list[list[tuple[str, int]] | None]:
    out: list[list[tuple[str, int]] | None] = []
    for y in range(session.screenrows):
        filerow = session.rowoff + y
        if filerow >= session.numrows:
            out.append(None)
            continue
        row = session.rows[filerow]
        start = session.coloff
        end = start + session.screencols
        chars = row.render[start:end]
        hl = row.hl[start:end]
        out.append([(ch, hl[j] if j < len(hl) else HL_NORMAL) for j, ch in enumerate(chars)])
    return out


def status_text(session: Session) -> tuple[str, str]:
    filename = session.filename if session.filename else "[No Name]"
    status = f"{filename:.20} - {session.numrows} lines {'(modified)' if session.dirty else ''}"
    filetype = session.syntax.filetype if session.syntax else "no ft"
    rstatus = f"{filetype} | {session.cy + 1}/{session.numrows}"
    return status, rstatus


def message_text(session: Session, now: float | None = None) -> str:
    now = time.time() if now is None else now
    if session.statusmsg and now - session.statusmsg_time < STATUS_MSG_TIMEOUT:
        return session.statusmsg
    return ""


def frame(session: Session, now: float | None = None) -> Frame:
    scroll(session)
    status, rstatus = status_text(session)
    return Frame(
        rows=visible_rows(session),
        cursor=(session.cy - session.rowoff, session.rx - session.coloff),
        status=status,
        rstatus=rstatus,
        message=message_text(session, now),
    )

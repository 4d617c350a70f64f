from __future__ import annotations

from .constants import TAB_STOP
from .models import Row, Session
from .syntax import update_syntax


def row_cx_to_rx(row: Row, cx: int) -> int:
    rx = 0
    for ch in row.chars[:cx]:
        if ch == "\t":
            rx += (TAB_STOP - 1) - (rx % TAB_STOP)
        rx += 1
    return rx


def row_rx_to_cx(row: Row, rx: int) -> int:
    cur_rx = 0
    for cx, ch in enumerate(row.chars):
        if ch == "\t":
            cur_rx += (TAB_STOP - 1) - (cur_rx % TAB_STOP)
        cur_rx += 1
        if cur_rx > rx:
            return cx
    return row.size


def update_row(session: Session, row: Row) -> None:
    out: list[str] = []
    idx = 0
    for ch in row.chars:
        if ch == "\t":
            out.append(" ")
            idx += 1
            while idx % TAB_STOP != 0:
                out.append(" ")
                idx += 1
        else:
            out.append(ch)
            idx += 1
    row.render = "".join(out)
    update_syntax(session, row.idx)


def _renumber(session: Session, start: int) -> None:
    for j in range(start, session.numrows):
        session.rows[j].idx = j


def insert_row(session: Session, at: int, s: str) -> None:
    if at < 0 or at > session.numrows:
        return
    session.rows.insert(at, Row(idx=at, chars=s))
    _renumber(session, at + 1)
    update_row(session, session.rows[at])
    # The next row now follows the new row's comment state.
    if at + 1 < session.numrows:
        update_syntax(session, at + 1)
    session.dirty += 1


def del_row(session: Session, at: int) -> None:
    if at < 0 or at >= session.numrows:
        return
    del session.rows[at]
    _renumber(session, at)
    if at < session.numrows:
        update_syntax(session, at)
    session.dirty += 1


def row_insert_char(session: Session, row: Row, at: int, c: str) -> None:
    at = max(0, min(at, row.size))
    row.chars = row.chars[:at] + c + row.chars[at:]
    update_row(session, row)
    session.dirty += 1


def row_append_string(session: Session, row: Row, s: str) -> None:
    row.chars += s
    update_row(session, row)
    session.dirty += 1


def row_del_char(session: Session, row: Row, at: int) -> None:
    if at < 0 or at >= row.size:
        return
    row.chars = row.chars[:at] + row.chars[at + 1 :]
    update_row(session, row)
    session.dirty += 1


def insert_char_at(session: Session, row: int, col: int, c: str) -> None:
    if row < 0 or row > session.numrows:
        return
    if row == session.numrows:
        insert_row(session, session.numrows, "")
    row_insert_char(session, session.rows[row], col, c)


def delete_char_at(session: Session, row: int, col: int) -> tuple[int, int]:
    """Backspace at ``(row, col)``; returns where the cursor ends up.

    At column 0 the row is joined onto the previous one and the cursor lands
    at the previous row's length before the join.
    """
    if row < 0 or row >= session.numrows or col < 0:
        return row, col
    if col == 0 and row == 0:
        return row, col

    current = session.rows[row]
    if col > 0:
        col = min(col, current.size)
        row_del_char(session, current, col - 1)
        return row, col - 1

    prev = session.rows[row - 1]
    joined_at = prev.size
    row_append_string(session, prev, current.chars)
    del_row(session, row)
    return row - 1, joined_at


def split_line(session: Session, row: int, col: int) -> tuple[int, int]:
    if row < 0 or row > session.numrows:
        return row, col
    if row == session.numrows:
        insert_row(session, row, "")
        return row + 1, 0

    current = session.rows[row]
    col = max(0, min(col, current.size))
    if col == 0:
        insert_row(session, row, "")
    else:
        insert_row(session, row + 1, current.chars[col:])
        current.chars = current.chars[:col]
        update_row(session, current)
    return row + 1, 0


def insert_char(session: Session, c: str) -> None:
    if session.cy > session.numrows:
        return
    insert_char_at(session, session.cy, session.cx, c)
    session.cx += 1


def insert_newline(session: Session) -> None:
    session.cy, session.cx = split_line(session, session.cy, session.cx)


def del_char(session: Session) -> None:
    session.cy, session.cx = delete_char_at(session, session.cy, session.cx)


def rows_to_string(session: Session) -> str:
    return "".join(f"{row.chars}\n" for row in session.rows)

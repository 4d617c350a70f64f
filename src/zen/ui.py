from __future__ import annotations

import os

from .constants import (
    ANSI_CLEAR_LINE,
    ANSI_CLEAR_SCREEN,
    ANSI_CURSOR_HOME,
    ANSI_DEFAULT_FG,
    ANSI_HIDE_CURSOR,
    ANSI_INVERT_OFF,
    ANSI_INVERT_ON,
    ANSI_SHOW_CURSOR,
    HL_NORMAL,
    ZEN_VERSION,
)
from .models import Session
from .syntax import syntax_to_color
from .viewport import Frame, frame


def draw_welcome(session: Session, out: list[str]) -> None:
    welcome = f"Zen editor -- version {ZEN_VERSION}"[: session.screencols]
    padding = (session.screencols - len(welcome)) // 2
    if padding:
        out.append("~")
        padding -= 1
    if padding > 0:
        out.append(" " * padding)
    out.append(welcome)


def draw_row(cells: list[tuple[str, int]], out: list[str]) -> None:
    current_color = -1
    for ch, hl in cells:
        if ord(ch) < 32 or ord(ch) == 127:
            sym = chr(ord("@") + ord(ch)) if ord(ch) <= 26 else "?"
            out.append(ANSI_INVERT_ON + sym + ANSI_INVERT_OFF)
            if current_color != -1:
                out.append(f"\x1b[{current_color}m")
        elif hl == HL_NORMAL:
            if current_color != -1:
                out.append(ANSI_DEFAULT_FG)
                current_color = -1
            out.append(ch)
        else:
            color = syntax_to_color(hl)
            if color != current_color:
                out.append(f"\x1b[{color}m")
                current_color = color
            out.append(ch)
    out.append(ANSI_DEFAULT_FG)


def draw_rows(session: Session, view: Frame, out: list[str]) -> None:
    for y, cells in enumerate(view.rows):
        if cells is not None:
            draw_row(cells, out)
        elif session.numrows == 0 and y == session.screenrows // 3:
            draw_welcome(session, out)
        else:
            out.append("~")
        out.append(ANSI_CLEAR_LINE)
        out.append("\r\n")


def draw_status_bar(session: Session, view: Frame, out: list[str]) -> None:
    status = view.status[: session.screencols]
    out.append(ANSI_INVERT_ON)
    out.append(status)
    fill = len(status)
    while fill < session.screencols:
        if session.screencols - fill == len(view.rstatus):
            out.append(view.rstatus)
            break
        out.append(" ")
        fill += 1
    out.append(ANSI_INVERT_OFF)
    out.append("\r\n")


def draw_message_bar(session: Session, view: Frame, out: list[str]) -> None:
    out.append(ANSI_CLEAR_LINE)
    out.append(view.message[: session.screencols])


def build_screen(session: Session, now: float | None = None) -> str:
    view = frame(session, now)
    out: list[str] = [ANSI_HIDE_CURSOR, ANSI_CURSOR_HOME]
    draw_rows(session, view, out)
    draw_status_bar(session, view, out)
    draw_message_bar(session, view, out)
    row, col = view.cursor
    out.append(f"\x1b[{row + 1};{col + 1}H")
    out.append(ANSI_SHOW_CURSOR)
    return "".join(out)


def refresh_screen(session: Session, fd: int) -> None:
    os.write(fd, build_screen(session).encode("latin-1", errors="replace"))


def clear_screen(fd: int) -> None:
    os.write(fd, (ANSI_CLEAR_SCREEN + ANSI_CURSOR_HOME).encode())

from __future__ import annotations

import time
from dataclasses import dataclass, field


@dataclass(slots=True)
class EditorSyntax:
    filetype: str
    filematch: tuple[str, ...]
    keywords: tuple[str, ...]
    singleline_comment_start: str
    multiline_comment_start: str
    multiline_comment_end: str
    flags: int


@dataclass(slots=True)
class Row:
    """One line of the document.

    ``chars`` holds one code point per file byte. ``render`` and ``hl`` are
    derived from it and rebuilt together by :func:`zen.rows.update_row`.
    """

    idx: int
    chars: str
    render: str = ""
    hl: list[int] = field(default_factory=list)
    hl_open_comment: bool = False

    @property
    def size(self) -> int:
        return len(self.chars)

    @property
    def rsize(self) -> int:
        return len(self.render)


@dataclass(slots=True)
class SearchSnapshot:
    cx: int
    cy: int
    coloff: int
    rowoff: int


@dataclass(slots=True)
class Session:
    cx: int = 0
    cy: int = 0
    rx: int = 0
    rowoff: int = 0
    coloff: int = 0
    screenrows: int = 0
    screencols: int = 0
    rows: list[Row] = field(default_factory=list)
    dirty: int = 0
    filename: str | None = None
    statusmsg: str = ""
    statusmsg_time: float = 0.0
    syntax: EditorSyntax | None = None

    @property
    def numrows(self) -> int:
        return len(self.rows)

    @property
    def current_row(self) -> Row | None:
        if 0 <= self.cy < len(self.rows):
            return self.rows[self.cy]
        return None

    def set_status_message(self, fmt: str, *args: object) -> None:
        self.statusmsg = fmt % args if args else fmt
        self.statusmsg_time = time.time()

    def snapshot(self) -> SearchSnapshot:
        return SearchSnapshot(self.cx, self.cy, self.coloff, self.rowoff)

    def restore(self, saved: SearchSnapshot) -> None:
        self.cx = saved.cx
        self.cy = saved.cy
        self.coloff = saved.coloff
        self.rowoff = saved.rowoff

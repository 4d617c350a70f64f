from __future__ import annotations

import logging

from .constants import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    ENTER,
    HL_MATCH,
    PROMPT_ACCEPT,
    PROMPT_CANCEL,
)
from .models import Session
from .prompt import Prompt
from .rows import row_rx_to_cx

logger = logging.getLogger(__name__)


class SearchController:
    """Incremental search driven by one :meth:`step` call per key.

    The cursor and viewport are captured on creation so Escape can put them
    back. A match is shown by overlaying ``HL_MATCH`` on the row's highlight
    array; the original array is kept aside and restored before every step.
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self.prompt = Prompt("Search: %s (Use ESC/Arrows/Enter)")
        self.saved = session.snapshot()
        self.last_match = -1
        self.direction = 1
        self.saved_hl_line = -1
        self.saved_hl: list[int] | None = None
        session.set_status_message(self.prompt.message())

    @property
    def query(self) -> str:
        return self.prompt.buf

    def restore_highlight(self) -> None:
        rows = self.session.rows
        if self.saved_hl is not None and 0 <= self.saved_hl_line < len(rows):
            rows[self.saved_hl_line].hl = self.saved_hl
        self.saved_hl = None
        self.saved_hl_line = -1

    def step(self, key: int) -> bool:
        """Advance the search with ``key``; returns True once the search is over."""
        session = self.session
        outcome = self.prompt.feed(key)
        self.restore_highlight()

        if outcome in (PROMPT_ACCEPT, PROMPT_CANCEL):
            self.last_match = -1
            self.direction = 1
            if outcome == PROMPT_CANCEL:
                session.restore(self.saved)
            session.set_status_message("")
            return True

        session.set_status_message(self.prompt.message())
        if key in (ARROW_RIGHT, ARROW_DOWN):
            self.direction = 1
        elif key in (ARROW_LEFT, ARROW_UP):
            self.direction = -1
        else:
            self.last_match = -1
            self.direction = 1

        if key == ENTER or not self.query:
            return False
        self.find_next()
        return False

    def find_next(self) -> bool:
        session = self.session
        query = self.query
        if self.last_match == -1:
            self.direction = 1

        current = self.last_match
        for _ in range(session.numrows):
            current += self.direction
            if current == -1:
                current = session.numrows - 1
            elif current == session.numrows:
                current = 0

            row = session.rows[current]
            offset = row.render.find(query)
            if offset == -1:
                continue

            self.last_match = current
            session.cy = current
            session.cx = row_rx_to_cx(row, offset)
            session.rowoff = session.numrows

            self.saved_hl_line = current
            self.saved_hl = row.hl.copy()
            end = min(offset + len(query), row.rsize)
            row.hl[offset:end] = [HL_MATCH] * (end - offset)
            logger.debug("search %r matched row %d at %d", query, current, offset)
            return True
        return False

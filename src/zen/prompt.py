from __future__ import annotations

from dataclasses import dataclass

from .constants import (
    BACKSPACE,
    CTRL_H,
    DEL_KEY,
    ENTER,
    ESC,
    PROMPT_ACCEPT,
    PROMPT_CANCEL,
    PROMPT_CONTINUE,
    QUERY_LEN,
)


@dataclass(slots=True)
class Prompt:
    """Single-line input read one key at a time from the message bar."""

    template: str
    buf: str = ""

    def message(self) -> str:
        return self.template % self.buf

    def feed(self, key: int) -> int:
        if key in (BACKSPACE, CTRL_H, DEL_KEY):
            self.buf = self.buf[:-1]
        elif key == ESC:
            return PROMPT_CANCEL
        elif key == ENTER:
            if self.buf:
                return PROMPT_ACCEPT
        elif 32 <= key <= 126 and len(self.buf) < QUERY_LEN:
            self.buf += chr(key)
        return PROMPT_CONTINUE

from __future__ import annotations

import argparse
import errno
import logging
import os
import signal
import sys
from functools import partial
from typing import Callable

from .constants import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    BACKSPACE,
    CTRL_F,
    CTRL_H,
    CTRL_L,
    CTRL_Q,
    CTRL_S,
    DEL_KEY,
    END_KEY,
    ENTER,
    ESC,
    HOME_KEY,
    PAGE_DOWN,
    PAGE_UP,
    PROMPT_ACCEPT,
    PROMPT_CANCEL,
    QUIT_TIMES,
    ZEN_VERSION,
)
from .fileio import open_file, save
from .log import setup_logging
from .models import Session
from .prompt import Prompt
from .rows import del_char, insert_char, insert_newline
from .search import SearchController
from .syntax import select_syntax_highlight
from .terminal import RawMode, get_window_size, read_key
from .ui import clear_screen, refresh_screen
from .viewport import move_cursor, move_end, move_home, page

logger = logging.getLogger(__name__)

HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find"


class Editor:
    """One editing session: owns the :class:`Session` and routes keys into it.

    While a search or a save-as prompt is open, every key goes to it instead
    of the normal key handlers.
    """

    def __init__(self, session: Session | None = None, stdin_fd: int = 0, stdout_fd: int = 1) -> None:
        self.session = session if session is not None else Session()
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self.quit_times = QUIT_TIMES
        self.search: SearchController | None = None
        self.save_prompt: Prompt | None = None

        s = self.session
        self.key_handlers: dict[int, Callable[[], None]] = {
            CTRL_S: self.save,
            CTRL_F: self.find,
            CTRL_L: self._noop,
            ESC: self._noop,
            ENTER: partial(insert_newline, s),
            BACKSPACE: partial(del_char, s),
            CTRL_H: partial(del_char, s),
            DEL_KEY: self.delete_forward,
            HOME_KEY: partial(move_home, s),
            END_KEY: partial(move_end, s),
            PAGE_UP: partial(page, s, PAGE_UP),
            PAGE_DOWN: partial(page, s, PAGE_DOWN),
            ARROW_UP: partial(move_cursor, s, ARROW_UP),
            ARROW_DOWN: partial(move_cursor, s, ARROW_DOWN),
            ARROW_LEFT: partial(move_cursor, s, ARROW_LEFT),
            ARROW_RIGHT: partial(move_cursor, s, ARROW_RIGHT),
        }

    def update_window_size(self) -> None:
        try:
            rows, cols = get_window_size(self.stdin_fd, self.stdout_fd)
        except OSError as exc:
            raise OSError(exc.errno, "Unable to query screen size") from exc
        # Two rows are taken by the status bar and the message bar.
        self.session.screenrows = max(1, rows - 2)
        self.session.screencols = max(1, cols)
        logger.debug("screen is %dx%d", self.session.screencols, self.session.screenrows)

    def handle_sigwinch(self, _signum: int, _frame) -> None:
        self.update_window_size()
        self.refresh_screen()

    def refresh_screen(self) -> None:
        refresh_screen(self.session, self.stdout_fd)

    def _noop(self) -> None:
        return

    def delete_forward(self) -> None:
        move_cursor(self.session, ARROW_RIGHT)
        del_char(self.session)

    def find(self) -> None:
        self.search = SearchController(self.session)

    def save(self) -> None:
        if self.session.filename:
            save(self.session)
            return
        self.save_prompt = Prompt("Save as: %s (ESC to cancel)")
        self.session.set_status_message(self.save_prompt.message())

    def _step_save_prompt(self, key: int) -> None:
        prompt = self.save_prompt
        outcome = prompt.feed(key)
        if outcome == PROMPT_CANCEL:
            self.save_prompt = None
            self.session.set_status_message("Save aborted")
        elif outcome == PROMPT_ACCEPT:
            self.save_prompt = None
            self.session.filename = prompt.buf
            select_syntax_highlight(self.session, prompt.buf)
            save(self.session)
        else:
            self.session.set_status_message(prompt.message())

    def process_key(self, key: int) -> bool:
        """Apply one key to the session; returns True when the editor should exit."""
        logger.debug("key %d", key)
        if self.search is not None:
            if self.search.step(key):
                self.search = None
            return False
        if self.save_prompt is not None:
            self._step_save_prompt(key)
            return False

        if key == CTRL_Q:
            if self.session.dirty and self.quit_times > 0:
                self.session.set_status_message(
                    "WARNING!!! File has unsaved changes. Press Ctrl-Q %d more times to quit.",
                    self.quit_times,
                )
                self.quit_times -= 1
                return False
            return True

        handler = self.key_handlers.get(key)
        if handler is not None:
            handler()
        elif 0 <= key < 256:
            insert_char(self.session, chr(key))

        self.quit_times = QUIT_TIMES
        return False

    def process_keypress(self) -> bool:
        return self.process_key(read_key(self.stdin_fd))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="zen", description="A small terminal text editor.")
    parser.add_argument("filename", nargs="?", help="file to edit")
    parser.add_argument("--log-file", help="write a debug log to this file (default: $ZEN_LOG)")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="log level for --log-file",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {ZEN_VERSION}")
    return parser


def run(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_file, args.log_level)

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not os.isatty(stdin_fd) or not os.isatty(stdout_fd):
        print("zen: stdin/stdout must be a tty", file=sys.stderr)
        return 1

    editor = Editor(stdin_fd=stdin_fd, stdout_fd=stdout_fd)
    if args.filename:
        try:
            open_file(editor.session, args.filename)
        except OSError as exc:
            logger.error("%s", exc)
            print(f"zen: {exc.strerror}: {os.strerror(exc.errno or errno.EIO)}", file=sys.stderr)
            return 1

    try:
        with RawMode(stdin_fd):
            editor.update_window_size()
            signal.signal(signal.SIGWINCH, editor.handle_sigwinch)
            editor.session.set_status_message(HELP_MESSAGE)
            while True:
                editor.refresh_screen()
                if editor.process_keypress():
                    break
            clear_screen(stdout_fd)
    except OSError as exc:
        if exc.errno == errno.ENOTTY:
            print("zen: stdin is not a tty", file=sys.stderr)
            return 1
        logger.exception("terminal error")
        print(f"zen: {exc}", file=sys.stderr)
        return 1
    return 0

from __future__ import annotations

import errno
import logging
import os
from typing import BinaryIO

from .models import Session
from .rows import insert_row, rows_to_string
from .syntax import select_syntax_highlight

logger = logging.getLogger(__name__)


def _to_bytes(text: str) -> bytes:
    # Rows hold one code point per byte, so latin-1 round-trips exactly.
    return text.encode("latin-1", errors="replace")


def load_stream(session: Session, stream: BinaryIO) -> None:
    for line in stream:
        insert_row(session, session.numrows, line.rstrip(b"\r\n").decode("latin-1"))
    session.dirty = 0


def open_file(session: Session, filename: str) -> None:
    """Load ``filename`` into an empty session.

    A missing file starts an empty document that will be created on save.
    Any other failure raises ``OSError``.
    """
    session.filename = filename
    select_syntax_highlight(session, filename)
    try:
        with open(filename, "rb") as f:
            load_stream(session, f)
    except FileNotFoundError:
        logger.info("new file %s", filename)
        session.dirty = 0
        return
    except OSError as exc:
        raise OSError(exc.errno, f"Opening file failed: {filename}") from exc
    logger.info("opened %s (%d lines)", filename, session.numrows)


def serialize(session: Session) -> bytes:
    return _to_bytes(rows_to_string(session))


def write_stream(session: Session, stream: BinaryIO) -> int:
    data = serialize(session)
    stream.write(data)
    return len(data)


def save(session: Session) -> bool:
    if not session.filename:
        session.set_status_message("Can't save! No filename.")
        return False

    data = serialize(session)
    fd = -1
    try:
        fd = os.open(session.filename, os.O_RDWR | os.O_CREAT, 0o644)
        os.ftruncate(fd, len(data))
        written = 0
        while written < len(data):
            n = os.write(fd, data[written:])
            if n <= 0:
                raise OSError(errno.EIO, "short write")
            written += n
    except OSError as exc:
        logger.warning("saving %s failed: %s", session.filename, exc)
        session.set_status_message(
            "Can't save! I/O error: %s", os.strerror(exc.errno or errno.EIO)
        )
        return False
    finally:
        if fd != -1:
            os.close(fd)

    session.dirty = 0
    session.set_status_message("%d bytes written to disk", len(data))
    logger.info("wrote %d bytes to %s", len(data), session.filename)
    return True

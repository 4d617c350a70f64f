from __future__ import annotations

import logging

from .constants import (
    C_HL_EXTENSIONS,
    C_HL_KEYWORDS,
    HL_COMMENT,
    HL_HIGHLIGHT_NUMBERS,
    HL_HIGHLIGHT_STRINGS,
    HL_KEYWORD,
    HL_MATCH,
    HL_MLCOMMENT,
    HL_NORMAL,
    HL_NUMBER,
    HL_STRING,
    HL_TYPE,
    PY_HL_EXTENSIONS,
    PY_HL_KEYWORDS,
    SEPARATORS,
)
from .models import EditorSyntax, Session

logger = logging.getLogger(__name__)


HLDB: tuple[EditorSyntax, ...] = (
    EditorSyntax(
        filetype="c",
        filematch=C_HL_EXTENSIONS,
        keywords=C_HL_KEYWORDS,
        singleline_comment_start="//",
        multiline_comment_start="/*",
        multiline_comment_end="*/",
        flags=HL_HIGHLIGHT_NUMBERS | HL_HIGHLIGHT_STRINGS,
    ),
    EditorSyntax(
        filetype="python",
        filematch=PY_HL_EXTENSIONS,
        keywords=PY_HL_KEYWORDS,
        singleline_comment_start="#",
        multiline_comment_start="",
        multiline_comment_end="",
        flags=HL_HIGHLIGHT_NUMBERS | HL_HIGHLIGHT_STRINGS,
    ),
)


def is_separator(c: str) -> bool:
    return not c or c == "\0" or c.isspace() or c in SEPARATORS


def syntax_to_color(hl: int) -> int:
    if hl in (HL_COMMENT, HL_MLCOMMENT):
        return 36
    if hl == HL_KEYWORD:
        return 33
    if hl == HL_TYPE:
        return 32
    if hl == HL_STRING:
        return 35
    if hl == HL_NUMBER:
        return 31
    if hl == HL_MATCH:
        return 34
    return 37


def find_syntax(filename: str) -> EditorSyntax | None:
    for syntax in HLDB:
        for pattern in syntax.filematch:
            if pattern.startswith("."):
                if filename.endswith(pattern):
                    return syntax
            elif pattern in filename:
                return syntax
    return None


def select_syntax_highlight(session: Session, filename: str | None) -> None:
    session.syntax = find_syntax(filename) if filename else None
    logger.debug(
        "syntax for %r: %s",
        filename,
        session.syntax.filetype if session.syntax else "none",
    )
    for row in session.rows:
        update_syntax(session, row.idx)


def _match_keyword(render: str, i: int, keywords: tuple[str, ...]) -> tuple[int, int]:
    for kw in keywords:
        is_type = kw.endswith("|")
        token = kw[:-1] if is_type else kw
        end = i + len(token)
        if render.startswith(token, i) and is_separator(render[end : end + 1]):
            return len(token), HL_TYPE if is_type else HL_KEYWORD
    return 0, HL_NORMAL


def classify_line(
    render: str, syntax: EditorSyntax | None, in_comment: bool = False
) -> tuple[list[int], bool]:
    """Classify every character of ``render`` in a single left-to-right scan.

    Returns the highlight array and whether the line ends inside an open
    multi-line comment. Numeric state never carries over from the previous line;
    only the comment state passed in as ``in_comment`` does.
    """
    n = len(render)
    hl = [HL_NORMAL] * n
    if syntax is None:
        return hl, False

    scs = syntax.singleline_comment_start
    mcs = syntax.multiline_comment_start
    mce = syntax.multiline_comment_end

    prev_sep = True
    in_string = ""
    i = 0
    while i < n:
        ch = render[i]
        prev_hl = hl[i - 1] if i > 0 else HL_NORMAL

        if scs and not in_string and not in_comment and render.startswith(scs, i):
            hl[i:] = [HL_COMMENT] * (n - i)
            break

        if mcs and mce and not in_string:
            if in_comment:
                hl[i] = HL_MLCOMMENT
                if render.startswith(mce, i):
                    hl[i : i + len(mce)] = [HL_MLCOMMENT] * len(mce)
                    i += len(mce)
                    in_comment = False
                    prev_sep = True
                    continue
                i += 1
                continue
            if render.startswith(mcs, i):
                hl[i : i + len(mcs)] = [HL_MLCOMMENT] * len(mcs)
                i += len(mcs)
                in_comment = True
                continue

        if syntax.flags & HL_HIGHLIGHT_STRINGS:
            if in_string:
                hl[i] = HL_STRING
                if ch == "\\" and i + 1 < n:
                    hl[i + 1] = HL_STRING
                    i += 2
                    continue
                if ch == in_string:
                    in_string = ""
                i += 1
                prev_sep = True
                continue
            if ch in ('"', "'"):
                in_string = ch
                hl[i] = HL_STRING
                i += 1
                continue

        if syntax.flags & HL_HIGHLIGHT_NUMBERS:
            # A single non-number character right after a number run is a boundary.
            after_number = i > 1 and hl[i - 2] == HL_NUMBER
            if (ch.isdigit() and (prev_sep or prev_hl == HL_NUMBER or after_number)) or (
                ch == "." and prev_hl == HL_NUMBER
            ):
                hl[i] = HL_NUMBER
                i += 1
                prev_sep = False
                continue

        if prev_sep:
            klen, mark = _match_keyword(render, i, syntax.keywords)
            if klen:
                hl[i : i + klen] = [mark] * klen
                i += klen
                prev_sep = False
                continue

        prev_sep = is_separator(ch)
        i += 1

    return hl, in_comment


def classify(render: str, syntax: EditorSyntax | None, in_comment: bool = False) -> list[int]:
    return classify_line(render, syntax, in_comment)[0]


def update_syntax(session: Session, idx: int) -> None:
    """Re-highlight row ``idx`` and any following rows whose comment state changes."""
    while 0 <= idx < session.numrows:
        row = session.rows[idx]
        in_comment = idx > 0 and session.rows[idx - 1].hl_open_comment
        row.hl, open_comment = classify_line(row.render, session.syntax, in_comment)
        if row.hl_open_comment == open_comment:
            return
        row.hl_open_comment = open_comment
        idx += 1

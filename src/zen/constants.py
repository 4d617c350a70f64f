from __future__ import annotations

ZEN_VERSION = "0.1.0"
TAB_STOP = 4
QUERY_LEN = 256
QUIT_TIMES = 3
STATUS_MSG_TIMEOUT = 5

# Highlight classes.
HL_NORMAL = 0
HL_COMMENT = 1
HL_MLCOMMENT = 2
HL_KEYWORD = 3
HL_TYPE = 4
HL_STRING = 5
HL_NUMBER = 6
HL_MATCH = 7

HL_HIGHLIGHT_NUMBERS = 1 << 0
HL_HIGHLIGHT_STRINGS = 1 << 1

SEPARATORS = ",.()+-/*=~%<>[];"


def ctrl(ch: str) -> int:
    return ord(ch.upper()) & 0x1F


# Key codes. Values below 256 are raw bytes.
CTRL_F = ctrl("f")
CTRL_H = ctrl("h")
CTRL_L = ctrl("l")
CTRL_Q = ctrl("q")
CTRL_S = ctrl("s")
TAB = 9
ENTER = 13
ESC = 27
BACKSPACE = 127

ARROW_LEFT = 1000
ARROW_RIGHT = 1001
ARROW_UP = 1002
ARROW_DOWN = 1003
DEL_KEY = 1004
HOME_KEY = 1005
END_KEY = 1006
PAGE_UP = 1007
PAGE_DOWN = 1008

CSI_SIMPLE_MAP = {
    ord("A"): ARROW_UP,
    ord("B"): ARROW_DOWN,
    ord("C"): ARROW_RIGHT,
    ord("D"): ARROW_LEFT,
    ord("H"): HOME_KEY,
    ord("F"): END_KEY,
}
CSI_TILDE_MAP = {
    ord("1"): HOME_KEY,
    ord("3"): DEL_KEY,
    ord("4"): END_KEY,
    ord("5"): PAGE_UP,
    ord("6"): PAGE_DOWN,
    ord("7"): HOME_KEY,
    ord("8"): END_KEY,
}
SS3_SIMPLE_MAP = {
    ord("H"): HOME_KEY,
    ord("F"): END_KEY,
}

# Prompt outcomes.
PROMPT_CONTINUE = 0
PROMPT_CANCEL = 1
PROMPT_ACCEPT = 2

ANSI_HIDE_CURSOR = "\x1b[?25l"
ANSI_SHOW_CURSOR = "\x1b[?25h"
ANSI_CURSOR_HOME = "\x1b[H"
ANSI_CLEAR_SCREEN = "\x1b[2J"
ANSI_CLEAR_LINE = "\x1b[K"
ANSI_INVERT_ON = "\x1b[7m"
ANSI_INVERT_OFF = "\x1b[m"
ANSI_DEFAULT_FG = "\x1b[39m"

C_HL_EXTENSIONS = (".c", ".h", ".cpp", ".hpp", ".cc")
# Entries ending in "|" are types.
C_HL_KEYWORDS = (
    "switch",
    "if",
    "while",
    "for",
    "break",
    "continue",
    "return",
    "else",
    "struct",
    "union",
    "typedef",
    "static",
    "enum",
    "class",
    "case",
    "default",
    "goto",
    "sizeof",
    "extern",
    "volatile",
    "do",
    "NULL",
    "int|",
    "long|",
    "double|",
    "float|",
    "char|",
    "unsigned|",
    "signed|",
    "void|",
    "short|",
    "const|",
    "bool|",
    "size_t|",
)

PY_HL_EXTENSIONS = (".py", ".pyw")
PY_HL_KEYWORDS = (
    "and",
    "as",
    "assert",
    "async",
    "await",
    "break",
    "class",
    "continue",
    "def",
    "del",
    "elif",
    "else",
    "except",
    "finally",
    "for",
    "from",
    "global",
    "if",
    "import",
    "in",
    "is",
    "lambda",
    "nonlocal",
    "not",
    "or",
    "pass",
    "raise",
    "return",
    "try",
    "while",
    "with",
    "yield",
    "None|",
    "True|",
    "False|",
    "int|",
    "float|",
    "str|",
    "bytes|",
    "bool|",
    "list|",
    "dict|",
    "set|",
    "tuple|",
    "self|",
)

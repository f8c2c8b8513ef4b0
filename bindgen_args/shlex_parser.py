"""Shell-like lexer for splitting clang argument strings."""

import enum
import re
from dataclasses import dataclass


class QuoteState(enum.Enum):
    """How the next scanned character is interpreted."""

    UNQUOTED = enum.auto()
    IN_SINGLE_QUOTE = enum.auto()
    IN_DOUBLE_QUOTE = enum.auto()


# Quote character -> state it opens (and closes)
QUOTES = {
    '"': QuoteState.IN_DOUBLE_QUOTE,
    "'": QuoteState.IN_SINGLE_QUOTE,
}

ESCAPES = (
    ('\\"', '"'),
    ("\\'", "'"),
    ("\\ ", " "),
    ("\\\\", "\\"),
)

ESCAPABLE = frozenset(pattern[1] for pattern, _ in ESCAPES)

_ESCAPE_RE = re.compile("|".join(re.escape(pattern) for pattern, _ in ESCAPES))
_REPLACEMENTS = dict(ESCAPES)


@dataclass
class Span:
    """A raw slice of the input contributing to the current token."""

    start: int
    end: int
    quoted: bool


def resolve_escapes(text: str) -> str:
    """Replace escape pairs in a single left-to-right pass."""
    return _ESCAPE_RE.sub(lambda m: _REPLACEMENTS[m.group(0)], text)


def _is_escape(last: str, c: str, i: int, length: int) -> bool:
    if last != "\\" or c not in ESCAPABLE:
        return False
    # The padding space at the end is never escaped
    return c != " " or i < length


def _assemble(line: str, spans: list[Span]) -> str:
    """Join the spans of one token, trimming unquoted whitespace at its edges."""
    pieces = [[line[span.start : span.end], span.quoted] for span in spans]

    for piece in pieces:
        if piece[1]:
            break
        piece[0] = piece[0].lstrip()
        if piece[0]:
            break

    for piece in reversed(pieces):
        if piece[1]:
            break
        piece[0] = piece[0].rstrip()
        if piece[0]:
            break

    raw = "".join(text for text, _ in pieces)
    return resolve_escapes(raw) if raw else ""


def tokenize(line: str) -> list[str]:
    """
    Split an argument string into tokens.

    Rules:
    - Unquoted spaces separate tokens
    - Single quotes (') and double quotes (") group text, spaces included
    - A quote of the other kind inside a quoted region is literal
    - Quotes are removed, adjacent fragments join into one token
    - Backslash escapes a quote, a space or another backslash; before any
      other character it is kept as-is

    Malformed input never raises: an unterminated quote keeps the text
    collected so far, and a trailing lone backslash stays in the token.

    Args:
        line: The string to split

    Returns:
        List of tokens, never containing an empty string
    """
    line = line.strip()
    length = len(line)

    tokens = []
    spans: list[Span] = []
    state = QuoteState.UNQUOTED
    start = 0
    last = " "

    # The extra space flushes the final token
    for i, c in enumerate(line + " "):
        if _is_escape(last, c, i, length):
            pass
        elif c in QUOTES and state in (QuoteState.UNQUOTED, QUOTES[c]):
            spans.append(Span(start, i, state is not QuoteState.UNQUOTED))
            if state is QuoteState.UNQUOTED:
                state = QUOTES[c]
            else:
                state = QuoteState.UNQUOTED
            start = i + 1
        elif c == " " and (state is QuoteState.UNQUOTED or i >= length):
            spans.append(Span(start, i, state is not QuoteState.UNQUOTED))
            token = _assemble(line, spans)
            if token:
                tokens.append(token)
            spans = []
            start = i + 1
        last = c

    return tokens

#!/usr/bin/env python3
# tokenizer.py - split one input line into argument tokens (quotes + escapes)
from __future__ import annotations

from typing import NamedTuple, Optional

SINGLE_QUOTE = "'"
DOUBLE_QUOTE = '"'
BACKSLASH = "\\"

# characters a backslash may escape (outside single quotes)
ESCAPABLE = (DOUBLE_QUOTE, BACKSLASH)
# tab as well as space, so whitespace-only lines never yield a token
SEPARATORS = (" ", "\t")


class Command(NamedTuple):
    executable: str
    arguments: tuple = ()


def tokenize(raw: str) -> list[str]:
    """Break a line into words.

    Single quotes keep everything literal, double quotes keep whitespace and
    single quotes literal, and a backslash outside single quotes escapes a
    following double quote or backslash. An unterminated quote runs to the
    end of the line.
    """
    tokens = []
    cur = []
    in_single = False
    in_double = False

    i = 0
    n = len(raw)
    while i < n:
        ch = raw[i]
        if ch == SINGLE_QUOTE and not in_double:
            in_single = not in_single
        elif ch == DOUBLE_QUOTE and not in_single:
            in_double = not in_double
        elif ch == BACKSLASH and not in_single and i + 1 < n and raw[i + 1] in ESCAPABLE:
            i += 1
            cur.append(raw[i])
        elif ch in SEPARATORS and not (in_single or in_double):
            if cur:
                tokens.append("".join(cur))
                cur = []
        else:
            cur.append(ch)
        i += 1

    if cur:
        tokens.append("".join(cur))
    return tokens


def parse_command(raw: str) -> Optional[Command]:
    """Tokenize `raw` into a Command, or None for a blank line."""
    tokens = tokenize(raw)
    if not tokens:
        return None
    return Command(tokens[0], tuple(tokens[1:]))

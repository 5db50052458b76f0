# render.py
# Scalar quoting and indentation for the workflow YAML we emit by hand.
# Every user supplied value goes through wrap() before it lands in a document.
from __future__ import annotations

import re
from typing import Iterable

# Characters that change the meaning of a plain scalar when they lead it.
INDICATOR_CHARS = frozenset("!*-?{}[],|>@`'\"&")

_BLANK_LINE = re.compile(r"^[ ]+$", re.MULTILINE)


def indent(output: str, level: int) -> str:
    """
    Prefix every line of `output` with `level * 2` spaces.

    Lines that end up holding nothing but the indentation are emptied again,
    so blank separators survive without trailing whitespace.
    """
    space = " " * (level * 2)
    indented = space + output.replace("\n", "\n" + space)
    return _BLANK_LINE.sub("", indented)


def is_safe_string(s: str) -> bool:
    """
    True when `s` can be emitted as a plain scalar.

    Colons and `#` are rejected anywhere in the string, indicator
    characters only in the leading position.
    """
    if ":" in s or "#" in s:
        return False
    return not (s and s[0] in INDICATOR_CHARS)


def wrap(s: str) -> str:
    if "\n" in s:
        return "|\n" + indent(s, 1)
    if is_safe_string(s):
        return s
    return "'" + s.replace("'", "''") + "'"


def compile_list(items: Iterable[str]) -> str:
    return "\n".join("- " + wrap(item) for item in items)


def flow_list(items: Iterable[str]) -> str:
    """Render `items` as a single-line flow sequence, e.g. `[a, 'b:c']`."""
    return "[" + ", ".join(wrap(item) for item in items) + "]"

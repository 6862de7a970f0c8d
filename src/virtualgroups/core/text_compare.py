"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/text_compare.py
Pluggable strategies for comparing two strings.
A strategy is any callable (a, b) -> negative / 0 / positive. It is passed to the
comparers explicitly through GroupingParams, never installed globally.
"""
import locale
import re
from typing import Callable, Tuple

TextComparer = Callable[[str, str], int]

_DIGIT_RUNS = re.compile(r"(\d+)")


def _sign(left, right) -> int:
    return (left > right) - (left < right)


def casefold_compare(a: str, b: str) -> int:
    """Case-insensitive comparison (the default)."""
    return _sign(a.casefold(), b.casefold())


def locale_compare(a: str, b: str) -> int:
    """Case-insensitive comparison using the collation of the current locale."""
    return _sign(locale.strxfrm(a.casefold()), locale.strxfrm(b.casefold()))


def natural_key(text: str) -> Tuple[Tuple[int, object], ...]:
    """Split text so that digit runs compare numerically: "item2" < "item10"."""
    key = []
    for part in _DIGIT_RUNS.split(text.strip()):
        if not part:
            continue
        if part.isdigit():
            key.append((0, int(part)))
        else:
            key.append((1, part.casefold()))
    return tuple(key)


def natural_compare(a: str, b: str) -> int:
    """Case-insensitive natural ("human") ordering."""
    return _sign(natural_key(a), natural_key(b))

from __future__ import annotations

import re

from .errors import PatternSyntaxError


PATTERN_RE = re.compile(r"[0-9]+(?:-[0-9]+)*")


def parse_pattern(pattern: object) -> tuple[int, ...]:
    """
    Parse a row pattern such as "3-4-3" into its seat group sizes (3, 4, 3).

    Every group must be a positive integer; anything else raises PatternSyntaxError.
    """
    if not isinstance(pattern, str) or not PATTERN_RE.fullmatch(pattern):
        raise PatternSyntaxError(f"invalid seat pattern: {pattern!r} (e.g. 2-2-2, 3-4-3)")
    groups = tuple(int(g) for g in pattern.split("-"))
    if any(g <= 0 for g in groups):
        raise PatternSyntaxError(f"seat groups must be positive: {pattern!r}")
    return groups


def seats_per_row(pattern: object) -> int:
    return sum(parse_pattern(pattern))

from __future__ import annotations


class LayoutError(Exception):
    pass


class PatternSyntaxError(LayoutError, ValueError):
    pass


class SpaceRowMismatchError(LayoutError, ValueError):
    pass


class InvalidLayoutError(LayoutError):
    pass

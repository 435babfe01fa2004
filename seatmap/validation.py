from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from .errors import PatternSyntaxError
from .pattern import seats_per_row
from .policy import AIRCRAFT_POLICY, LayoutPolicy
from .ranges import RowRange, check_overlaps
from .seats import MAX_ROW_SPAN, MAX_SEATS_PER_ROW, coerce_row
from .specs import SeatClassSpec, SpaceSpec


logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    MISSING_FIELD = "MissingField"
    INVALID_NUMBER = "InvalidNumber"
    PATTERN_SYNTAX = "PatternSyntax"
    SEATS_PER_ROW_EXCEEDED = "SeatsPerRowExceeded"
    ROW_BOUNDS_EXCEEDED = "RowBoundsExceeded"
    ROW_COUNT_EXCEEDED = "RowCountExceeded"
    RANGE_OVERLAP = "RangeOverlap"
    SPACE_ROW_MISMATCH = "SpaceRowMismatch"
    DUPLICATE_CLASS = "DuplicateClass"


SPACE_KEY_RE = re.compile(r"^space\d+$")


@dataclass(frozen=True)
class FieldError:
    code: ErrorCode
    message: str


@dataclass
class ValidationResult:
    field_errors: dict[str, FieldError] = field(default_factory=dict)
    global_errors: list[FieldError] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.field_errors and not self.global_errors

    def codes(self) -> set[ErrorCode]:
        return {e.code for e in self.field_errors.values()} | {e.code for e in self.global_errors}

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "fieldErrors": {k: e.message for k, e in self.field_errors.items()},
            "globalErrors": [e.message for e in self.global_errors],
        }


def _blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _check_rows(
    from_row: object,
    to_row: object,
    policy: LayoutPolicy,
) -> tuple[Optional[tuple[int, int]], Optional[FieldError]]:
    if _blank(from_row) or _blank(to_row):
        return None, FieldError(ErrorCode.MISSING_FIELD, "Row is required")
    start, end = coerce_row(from_row), coerce_row(to_row)
    if start is None or end is None or start < 1 or end < 1:
        return None, FieldError(ErrorCode.INVALID_NUMBER, "Row is not valid")
    if start > end:
        return None, FieldError(ErrorCode.INVALID_NUMBER, f"fromRow {start} is after toRow {end}")
    if end > policy.max_row_number:
        return None, FieldError(
            ErrorCode.ROW_BOUNDS_EXCEEDED,
            f"Rows {start}-{end} exceed the last row allowed for an {policy.entity} ({policy.max_row_number})",
        )
    if end - start + 1 > MAX_ROW_SPAN:
        return None, FieldError(
            ErrorCode.ROW_BOUNDS_EXCEEDED, f"Rows {start}-{end} span more than {MAX_ROW_SPAN} rows"
        )
    return (start, end), None


def _check_pattern(pattern: object, policy: LayoutPolicy) -> Optional[FieldError]:
    if not pattern:
        return FieldError(ErrorCode.MISSING_FIELD, "Pattern is required")
    try:
        per_row = seats_per_row(pattern)
    except PatternSyntaxError:
        return FieldError(ErrorCode.PATTERN_SYNTAX, "Pattern is not valid (EX: 2-2-2, 3-4-3)")
    # seat letters run out past Z whatever the policy allows
    limit = min(policy.max_seats_per_row, MAX_SEATS_PER_ROW)
    if per_row > limit:
        return FieldError(
            ErrorCode.SEATS_PER_ROW_EXCEEDED,
            f"Pattern {pattern} has {per_row} seats per row; the maximum is {limit}",
        )
    return None


def validate_configuration(
    seat_classes: Sequence[SeatClassSpec],
    spaces: Sequence[SpaceSpec],
    policy: LayoutPolicy = AIRCRAFT_POLICY,
) -> ValidationResult:
    """
    Validate a whole draft in one pass and report every problem found.

    Field errors are keyed "seatClass-<i>-<field>" / "space-<i>-<field>". The row
    budget is a global error and only counts ranges that passed their own checks.

    Any objects exposing the same attributes as the specs are accepted, so raw
    request bodies can be checked before SpaceSpec would reject them.
    """
    result = ValidationResult()
    candidates: list[RowRange] = []

    seen_names: set[str] = set()
    for i, sc in enumerate(seat_classes):
        name = (sc.class_name or "").strip()
        if not name:
            result.field_errors[f"seatClass-{i}-class"] = FieldError(ErrorCode.MISSING_FIELD, "Class is required")
        elif name in seen_names or SPACE_KEY_RE.match(name):
            # class names become layout keys
            result.field_errors[f"seatClass-{i}-class"] = FieldError(
                ErrorCode.DUPLICATE_CLASS, f"Class {name!r} is already used in this layout"
            )
        seen_names.add(name)
        pattern_error = _check_pattern(sc.pattern, policy)
        if pattern_error:
            result.field_errors[f"seatClass-{i}-pattern"] = pattern_error
        rows, rows_error = _check_rows(sc.from_row, sc.to_row, policy)
        if rows_error:
            result.field_errors[f"seatClass-{i}-rows"] = rows_error
        else:
            candidates.append(RowRange(rows[0], rows[1], "seatClass", i))

    for i, sp in enumerate(spaces):
        if not (sp.label or "").strip():
            result.field_errors[f"space-{i}-label"] = FieldError(ErrorCode.MISSING_FIELD, "Label of space is required")
        rows, rows_error = _check_rows(sp.from_row, sp.to_row, policy)
        if rows_error is None and rows[0] != rows[1]:
            rows_error = FieldError(ErrorCode.SPACE_ROW_MISMATCH, f"Space must occupy a single row, got {rows[0]}-{rows[1]}")
        if rows_error:
            result.field_errors[f"space-{i}-rows"] = rows_error
        else:
            candidates.append(RowRange(rows[0], rows[1], "space", i))

    conflicts, accepted = check_overlaps(candidates)
    for key, message in conflicts.items():
        result.field_errors[key] = FieldError(ErrorCode.RANGE_OVERLAP, message)

    total_rows = 0
    for r in accepted:
        total_rows += 1 if r.kind == "space" else r.rows
    if total_rows > policy.max_total_rows:
        result.global_errors.append(
            FieldError(
                ErrorCode.ROW_COUNT_EXCEEDED,
                f"Total rows ({total_rows}) exceed the maximum of {policy.max_total_rows} for an {policy.entity}",
            )
        )

    logger.debug(
        "validated %s draft: %d seat classes, %d spaces, %d rows, %d field errors, %d global errors",
        policy.entity,
        len(seat_classes),
        len(spaces),
        total_rows,
        len(result.field_errors),
        len(result.global_errors),
    )
    return result

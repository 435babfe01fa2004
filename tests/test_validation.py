import unittest
from types import SimpleNamespace

from seatmap.layout import default_draft
from seatmap.policy import AIRCRAFT_POLICY, LayoutPolicy
from seatmap.ranges import RowRange, check_overlaps, overlaps
from seatmap.specs import SeatClassSpec, SpaceSpec
from seatmap.validation import ErrorCode, validate_configuration


class TestOverlaps(unittest.TestCase):
    def test_symmetric(self):
        ranges = [
            RowRange(1, 2, "seatClass", 0),
            RowRange(2, 3, "seatClass", 1),
            RowRange(4, 4, "space", 0),
            RowRange(1, 10, "seatClass", 2),
            RowRange(5, 6, "seatClass", 3),
        ]
        for a in ranges:
            for b in ranges:
                self.assertEqual(overlaps(a, b), overlaps(b, a))

    def test_closed_intervals(self):
        self.assertTrue(overlaps(RowRange(1, 2, "seatClass", 0), RowRange(2, 3, "seatClass", 1)))
        self.assertFalse(overlaps(RowRange(1, 2, "seatClass", 0), RowRange(3, 4, "seatClass", 1)))
        # containment with no shared endpoint
        self.assertTrue(overlaps(RowRange(1, 10, "seatClass", 0), RowRange(4, 5, "space", 0)))

    def test_first_conflict_wins(self):
        a = RowRange(1, 5, "seatClass", 0)
        b = RowRange(6, 10, "seatClass", 1)
        c = RowRange(4, 8, "seatClass", 2)
        conflicts, accepted = check_overlaps([a, b, c])
        self.assertEqual(accepted, [a, b])
        self.assertEqual(list(conflicts), ["seatClass-2-rows"])
        self.assertIn("existing rows 1-5", conflicts["seatClass-2-rows"])


class TestValidateConfiguration(unittest.TestCase):
    def test_default_draft_is_valid(self):
        result = validate_configuration(*default_draft(), AIRCRAFT_POLICY)
        self.assertTrue(result.valid)
        self.assertEqual(result.to_dict(), {"valid": True, "fieldErrors": {}, "globalErrors": []})

    def test_overlapping_classes(self):
        result = validate_configuration(
            [SeatClassSpec("first", 1, 2, "1-1-1"), SeatClassSpec("business", 2, 3, "2-2-2")], []
        )
        self.assertFalse(result.valid)
        self.assertEqual(list(result.field_errors), ["seatClass-1-rows"])
        err = result.field_errors["seatClass-1-rows"]
        self.assertEqual(err.code, ErrorCode.RANGE_OVERLAP)
        self.assertIn("(row 2)", err.message)
        self.assertIn("seatClass 0", err.message)

    def test_space_overlapping_class(self):
        result = validate_configuration([SeatClassSpec("first", 1, 2, "1-1-1")], [SpaceSpec("galley", 2)])
        self.assertEqual(result.field_errors["space-0-rows"].code, ErrorCode.RANGE_OVERLAP)

    def test_seats_per_row_exceeded_regardless_of_rows(self):
        for rows in [(1, 3), (None, None), (30, 31)]:
            with self.subTest(rows=rows):
                result = validate_configuration([SeatClassSpec("economy", rows[0], rows[1], "4-5-4")], [])
                self.assertEqual(result.field_errors["seatClass-0-pattern"].code, ErrorCode.SEATS_PER_ROW_EXCEEDED)

    def test_seats_per_row_is_injected(self):
        sc = [SeatClassSpec("economy", 1, 3, "4-5-4")]
        self.assertTrue(validate_configuration(sc, [], LayoutPolicy(max_seats_per_row=13)).valid)

    def test_row_budget_is_single_global_error(self):
        seat_classes = [SeatClassSpec(f"c{i}", 3 * i + 1, 3 * i + 3, "2-2") for i in range(10)]
        result = validate_configuration(seat_classes, [], LayoutPolicy(max_row_number=40))
        self.assertEqual(result.field_errors, {})
        self.assertEqual(len(result.global_errors), 1)
        self.assertEqual(result.global_errors[0].code, ErrorCode.ROW_COUNT_EXCEEDED)
        self.assertIn("30", result.global_errors[0].message)

    def test_spaces_count_one_row_each(self):
        seat_classes = [SeatClassSpec("eco", 1, 19, "3-3")]
        self.assertTrue(validate_configuration(seat_classes, [SpaceSpec("galley", 20)]).valid)
        result = validate_configuration(
            seat_classes, [SpaceSpec("galley", 20), SpaceSpec("toilet", 21)], LayoutPolicy(max_row_number=30)
        )
        self.assertEqual(result.codes(), {ErrorCode.ROW_COUNT_EXCEEDED})

    def test_rejected_ranges_do_not_count_towards_budget(self):
        seat_classes = [
            SeatClassSpec("first", 1, 10, "2-2"),
            SeatClassSpec("business", 11, 18, "2-2"),
            SeatClassSpec("economy", 15, 25, "3-3"),  # past the last row
            SeatClassSpec("premium", 5, 12, "2-2"),  # overlaps
        ]
        result = validate_configuration(seat_classes, [])
        self.assertEqual(result.field_errors["seatClass-2-rows"].code, ErrorCode.ROW_BOUNDS_EXCEEDED)
        self.assertEqual(result.field_errors["seatClass-3-rows"].code, ErrorCode.RANGE_OVERLAP)
        self.assertEqual(result.global_errors, [])

    def test_required_fields(self):
        result = validate_configuration([SeatClassSpec("", 1, 2, "")], [SpaceSpec(" ", 3)])
        self.assertEqual(result.field_errors["seatClass-0-class"].code, ErrorCode.MISSING_FIELD)
        self.assertEqual(result.field_errors["seatClass-0-pattern"].code, ErrorCode.MISSING_FIELD)
        self.assertEqual(result.field_errors["space-0-label"].code, ErrorCode.MISSING_FIELD)
        self.assertNotIn("seatClass-0-rows", result.field_errors)

    def test_invalid_numbers(self):
        for rows in [("x", 2), (0, 2), (-1, 2), (5, 3), ("²", "3"), ("٣", 4)]:
            with self.subTest(rows=rows):
                result = validate_configuration([SeatClassSpec("eco", rows[0], rows[1], "3-3")], [])
                self.assertEqual(result.field_errors["seatClass-0-rows"].code, ErrorCode.INVALID_NUMBER)

    def test_missing_rows(self):
        for rows in [(None, 4), ("", 4), (1, "  ")]:
            with self.subTest(rows=rows):
                result = validate_configuration([SeatClassSpec("eco", rows[0], rows[1], "3-3")], [])
                self.assertEqual(result.field_errors["seatClass-0-rows"].code, ErrorCode.MISSING_FIELD)
        result = validate_configuration([], [SimpleNamespace(label="galley", from_row=None, to_row=None)])
        self.assertEqual(result.field_errors["space-0-rows"].code, ErrorCode.MISSING_FIELD)

    def test_non_ascii_pattern_digits(self):
        result = validate_configuration([SeatClassSpec("eco", 1, 1, "٣-٣")], [])
        self.assertEqual(result.field_errors["seatClass-0-pattern"].code, ErrorCode.PATTERN_SYNTAX)

    def test_seats_per_row_capped_at_letters(self):
        policy = LayoutPolicy(max_seats_per_row=40)
        result = validate_configuration([SeatClassSpec("eco", 1, 1, "9-9-9")], [], policy)
        self.assertEqual(result.field_errors["seatClass-0-pattern"].code, ErrorCode.SEATS_PER_ROW_EXCEEDED)
        self.assertTrue(validate_configuration([SeatClassSpec("eco", 1, 1, "9-8-9")], [], policy).valid)

    def test_row_span_capped(self):
        policy = LayoutPolicy(max_row_number=5000, max_total_rows=5000)
        result = validate_configuration([SeatClassSpec("eco", 1, 1001, "3-3")], [], policy)
        self.assertEqual(result.field_errors["seatClass-0-rows"].code, ErrorCode.ROW_BOUNDS_EXCEEDED)

    def test_numeric_strings_accepted(self):
        self.assertTrue(validate_configuration([SeatClassSpec("eco", "1", "4", "3-3")], []).valid)

    def test_pattern_syntax(self):
        result = validate_configuration([SeatClassSpec("eco", 1, 2, "3--3")], [])
        self.assertEqual(result.field_errors["seatClass-0-pattern"].code, ErrorCode.PATTERN_SYNTAX)

    def test_row_bounds(self):
        result = validate_configuration([], [SpaceSpec("galley", 21)])
        self.assertEqual(result.field_errors["space-0-rows"].code, ErrorCode.ROW_BOUNDS_EXCEEDED)

    def test_space_row_mismatch_in_raw_draft(self):
        raw = SimpleNamespace(label="galley", from_row=3, to_row=5)
        result = validate_configuration([], [raw])
        self.assertEqual(result.field_errors["space-0-rows"].code, ErrorCode.SPACE_ROW_MISMATCH)

    def test_duplicate_class_names(self):
        result = validate_configuration(
            [SeatClassSpec("eco", 1, 2, "3-3"), SeatClassSpec("eco", 3, 4, "3-3"), SeatClassSpec("space1", 5, 5, "2")],
            [],
        )
        self.assertEqual(result.field_errors["seatClass-1-class"].code, ErrorCode.DUPLICATE_CLASS)
        self.assertEqual(result.field_errors["seatClass-2-class"].code, ErrorCode.DUPLICATE_CLASS)
        self.assertNotIn("seatClass-0-class", result.field_errors)

    def test_reports_everything_in_one_pass(self):
        seat_classes = [
            SeatClassSpec("", 1, 2, "4-5-4"),
            SeatClassSpec("business", 2, 3, "2-2"),
        ]
        result = validate_configuration(seat_classes, [SpaceSpec("", 30)])
        self.assertEqual(
            set(result.field_errors),
            {"seatClass-0-class", "seatClass-0-pattern", "seatClass-1-rows", "space-0-label", "space-0-rows"},
        )


class TestLayoutPolicy(unittest.TestCase):
    def test_defaults(self):
        p = LayoutPolicy()
        self.assertEqual((p.max_seats_per_row, p.max_total_rows, p.max_row_number), (12, 20, 20))

    def test_from_env(self):
        from unittest import mock

        env = {"SEATMAP_MAX_SEATS_PER_ROW": "10", "SEATMAP_MAX_ROW_NUMBER": "60"}
        with mock.patch.dict("os.environ", env):
            p = LayoutPolicy.from_env(entity="aircraft type")
        self.assertEqual((p.max_seats_per_row, p.max_total_rows, p.max_row_number), (10, 20, 60))
        self.assertEqual(p.entity, "aircraft type")


if __name__ == "__main__":
    unittest.main()

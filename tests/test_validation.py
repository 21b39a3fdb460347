# ABOUTME: Tests raw mark validation before scale conversion.
# ABOUTME: Ensures bounds, whole marks, speaking half marks, and note length are enforced.

import unittest

from src.scoring.validation import (
    InvalidRawMarkError,
    validate_notes,
    validate_raw_mark,
    validate_raw_marks,
)


class ValidateRawMarksTest(unittest.TestCase):
    def test_valid_marks_are_cleaned_and_ordered(self):
        cleaned = validate_raw_marks({"speaking": 58.5, "reading": 30, "writing": None, "useOfEnglish": 17.0})
        self.assertEqual(cleaned, {"reading": 30, "useOfEnglish": 17, "speaking": 58.5})
        self.assertEqual(list(cleaned), ["reading", "useOfEnglish", "speaking"])
        self.assertIsInstance(cleaned["useOfEnglish"], int)

    def test_bounds_are_inclusive(self):
        self.assertEqual(validate_raw_mark("reading", 0), 0)
        self.assertEqual(validate_raw_mark("reading", 44), 44)
        self.assertEqual(validate_raw_mark("speaking", 75), 75.0)

    def test_out_of_range_marks_are_rejected(self):
        for component, value in [("reading", 45), ("reading", -1), ("useOfEnglish", 29), ("speaking", 75.5)]:
            with self.assertRaises(InvalidRawMarkError):
                validate_raw_mark(component, value)

    def test_fractional_marks_only_allowed_for_speaking(self):
        with self.assertRaises(InvalidRawMarkError) as ctx:
            validate_raw_mark("reading", 30.5)
        self.assertEqual(ctx.exception.component, "reading")
        self.assertEqual(validate_raw_mark("speaking", 30.5), 30.5)

    def test_speaking_rejects_quarter_marks(self):
        with self.assertRaises(InvalidRawMarkError) as ctx:
            validate_raw_mark("speaking", 30.25)
        self.assertIn("half marks", str(ctx.exception))

    def test_non_numeric_values_are_rejected(self):
        for value in ("30", True, float("nan")):
            with self.assertRaises(InvalidRawMarkError):
                validate_raw_mark("reading", value)

    def test_unknown_component_is_rejected(self):
        with self.assertRaises(InvalidRawMarkError):
            validate_raw_marks({"grammar": 10})
        with self.assertRaises(InvalidRawMarkError):
            validate_raw_marks({"grammar": None})

    def test_error_is_a_value_error(self):
        with self.assertRaises(ValueError):
            validate_raw_marks({"listening": 31})


class ValidateNotesTest(unittest.TestCase):
    def test_notes_limit(self):
        self.assertIsNone(validate_notes(None))
        self.assertEqual(validate_notes("x" * 500), "x" * 500)
        with self.assertRaises(InvalidRawMarkError) as ctx:
            validate_notes("x" * 501)
        self.assertEqual(ctx.exception.component, "notes")


if __name__ == "__main__":
    unittest.main()

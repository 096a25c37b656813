import unittest

from bf2c import BracketErrorKind, check_brackets, tokenize, validate_brackets


class BracketValidatorTests(unittest.TestCase):
    def test_accepts_balanced_nesting(self) -> None:
        self.assertTrue(validate_brackets(tokenize("[++[--]++]")))
        self.assertIsNone(check_brackets(tokenize("[++[--]++]")))

    def test_accepts_sequences_without_loops(self) -> None:
        self.assertTrue(validate_brackets(tokenize("")))
        self.assertTrue(validate_brackets(tokenize("+-<>.,")))

    def test_rejects_unbalanced(self) -> None:
        self.assertFalse(validate_brackets(tokenize("[[")))
        self.assertFalse(validate_brackets(tokenize("][")))
        self.assertFalse(validate_brackets(tokenize("]")))

    def test_unmatched_loop_end(self) -> None:
        error = check_brackets(tokenize("+]"))
        self.assertIsNotNone(error)
        self.assertIs(error.kind, BracketErrorKind.UNMATCHED_LOOP_END)
        self.assertEqual(error.index, 1)
        self.assertEqual(error.offset, 1)
        self.assertIn("Unmatched ']'", str(error))

    def test_closer_before_opener_stops_at_closer(self) -> None:
        error = check_brackets(tokenize("]["))
        self.assertIs(error.kind, BracketErrorKind.UNMATCHED_LOOP_END)
        self.assertEqual(error.index, 0)

    def test_unclosed_loop_start_reports_innermost_opener(self) -> None:
        error = check_brackets(tokenize("[ [ +"))
        self.assertIs(error.kind, BracketErrorKind.UNCLOSED_LOOP_START)
        self.assertEqual(error.index, 1)
        self.assertEqual(error.offset, 2)
        self.assertEqual(error.depth, 2)
        self.assertIn("Unclosed '['", str(error))

    def test_partially_closed_loops(self) -> None:
        error = check_brackets(tokenize("[[+]"))
        self.assertIs(error.kind, BracketErrorKind.UNCLOSED_LOOP_START)
        self.assertEqual(error.offset, 0)
        self.assertEqual(error.depth, 1)

    def test_errors_compare_by_value(self) -> None:
        self.assertEqual(check_brackets(tokenize("]")), check_brackets(tokenize("]")))


if __name__ == "__main__":
    unittest.main()

"""Tests for hint label generation and incremental resolution."""

from __future__ import annotations

import string
import unittest

from thunars.errors import ConfigError
from thunars.hints import (
    DEFAULT_HINT_ALPHABET,
    HintMatch,
    assign_hints,
    generate_labels,
    hint_capacity,
    normalize_alphabet,
    prefix_count,
)

LETTERS = string.ascii_lowercase


class HintLabelGenerationTests(unittest.TestCase):
    def test_single_characters_while_alphabet_has_room(self) -> None:
        self.assertEqual(generate_labels(3, "abcd"), ["a", "b", "c"])
        self.assertEqual(generate_labels(4, "abcd"), ["a", "b", "c", "d"])

    def test_prefix_count_is_minimal(self) -> None:
        self.assertEqual(prefix_count(26, 26), 0)
        self.assertEqual(prefix_count(27, 26), 1)
        self.assertEqual(prefix_count(51, 26), 1)
        self.assertEqual(prefix_count(52, 26), 2)
        self.assertEqual(prefix_count(676, 26), 26)

    def test_thirty_entries_with_26_letters_use_two_character_labels(self) -> None:
        labels = generate_labels(30, LETTERS)

        self.assertEqual(len(labels), 30)
        self.assertTrue(any(len(label) == 2 for label in labels))
        self.assertEqual(labels[:25], list(LETTERS[1:]))
        self.assertEqual(labels[25:], ["aa", "ab", "ac", "ad", "ae"])
        self.assertEqual(labels, generate_labels(30, LETTERS))

    def test_labels_are_unique_and_prefix_free_up_to_capacity(self) -> None:
        alphabet = "abcde"
        for count in range(1, hint_capacity(len(alphabet)) + 1):
            labels = generate_labels(count, alphabet)
            self.assertEqual(len(labels), count)
            self.assertEqual(len(set(labels)), count)
            for label in labels:
                for other in labels:
                    if label != other:
                        self.assertFalse(other.startswith(label), f"{label!r} prefixes {other!r} at V={count}")

    def test_entries_past_capacity_get_no_label(self) -> None:
        labels = generate_labels(30, "abcde")

        self.assertEqual(len(labels), hint_capacity(5))
        self.assertTrue(all(len(label) == 2 for label in labels))

    def test_zero_entries_get_no_labels(self) -> None:
        self.assertEqual(generate_labels(0, LETTERS), [])

    def test_default_alphabet_starts_home_row(self) -> None:
        self.assertEqual(generate_labels(2, DEFAULT_HINT_ALPHABET), ["t", "n"])


class HintAlphabetTests(unittest.TestCase):
    def test_case_insensitive_alphabet_is_lowered_and_deduplicated(self) -> None:
        self.assertEqual(normalize_alphabet("aAbB"), "ab")

    def test_case_sensitive_alphabet_keeps_both_cases(self) -> None:
        self.assertEqual(normalize_alphabet("aAbB", case_sensitive=True), "aAbB")

    def test_too_small_alphabet_is_rejected(self) -> None:
        with self.assertRaises(ConfigError):
            normalize_alphabet("aaaa")

    def test_whitespace_is_rejected(self) -> None:
        with self.assertRaises(ConfigError):
            normalize_alphabet("ab c")


class HintResolutionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.entries = [f"entry{idx}" for idx in range(30)]
        self.assignment = assign_hints(self.entries, LETTERS)

    def test_complete_single_label(self) -> None:
        resolution = self.assignment.resolve("b")

        self.assertEqual(resolution.match, HintMatch.COMPLETE)
        self.assertEqual(self.entries[resolution.index], "entry0")

    def test_prefix_character_is_partial(self) -> None:
        self.assertEqual(self.assignment.resolve("a").match, HintMatch.PARTIAL)

    def test_two_step_and_combined_input_agree(self) -> None:
        first = self.assignment.resolve("a")
        combined = self.assignment.resolve("ac")

        self.assertEqual(first.match, HintMatch.PARTIAL)
        self.assertEqual(combined.match, HintMatch.COMPLETE)
        self.assertEqual(self.assignment.entries[combined.index], "entry27")

    def test_invalid_second_character_matches_nothing(self) -> None:
        self.assertEqual(self.assignment.resolve("az").match, HintMatch.NONE)

    def test_input_is_case_insensitive_by_default(self) -> None:
        self.assertEqual(self.assignment.resolve("AC").match, HintMatch.COMPLETE)

    def test_case_sensitive_assignment_distinguishes_case(self) -> None:
        assignment = assign_hints(["x", "y"], "aA", case_sensitive=True)

        self.assertEqual(assignment.labels, ("a", "A"))
        self.assertEqual(assignment.entries[assignment.resolve("A").index], "y")

    def test_every_label_resolves_to_its_entry(self) -> None:
        for index, label in enumerate(self.assignment.labels):
            resolution = self.assignment.resolve(label)
            self.assertEqual(resolution.match, HintMatch.COMPLETE)
            self.assertEqual(resolution.index, index)


if __name__ == "__main__":
    unittest.main()

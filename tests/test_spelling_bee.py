import unittest

from vocabgames.core.constants import RejectReason
from vocabgames.core.exceptions import InvalidSelectionError
from vocabgames.core.models import Word
from vocabgames.engine.spelling_bee import (
    SpellingBeeConfig,
    SpellingBeeGenerator,
    calculate_word_score,
    is_pangram,
    rank_for,
    uses_honeycomb,
)


def make_words(*texts: str):
    return [Word(id=index, word=text, level="B1") for index, text in enumerate(texts)]


FALLBACK_WORDS = make_words("planet", "plan", "plant", "lane", "neat", "tale")


class ScoringTests(unittest.TestCase):
    def test_short_word_scores_its_length(self) -> None:
        letters = ["T", "A", "C", "X", "Y", "Z", "W"]
        self.assertEqual(calculate_word_score("cat", letters), 3)

    def test_four_letter_word_scores_one(self) -> None:
        self.assertEqual(calculate_word_score("PLAN", list("PLANETR")), 1)

    def test_pangram_earns_bonus(self) -> None:
        letters = list("REPLANT")
        self.assertTrue(is_pangram("REPLANT", letters))
        self.assertEqual(calculate_word_score("REPLANT", letters), 14)

    def test_membership_requires_center(self) -> None:
        letters = ["T", "A", "C", "E", "R", "S", "N"]
        self.assertTrue(uses_honeycomb("cat", "T", letters))
        self.assertFalse(uses_honeycomb("cat", "E", letters))
        self.assertFalse(uses_honeycomb("cot", "T", letters))

    def test_rank_ladder(self) -> None:
        self.assertEqual(rank_for(0, 0), "Beginner")
        self.assertEqual(rank_for(0, 100), "Beginner")
        self.assertEqual(rank_for(5, 100), "Good Start")
        self.assertEqual(rank_for(50, 100), "Amazing")
        self.assertEqual(rank_for(69, 100), "Amazing")
        self.assertEqual(rank_for(70, 100), "Genius")
        self.assertEqual(rank_for(100, 100), "Queen Bee")


class SpellingBeeGeneratorTests(unittest.TestCase):
    def test_fallback_seed_is_padded_with_common_letters(self) -> None:
        result = SpellingBeeGenerator(SpellingBeeConfig(seed=1)).generate(FALLBACK_WORDS)

        self.assertTrue(result.ok, result.error)
        honeycomb = result.puzzle
        self.assertEqual(honeycomb.seed_word.text, "PLANET")
        self.assertEqual(honeycomb.center, "P")
        self.assertEqual(honeycomb.outer, ["L", "A", "N", "E", "T", "R"])
        self.assertEqual(sorted(w.text for w in honeycomb.valid_words), ["PLAN", "PLANET", "PLANT"])
        self.assertEqual(honeycomb.max_score, 6 + 1 + 5)

    def test_pangram_seed_supplies_all_seven_letters(self) -> None:
        words = make_words("replant", "plant", "pear", "trap", "lane", "tale")
        result = SpellingBeeGenerator(SpellingBeeConfig(seed=8)).generate(words)

        honeycomb = result.puzzle
        self.assertEqual(honeycomb.seed_word.text, "REPLANT")
        self.assertEqual(set(honeycomb.letters), set("REPLANT"))
        self.assertEqual(len(honeycomb.outer), 6)
        self.assertIn("REPLANT", [w.text for w in honeycomb.valid_words])
        for word in honeycomb.valid_words:
            self.assertIn(honeycomb.center, word.text)
        self.assertEqual(
            honeycomb.max_score,
            sum(calculate_word_score(w.text, honeycomb.letters) for w in honeycomb.valid_words),
        )

    def test_too_few_eligible_words_fail(self) -> None:
        words = make_words("cat", "dog", "plan", "plant", "ice cream", "tale")
        result = SpellingBeeGenerator(SpellingBeeConfig(seed=1)).generate(words)
        self.assertFalse(result.ok)
        self.assertIsNone(result.puzzle)

    def test_duplicate_texts_are_listed_once(self) -> None:
        words = FALLBACK_WORDS + [Word(id=99, word="plan", level="B1")]
        honeycomb = SpellingBeeGenerator(SpellingBeeConfig(seed=1)).generate(words).puzzle
        self.assertEqual([w.text for w in honeycomb.valid_words].count("PLAN"), 1)


class SubmissionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.honeycomb = SpellingBeeGenerator(SpellingBeeConfig(seed=1)).generate(FALLBACK_WORDS).puzzle

    def assertRejected(self, text, reason, found=()):
        with self.assertRaises(InvalidSelectionError) as ctx:
            self.honeycomb.check_submission(text, found)
        self.assertEqual(ctx.exception.reason, reason)

    def test_rejections_carry_specific_reasons(self) -> None:
        self.assertRejected("pla", RejectReason.TOO_SHORT)
        self.assertRejected("lane", RejectReason.MISSING_CENTER)
        self.assertRejected("plan", RejectReason.ALREADY_FOUND, found={"PLAN"})
        self.assertRejected("pelt", RejectReason.NOT_IN_LIST)

    def test_membership_is_case_insensitive(self) -> None:
        word = self.honeycomb.check_submission("Plant")
        self.assertEqual(word.text, "PLANT")


if __name__ == "__main__":
    unittest.main()

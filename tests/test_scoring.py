import random
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from compatiblah.scoring import (  # noqa: E402
    blend_scores,
    calculate_compatibility_scores,
    clamp_score,
    heuristic_score,
    overall_from,
    round_half_away,
    trait_adjustment,
    validate_model_score,
    validate_overall_score,
)
from compatiblah.taxonomy import Category, PersonalityCode  # noqa: E402


class FixedRandom:
    """Always returns the same draw; 0.5 means zero noise."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


class PersonalityCodeTests(unittest.TestCase):
    def test_parses_case_insensitively(self):
        code = PersonalityCode.parse(" infj ")
        self.assertIsNotNone(code)
        self.assertEqual(str(code), "INFJ")
        self.assertEqual(code.axes(), ("I", "N", "F", "J"))

    def test_rejects_invalid_codes(self):
        for raw in ["INF", "INFX", "INFJP", "", None, "1234", "EEEE"]:
            with self.subTest(raw=raw):
                self.assertIsNone(PersonalityCode.parse(raw))


class CategoryTests(unittest.TestCase):
    def test_parse_accepts_values_and_tags(self):
        self.assertIs(Category.parse("friend"), Category.FRIEND)
        self.assertIs(Category.parse("Workplace"), Category.COWORKER)
        self.assertIs(Category.parse("romance"), Category.PARTNER)
        self.assertIs(Category.parse(Category.PARTNER), Category.PARTNER)

    def test_parse_rejects_unknown(self):
        with self.assertRaises(ValueError):
            Category.parse("sibling")

    def test_every_category_has_complete_tables(self):
        for category in Category:
            self.assertEqual(len(category.headings), 3)
            self.assertEqual(len(category.trait_rules), 4)
            for index in range(3):
                self.assertGreaterEqual(len(category.subcategory_titles(index)), 2)


class HeuristicScoreTests(unittest.TestCase):
    def test_trait_adjustment_for_friend_example(self):
        first = PersonalityCode.parse("INFJ")
        second = PersonalityCode.parse("ENFP")
        # Energy differs -0.2, N matches +0.3, F matches +0.4, J/P differs +0.1.
        self.assertAlmostEqual(trait_adjustment(first, second, Category.FRIEND), 0.6)

    def test_friend_example_scores_four_without_noise(self):
        self.assertEqual(heuristic_score("INFJ", "ENFP", Category.FRIEND, rng=FixedRandom(0.5)), 4)
        self.assertEqual(heuristic_score("INFJ", "ENFP", "friend", rng=FixedRandom(0.4)), 4)

    def test_friend_example_drops_to_three_at_lowest_noise(self):
        self.assertEqual(heuristic_score("INFJ", "ENFP", Category.FRIEND, rng=FixedRandom(0.0)), 3)

    def test_partner_favours_opposite_energy(self):
        same_energy = trait_adjustment(
            PersonalityCode.parse("INFP"), PersonalityCode.parse("INFP"), Category.PARTNER
        )
        opposite_energy = trait_adjustment(
            PersonalityCode.parse("ENFP"), PersonalityCode.parse("INFP"), Category.PARTNER
        )
        self.assertAlmostEqual(opposite_energy - same_energy, 0.5)
        self.assertEqual(heuristic_score("ENFP", "INFP", Category.PARTNER, rng=FixedRandom(0.5)), 4)

    def test_coworker_rewards_shared_thinking_and_judging(self):
        adjustment = trait_adjustment(
            PersonalityCode.parse("ESTJ"), PersonalityCode.parse("ISTJ"), Category.COWORKER
        )
        self.assertAlmostEqual(adjustment, 0.2 + 0.1 + 0.4 + 0.4)

    def test_invalid_codes_fall_back_to_neutral(self):
        for first, second in [("INF", "ENFP"), ("INFX", "ENFP"), ("", "")]:
            for seed in range(20):
                with self.subTest(first=first, second=second, seed=seed):
                    score = heuristic_score(first, second, Category.PARTNER, rng=random.Random(seed))
                    self.assertEqual(score, 3)

    def test_unseeded_scores_stay_inside_noise_band(self):
        for _ in range(25):
            self.assertIn(heuristic_score("INFJ", "ENFP", Category.FRIEND), {3, 4})
            self.assertTrue(1 <= heuristic_score("bad", "ENFP", Category.COWORKER) <= 5)

    def test_score_set_covers_every_category(self):
        scores = calculate_compatibility_scores("INFJ", "ENFP", rng=FixedRandom(0.5))
        self.assertEqual(scores.friend, 4)
        self.assertEqual(scores.coworker, 4)
        self.assertEqual(scores.partner, 4)
        self.assertEqual(scores.for_category(Category.PARTNER), scores.partner)


class RoundingTests(unittest.TestCase):
    def test_ties_round_away_from_zero(self):
        self.assertEqual(round_half_away(2.5), 3)
        self.assertEqual(round_half_away(3.5), 4)
        self.assertEqual(round_half_away(-2.5), -3)
        self.assertEqual(round_half_away(3.49), 3)

    def test_clamp_bounds(self):
        self.assertEqual(clamp_score(0.2), 1)
        self.assertEqual(clamp_score(-4.0), 1)
        self.assertEqual(clamp_score(7.3), 5)
        self.assertEqual(clamp_score(4.5), 5)


class BlendTests(unittest.TestCase):
    def test_output_always_in_range(self):
        for model in range(1, 6):
            for heuristic in range(1, 6):
                with self.subTest(model=model, heuristic=heuristic):
                    self.assertTrue(1 <= blend_scores(model, heuristic) <= 5)

    def test_heuristic_dominates(self):
        self.assertEqual(blend_scores(1, 5), 4)
        self.assertEqual(blend_scores(5, 1), 2)
        self.assertEqual(blend_scores(3, 3), 3)

    def test_out_of_range_model_scores_become_neutral(self):
        self.assertEqual(validate_model_score(9), 3)
        self.assertEqual(validate_model_score(0), 3)
        self.assertEqual(validate_model_score(-2), 3)
        self.assertEqual(validate_model_score(4), 4)

    def test_overall_recomputed_with_truncation(self):
        self.assertEqual(validate_overall_score(4, 1, 1, 1), 4)
        self.assertEqual(validate_overall_score(0, 5, 4, 4), 4)
        self.assertEqual(validate_overall_score(7, 1, 1, 2), 1)
        self.assertEqual(validate_overall_score(0, 0, 0, 2), 3)

    def test_overall_from_blended_scores(self):
        self.assertEqual(overall_from(4, 3, 4), 4)
        self.assertEqual(overall_from(1, 1, 2), 1)
        self.assertEqual(overall_from(5, 5, 4), 5)


if __name__ == "__main__":
    unittest.main()

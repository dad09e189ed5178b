from __future__ import annotations

import logging
import math
import random
import time
from dataclasses import dataclass
from typing import Protocol

from compatiblah.core.config.scoring import get_scoring_value
from compatiblah.taxonomy import Category, PersonalityCode

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def random(self) -> float: ...


@dataclass(frozen=True)
class HeuristicScoreSet:
    friend: int
    coworker: int
    partner: int

    def for_category(self, category: Category) -> int:
        return getattr(self, category.value)


def score_bounds() -> tuple[int, int]:
    return (
        int(get_scoring_value("scores.min", 1)),
        int(get_scoring_value("scores.max", 5)),
    )


def round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def clamp_score(value: float) -> int:
    low, high = score_bounds()
    return max(low, min(high, round_half_away(value)))


def wall_clock_source(category: Category) -> random.Random:
    """A fresh source per call; identical inputs may score differently on purpose."""
    return random.Random(time.time_ns() + category.seed_offset)


def apply_noise(value: float, rng: RandomSource) -> float:
    amplitude = float(get_scoring_value("heuristic.noise_amplitude", 0.3))
    return value + rng.random() * 2 * amplitude - amplitude


def trait_adjustment(first: PersonalityCode, second: PersonalityCode, category: Category) -> float:
    total = 0.0
    for rule, a, b in zip(category.trait_rules, first.axes(), second.axes()):
        total += rule.adjustment(a, b)
    return total


def heuristic_score(
    first: str | PersonalityCode | None,
    second: str | PersonalityCode | None,
    category: Category | str,
    *,
    rng: RandomSource | None = None,
) -> int:
    """Score a pair of personality codes for one category, 1 (poor) to 5.

    Invalid codes never raise: the score is drawn around the neutral baseline
    instead.
    """
    category = Category.parse(category)
    source = rng if rng is not None else wall_clock_source(category)
    baseline = float(get_scoring_value("heuristic.baseline", 3.0))

    first_code = first if isinstance(first, PersonalityCode) else PersonalityCode.parse(first)
    second_code = second if isinstance(second, PersonalityCode) else PersonalityCode.parse(second)
    if first_code is None or second_code is None:
        logger.info("heuristic_score_neutral category=%s reason=invalid_code", category.value)
        return clamp_score(apply_noise(baseline, source))

    base = baseline + trait_adjustment(first_code, second_code, category)
    return clamp_score(apply_noise(base, source))


def calculate_compatibility_scores(
    first: str | PersonalityCode | None,
    second: str | PersonalityCode | None,
    *,
    rng: RandomSource | None = None,
) -> HeuristicScoreSet:
    return HeuristicScoreSet(
        friend=heuristic_score(first, second, Category.FRIEND, rng=rng),
        coworker=heuristic_score(first, second, Category.COWORKER, rng=rng),
        partner=heuristic_score(first, second, Category.PARTNER, rng=rng),
    )

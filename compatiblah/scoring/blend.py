from __future__ import annotations

import logging

from compatiblah.core.config.scoring import get_scoring_value

from .heuristic import clamp_score, score_bounds

logger = logging.getLogger(__name__)


def _neutral_score() -> int:
    return int(get_scoring_value("scores.neutral", 3))


def _in_range(score: int) -> bool:
    low, high = score_bounds()
    return low <= score <= high


def validate_model_score(score: int, *, field: str = "score") -> int:
    """Out-of-range model scores become neutral rather than failing the request."""
    if _in_range(score):
        return score
    neutral = _neutral_score()
    logger.info("model_score_corrected field=%s reported=%s corrected=%s", field, score, neutral)
    return neutral


def validate_overall_score(overall: int, friend: int, coworker: int, partner: int) -> int:
    if _in_range(overall):
        return overall
    low, _ = score_bounds()
    recomputed = (friend + coworker + partner) // 3
    if recomputed < low:
        recomputed = _neutral_score()
    logger.info("model_score_corrected field=overall_score reported=%s corrected=%s", overall, recomputed)
    return recomputed


def blend_scores(model_score: int, heuristic_score: int) -> int:
    model_weight = float(get_scoring_value("blend.model_weight", 0.35))
    heuristic_weight = float(get_scoring_value("blend.heuristic_weight", 0.65))
    return clamp_score(model_weight * model_score + heuristic_weight * heuristic_score)


def overall_from(friend: int, coworker: int, partner: int) -> int:
    return clamp_score((friend + coworker + partner) / 3.0)

from .blend import blend_scores, overall_from, validate_model_score, validate_overall_score
from .heuristic import (
    HeuristicScoreSet,
    RandomSource,
    calculate_compatibility_scores,
    clamp_score,
    heuristic_score,
    round_half_away,
    trait_adjustment,
)

__all__ = [
    "HeuristicScoreSet",
    "RandomSource",
    "blend_scores",
    "calculate_compatibility_scores",
    "clamp_score",
    "heuristic_score",
    "overall_from",
    "round_half_away",
    "trait_adjustment",
    "validate_model_score",
    "validate_overall_score",
]

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from compatiblah.ai.factory import get_ai_client
from compatiblah.ai.types import TextGenerationClient
from compatiblah.core.assessment_store import AssessmentStore
from compatiblah.normalize import clean_model_output, parse_assessment, parse_category_response
from compatiblah.schemas import AssessmentRecord, AssessmentResponse, CategoryResponse, PersonData
from compatiblah.scoring import (
    RandomSource,
    blend_scores,
    calculate_compatibility_scores,
    heuristic_score,
    overall_from,
    validate_model_score,
    validate_overall_score,
)
from compatiblah.taxonomy import Category

logger = logging.getLogger(__name__)


def _validated_model_scores(result: AssessmentResponse) -> AssessmentResponse:
    friend = validate_model_score(result.friend_score, field="friend_score")
    coworker = validate_model_score(result.coworker_score, field="coworker_score")
    partner = validate_model_score(result.partner_score, field="partner_score")
    overall = validate_overall_score(result.overall_score, friend, coworker, partner)
    return result.model_copy(
        update={
            "friend_score": friend,
            "coworker_score": coworker,
            "partner_score": partner,
            "overall_score": overall,
        }
    )


def normalize_assessment(
    raw_text: str,
    person1: PersonData,
    person2: PersonData,
    *,
    rng: RandomSource | None = None,
) -> AssessmentResponse:
    """Turn raw three-category model text into final blended results.

    Pure: no I/O, no shared state. Raises ``SchemaCascadeError`` when the
    text matches no known response shape.
    """
    parsed = _validated_model_scores(parse_assessment(clean_model_output(raw_text)))
    heuristics = calculate_compatibility_scores(person1.mbti, person2.mbti, rng=rng)

    friend = blend_scores(parsed.friend_score, heuristics.friend)
    coworker = blend_scores(parsed.coworker_score, heuristics.coworker)
    partner = blend_scores(parsed.partner_score, heuristics.partner)
    logger.info(
        "assessment_scored model=%s/%s/%s heuristic=%s/%s/%s final=%s/%s/%s",
        parsed.friend_score,
        parsed.coworker_score,
        parsed.partner_score,
        heuristics.friend,
        heuristics.coworker,
        heuristics.partner,
        friend,
        coworker,
        partner,
    )
    return parsed.model_copy(
        update={
            "friend_score": friend,
            "coworker_score": coworker,
            "partner_score": partner,
            "overall_score": overall_from(friend, coworker, partner),
        }
    )


def normalize_category_assessment(
    raw_text: str,
    person1: PersonData,
    person2: PersonData,
    category: Category | str,
    *,
    rng: RandomSource | None = None,
) -> CategoryResponse:
    category = Category.parse(category)
    parsed = parse_category_response(clean_model_output(raw_text), category)
    model_score = validate_model_score(parsed.score)
    heuristic = heuristic_score(person1.mbti, person2.mbti, category, rng=rng)
    final = blend_scores(model_score, heuristic)
    logger.info(
        "category_scored category=%s model=%s heuristic=%s final=%s",
        category.value,
        model_score,
        heuristic,
        final,
    )
    return CategoryResponse(score=final, explanation=parsed.explanation)


def assess_compatibility(
    person1: PersonData,
    person2: PersonData,
    *,
    prompt: str,
    client: TextGenerationClient | None = None,
    rng: RandomSource | None = None,
) -> AssessmentResponse:
    raw_text = (client or get_ai_client()).generate(prompt)
    return normalize_assessment(raw_text, person1, person2, rng=rng)


def assess_category(
    person1: PersonData,
    person2: PersonData,
    category: Category | str,
    *,
    prompt: str,
    client: TextGenerationClient | None = None,
    rng: RandomSource | None = None,
) -> CategoryResponse:
    raw_text = (client or get_ai_client()).generate(prompt)
    return normalize_category_assessment(raw_text, person1, person2, category, rng=rng)


def build_assessment_record(response: AssessmentResponse) -> AssessmentRecord:
    return AssessmentRecord(
        id=str(uuid.uuid4()),
        friend_score=response.friend_score,
        coworker_score=response.coworker_score,
        partner_score=response.partner_score,
        overall_score=response.overall_score,
        friend_explanation=response.friend_explanation,
        coworker_explanation=response.coworker_explanation,
        partner_explanation=response.partner_explanation,
        created_at=datetime.now(timezone.utc),
    )


def record_assessment(store: AssessmentStore, response: AssessmentResponse) -> AssessmentRecord:
    """Save only computed scores and explanations; the people stay with the caller."""
    record = build_assessment_record(response)
    store.save(record)
    logger.info("assessment_recorded id=%s", record.id)
    return record

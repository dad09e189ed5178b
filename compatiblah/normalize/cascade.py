"""Decode model output against the known response shapes, newest first.

The service has changed how it lays out explanations over time:

* ``current``: explanations are full documents (sections, subcategories, bullets);
* ``intermediate``: sections carry a flat ``content`` string;
* ``legacy``: each explanation is one narrative string.

Each decoder returns a tagged result instead of raising, and the cascade
keeps every failure so a total miss can report all of them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Sequence, Union

from pydantic import BaseModel, Field, ValidationError

from compatiblah.core.errors import SchemaCascadeError
from compatiblah.schemas import AssessmentResponse, CategoryResponse, ExplanationDocument
from compatiblah.taxonomy import Category

from .structure import complete_document, structure_sections, structure_text

logger = logging.getLogger(__name__)

_EXPLANATION_FIELDS: tuple[tuple[str, Category], ...] = (
    ("friend", Category.FRIEND),
    ("coworker", Category.COWORKER),
    ("partner", Category.PARTNER),
)


def _empty_document() -> ExplanationDocument:
    return ExplanationDocument(sections=[])


class _ContentSection(BaseModel):
    heading: str = ""
    content: str


class _ContentExplanation(BaseModel):
    sections: list[_ContentSection]


class _ScoresPayload(BaseModel):
    friend_score: int = 0
    coworker_score: int = 0
    partner_score: int = 0
    overall_score: int = 0


class _CurrentAssessment(_ScoresPayload):
    friend_explanation: ExplanationDocument = Field(default_factory=_empty_document)
    coworker_explanation: ExplanationDocument = Field(default_factory=_empty_document)
    partner_explanation: ExplanationDocument = Field(default_factory=_empty_document)


class _IntermediateAssessment(_ScoresPayload):
    friend_explanation: _ContentExplanation
    coworker_explanation: _ContentExplanation
    partner_explanation: _ContentExplanation


class _LegacyAssessment(_ScoresPayload):
    friend_explanation: str
    coworker_explanation: str
    partner_explanation: str


class _CurrentCategory(BaseModel):
    score: int = 0
    explanation: ExplanationDocument = Field(default_factory=_empty_document)


class _IntermediateCategory(BaseModel):
    score: int = 0
    explanation: _ContentExplanation


class _LegacyCategory(BaseModel):
    score: int = 0
    explanation: str


@dataclass(frozen=True)
class DecodeSuccess:
    schema: str
    value: Any


@dataclass(frozen=True)
class DecodeFailure:
    schema: str
    error: str


DecodeResult = Union[DecodeSuccess, DecodeFailure]


@dataclass(frozen=True)
class SchemaDecoder:
    name: str
    model: type[BaseModel]
    convert: Callable[[Any], Any]

    def decode(self, text: str) -> DecodeResult:
        try:
            parsed = self.model.model_validate_json(text)
        except ValidationError as exc:
            return DecodeFailure(schema=self.name, error=_describe_validation_error(exc))
        return DecodeSuccess(schema=self.name, value=self.convert(parsed))


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ())) or "<root>"
        parts.append(f"{location}: {error.get('msg', 'invalid')}")
    return "; ".join(parts) or str(exc)


def _content_pairs(explanation: _ContentExplanation) -> list[tuple[str, str]]:
    return [(section.heading, section.content) for section in explanation.sections]


def _assessment_from(payload: _ScoresPayload, build: Callable[[Any, Category], ExplanationDocument]) -> AssessmentResponse:
    explanations = {
        f"{prefix}_explanation": build(getattr(payload, f"{prefix}_explanation"), category)
        for prefix, category in _EXPLANATION_FIELDS
    }
    return AssessmentResponse(
        friend_score=payload.friend_score,
        coworker_score=payload.coworker_score,
        partner_score=payload.partner_score,
        overall_score=payload.overall_score,
        **explanations,
    )


ASSESSMENT_DECODERS: tuple[SchemaDecoder, ...] = (
    SchemaDecoder(
        name="current",
        model=_CurrentAssessment,
        convert=lambda payload: _assessment_from(payload, complete_document),
    ),
    SchemaDecoder(
        name="intermediate",
        model=_IntermediateAssessment,
        convert=lambda payload: _assessment_from(
            payload, lambda explanation, category: structure_sections(_content_pairs(explanation), category)
        ),
    ),
    SchemaDecoder(
        name="legacy",
        model=_LegacyAssessment,
        convert=lambda payload: _assessment_from(payload, structure_text),
    ),
)


def category_decoders(category: Category) -> tuple[SchemaDecoder, ...]:
    return (
        SchemaDecoder(
            name="current",
            model=_CurrentCategory,
            convert=lambda payload: CategoryResponse(
                score=payload.score,
                explanation=complete_document(payload.explanation, category),
            ),
        ),
        SchemaDecoder(
            name="intermediate",
            model=_IntermediateCategory,
            convert=lambda payload: CategoryResponse(
                score=payload.score,
                explanation=structure_sections(_content_pairs(payload.explanation), category),
            ),
        ),
        SchemaDecoder(
            name="legacy",
            model=_LegacyCategory,
            convert=lambda payload: CategoryResponse(
                score=payload.score,
                explanation=structure_text(payload.explanation, category),
            ),
        ),
    )


def run_cascade(text: str, decoders: Sequence[SchemaDecoder]) -> Any:
    failures: list[tuple[str, str]] = []
    for decoder in decoders:
        result = decoder.decode(text)
        if isinstance(result, DecodeSuccess):
            if failures:
                logger.info("schema_cascade_fallback schema=%s skipped=%s", result.schema, len(failures))
            else:
                logger.debug("schema_cascade_match schema=%s", result.schema)
            return result.value
        failures.append((result.schema, result.error))

    logger.warning("schema_cascade_failed attempts=%s text_len=%s", len(failures), len(text))
    raise SchemaCascadeError(failures, text)


def parse_assessment(text: str) -> AssessmentResponse:
    return run_cascade(text, ASSESSMENT_DECODERS)


def parse_category_response(text: str, category: Category) -> CategoryResponse:
    return run_cascade(text, category_decoders(category))

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from .explanation import ExplanationDocument


class PersonData(BaseModel):
    name: str
    mbti: str


class AssessmentResponse(BaseModel):
    friend_score: int
    coworker_score: int
    partner_score: int
    overall_score: int
    friend_explanation: ExplanationDocument
    coworker_explanation: ExplanationDocument
    partner_explanation: ExplanationDocument


class CategoryResponse(BaseModel):
    score: int
    explanation: ExplanationDocument


class AssessmentRecord(BaseModel):
    """What a store may keep: computed scores and explanations, never names or codes."""

    id: str
    friend_score: int = Field(ge=1, le=5)
    coworker_score: int = Field(ge=1, le=5)
    partner_score: int = Field(ge=1, le=5)
    overall_score: int = Field(ge=1, le=5)
    friend_explanation: ExplanationDocument
    coworker_explanation: ExplanationDocument
    partner_explanation: ExplanationDocument
    created_at: datetime

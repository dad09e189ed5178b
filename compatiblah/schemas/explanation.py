from __future__ import annotations

from pydantic import BaseModel


class BulletPoint(BaseModel):
    text: str


class Subcategory(BaseModel):
    title: str = ""
    bullets: list[BulletPoint]


class Section(BaseModel):
    heading: str = ""
    subcategories: list[Subcategory]


class ExplanationDocument(BaseModel):
    sections: list[Section]

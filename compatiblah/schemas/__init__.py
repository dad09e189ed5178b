from .assessment import AssessmentRecord, AssessmentResponse, CategoryResponse, PersonData
from .explanation import BulletPoint, ExplanationDocument, Section, Subcategory

__all__ = [
    "BulletPoint",
    "Subcategory",
    "Section",
    "ExplanationDocument",
    "PersonData",
    "AssessmentResponse",
    "CategoryResponse",
    "AssessmentRecord",
]

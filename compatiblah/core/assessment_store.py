from __future__ import annotations

from typing import Protocol, Sequence

from compatiblah.schemas import AssessmentRecord


class AssessmentStore(Protocol):
    """Storage collaborator for finished assessments.

    Implementations receive their connection or session when constructed and
    are passed explicitly to the code that saves results. Records never carry
    names or personality codes.
    """

    def save(self, record: AssessmentRecord) -> None:
        """Persist ``record``."""

    def get(self, assessment_id: str) -> AssessmentRecord | None:
        """Return the stored record, or None when the id is unknown."""

    def list_all(self) -> Sequence[AssessmentRecord]:
        """Return stored records, newest first."""

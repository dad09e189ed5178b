from __future__ import annotations

from dataclasses import dataclass

# Valid letters per axis, in code order: Energy, Cognition, Decision, Lifestyle.
AXIS_LETTERS: tuple[frozenset[str], ...] = (
    frozenset("EI"),
    frozenset("NS"),
    frozenset("TF"),
    frozenset("JP"),
)


@dataclass(frozen=True)
class PersonalityCode:
    energy: str
    cognition: str
    decision: str
    lifestyle: str

    @classmethod
    def parse(cls, raw: str | None) -> PersonalityCode | None:
        """Return the parsed code, or None when ``raw`` is not a valid 4-letter type."""
        value = (raw or "").strip().upper()
        if len(value) != len(AXIS_LETTERS):
            return None
        if not all(letter in allowed for letter, allowed in zip(value, AXIS_LETTERS)):
            return None
        return cls(*value)

    def axes(self) -> tuple[str, str, str, str]:
        return (self.energy, self.cognition, self.decision, self.lifestyle)

    def __str__(self) -> str:
        return "".join(self.axes())

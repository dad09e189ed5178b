from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

DEFAULT_SUBCATEGORY_TITLES: tuple[str, ...] = ("Strengths", "Challenges", "Growth Opportunities")


@dataclass(frozen=True)
class TraitRule:
    """Score contribution of one personality axis.

    ``on_match`` maps the shared letter to its contribution when both codes
    agree on the axis; ``on_differ`` applies otherwise.
    """

    on_differ: float
    on_match: Mapping[str, float] = field(default_factory=dict)

    def adjustment(self, first: str, second: str) -> float:
        if first != second:
            return self.on_differ
        return self.on_match[first]


def _rule(on_differ: float, **on_match: float) -> TraitRule:
    return TraitRule(on_differ=on_differ, on_match=MappingProxyType(dict(on_match)))


@dataclass(frozen=True)
class CategoryTables:
    tag: str
    seed_offset: int
    headings: tuple[str, str, str]
    subcategory_titles: tuple[tuple[str, ...], ...]
    # Energy, Cognition, Decision, Lifestyle.
    trait_rules: tuple[TraitRule, TraitRule, TraitRule, TraitRule]


class Category(Enum):
    FRIEND = "friend"
    COWORKER = "coworker"
    PARTNER = "partner"

    @classmethod
    def parse(cls, value: str | Category) -> Category:
        """Accept a category value ("friend") or its narrative tag ("friendship")."""
        if isinstance(value, Category):
            return value
        key = (value or "").strip().lower()
        for member in cls:
            if key in (member.value, member.tag):
                return member
        raise ValueError(f"Unknown compatibility category '{value}'")

    @property
    def tables(self) -> CategoryTables:
        return _CATEGORY_TABLES[self]

    @property
    def tag(self) -> str:
        return self.tables.tag

    @property
    def headings(self) -> tuple[str, str, str]:
        return self.tables.headings

    @property
    def seed_offset(self) -> int:
        return self.tables.seed_offset

    @property
    def trait_rules(self) -> tuple[TraitRule, TraitRule, TraitRule, TraitRule]:
        return self.tables.trait_rules

    def heading(self, section_index: int) -> str:
        headings = self.tables.headings
        return headings[min(section_index, len(headings) - 1)]

    def subcategory_titles(self, section_index: int) -> tuple[str, ...]:
        titles = self.tables.subcategory_titles
        if 0 <= section_index < len(titles):
            return titles[section_index]
        return DEFAULT_SUBCATEGORY_TITLES


_CATEGORY_TABLES: dict[Category, CategoryTables] = {
    Category.FRIEND: CategoryTables(
        tag="friendship",
        seed_offset=1,
        headings=(
            "Cognitive Compatibility & Communication",
            "Strengths & Synergies",
            "Growth Opportunities & Challenges",
        ),
        subcategory_titles=(
            ("Communication Styles", "Potential Misunderstandings", "Tips for Better Communication"),
            ("What Makes Them Great Together", "Complementary Strengths"),
            ("Growth Opportunities", "Challenges to Navigate"),
        ),
        trait_rules=(
            _rule(-0.2, E=0.4, I=0.4),
            _rule(-0.1, N=0.3, S=0.2),
            _rule(0.1, F=0.4, T=0.2),
            _rule(0.1, J=0.2, P=0.2),
        ),
    ),
    Category.COWORKER: CategoryTables(
        tag="workplace",
        seed_offset=2,
        headings=(
            "Work Style Compatibility",
            "Collaboration Potential",
            "Professional Development & Considerations",
        ),
        subcategory_titles=(
            ("Complementary Skills", "Potential Friction Points", "Collaboration Tips"),
            ("Team Dynamics", "Problem-Solving Approaches"),
            ("Professional Growth", "Considerations"),
        ),
        trait_rules=(
            _rule(0.2, E=0.1, I=0.1),
            _rule(0.2, N=0.1, S=0.1),
            _rule(0.2, T=0.4, F=0.2),
            _rule(0.1, J=0.4, P=0.1),
        ),
    ),
    Category.PARTNER: CategoryTables(
        tag="romance",
        seed_offset=3,
        headings=(
            "Romantic Chemistry & Emotional Connection",
            "Relationship Strengths & Values Alignment",
            "Long-term Potential & Growth Together",
        ),
        subcategory_titles=(
            ("What Draws Them Together", "Communication Needs", "Success Strategies"),
            ("Relationship Strengths", "Values Alignment"),
            ("Long-term Potential", "Growth Together"),
        ),
        trait_rules=(
            _rule(0.4, E=-0.1, I=-0.1),
            _rule(0.1, N=0.3, S=0.2),
            _rule(0.2, F=0.5, T=0.1),
            _rule(0.2, J=0.1, P=0.1),
        ),
    ),
}

_missing = [member.value for member in Category if member not in _CATEGORY_TABLES]
if _missing:
    raise RuntimeError(f"Category tables missing for: {', '.join(_missing)}")

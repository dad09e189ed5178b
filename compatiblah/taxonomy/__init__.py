from .category import DEFAULT_SUBCATEGORY_TITLES, Category, CategoryTables, TraitRule
from .personality import AXIS_LETTERS, PersonalityCode

__all__ = [
    "AXIS_LETTERS",
    "Category",
    "CategoryTables",
    "DEFAULT_SUBCATEGORY_TITLES",
    "PersonalityCode",
    "TraitRule",
]

"""Turn narrative explanation text into sections, subcategories and bullets.

Older response shapes carry the explanation as prose, either one string per
category or one string per section. The helpers here rebuild the structured
document from that prose with simple segmentation rules:

* paragraphs come from blank lines, then from ``.\\n`` breaks, and finally
  from cutting the text into three equal word runs;
* each paragraph is split into sentences, which are spread across the
  category's subcategory titles for that section;
* long bullet lists are merged in runs of up to three sentences.

Every document produced here has exactly three sections (more when a caller
passes more sections in), each with at least one subcategory holding at
least one non-empty bullet.
"""

from __future__ import annotations

import re
from typing import Iterable, Sequence

from compatiblah.core.config.scoring import get_scoring_value
from compatiblah.schemas import BulletPoint, ExplanationDocument, Section, Subcategory
from compatiblah.taxonomy import Category

PLACEHOLDER_SUBCATEGORY_TITLE = "Additional Insights"
PLACEHOLDER_BULLET_TEXT = "Continue reading for more detailed analysis."
FALLBACK_SUBCATEGORY_TITLE = "Compatibility Analysis"

_TERMINAL_PUNCTUATION = (".", "!", "?")
_BLANK_LINE_RE = re.compile(r"\r?\n[ \t]*\r?\n")
_SENTENCE_BREAK_RE = re.compile(r"(?<=[.!?]) ")


def _min_sentences_for_split() -> int:
    return int(get_scoring_value("structure.min_sentences_for_split", 4))


def _max_bullets() -> int:
    return int(get_scoring_value("structure.max_bullets_per_subcategory", 3))


def _target_sections() -> int:
    return int(get_scoring_value("structure.target_sections", 3))


def _ensure_terminal_punctuation(text: str) -> str:
    if text.endswith(_TERMINAL_PUNCTUATION):
        return text
    return text + "."


def split_into_sentences(text: str) -> list[str]:
    sentences: list[str] = []
    for part in _SENTENCE_BREAK_RE.split(text):
        part = part.strip()
        if part:
            sentences.append(_ensure_terminal_punctuation(part))
    return sentences


def split_into_thirds(text: str) -> list[str]:
    words = text.split()
    per_third = len(words) // 3
    thirds = [
        words[:per_third],
        words[per_third : 2 * per_third],
        words[2 * per_third :],
    ]
    return [" ".join(third) for third in thirds if third]


def split_into_paragraphs(text: str) -> list[str]:
    paragraphs = [part.strip() for part in _BLANK_LINE_RE.split(text) if part.strip()]
    if len(paragraphs) >= 2:
        return paragraphs

    paragraphs = [
        _ensure_terminal_punctuation(part.strip())
        for part in text.split(".\n")
        if part.strip()
    ]
    if len(paragraphs) >= 2:
        return paragraphs

    return split_into_thirds(text)


def merge_bullets(sentences: Sequence[str]) -> list[BulletPoint]:
    """One bullet per sentence, or runs of sentences merged when there are too many."""
    texts = [sentence.strip() for sentence in sentences if sentence.strip()]
    limit = _max_bullets()
    if len(texts) > limit:
        texts = [" ".join(texts[start : start + limit]) for start in range(0, len(texts), limit)]
    return [BulletPoint(text=text) for text in texts]


def placeholder_subcategory() -> Subcategory:
    return Subcategory(
        title=PLACEHOLDER_SUBCATEGORY_TITLE,
        bullets=[BulletPoint(text=PLACEHOLDER_BULLET_TEXT)],
    )


def placeholder_section(category: Category, section_index: int) -> Section:
    return Section(heading=category.heading(section_index), subcategories=[placeholder_subcategory()])


def paragraph_to_subcategories(text: str, category: Category, section_index: int) -> list[Subcategory]:
    sentences = split_into_sentences(text)
    titles = category.subcategory_titles(section_index)
    subcategories: list[Subcategory] = []

    if len(sentences) >= _min_sentences_for_split():
        per_title = max(len(sentences) // len(titles), 2)
        for position, title in enumerate(titles):
            start = position * per_title
            if start >= len(sentences):
                break
            end = len(sentences) if position == len(titles) - 1 else start + per_title
            bullets = merge_bullets(sentences[start:end])
            if bullets:
                subcategories.append(Subcategory(title=title, bullets=bullets))
    else:
        bullets = merge_bullets(sentences)
        if bullets:
            subcategories.append(Subcategory(title=titles[0], bullets=bullets))

    if not subcategories:
        stripped = text.strip()
        if not stripped:
            return [placeholder_subcategory()]
        subcategories.append(
            Subcategory(title=FALLBACK_SUBCATEGORY_TITLE, bullets=[BulletPoint(text=stripped)])
        )
    return subcategories


def pad_sections(sections: list[Section], category: Category) -> list[Section]:
    while len(sections) < _target_sections():
        sections.append(placeholder_section(category, len(sections)))
    return sections


def structure_text(text: str, category: Category) -> ExplanationDocument:
    """Build a three-section document from a single narrative string."""
    paragraphs = split_into_paragraphs(text or "")
    sections = [
        Section(
            heading=category.heading(index),
            subcategories=paragraph_to_subcategories(paragraph, category, index),
        )
        for index, paragraph in enumerate(paragraphs[: _target_sections()])
    ]
    return ExplanationDocument(sections=pad_sections(sections, category))


def structure_sections(sections: Iterable[tuple[str, str]], category: Category) -> ExplanationDocument:
    """Build a document from ``(heading, content)`` pairs, keeping each heading."""
    built: list[Section] = []
    for index, (heading, content) in enumerate(sections):
        built.append(
            Section(
                heading=heading.strip() or category.heading(index),
                subcategories=paragraph_to_subcategories(content or "", category, index),
            )
        )
    return ExplanationDocument(sections=pad_sections(built, category))


def complete_document(document: ExplanationDocument, category: Category) -> ExplanationDocument:
    """Fill gaps in an already structured document.

    Blank bullets are dropped, emptied subcategories and sections get a
    placeholder, blank headings and titles are filled from the category
    tables, and the document is padded to three sections. A document that
    already satisfies all of this comes back equal to the input.
    """
    sections: list[Section] = []
    for index, section in enumerate(document.sections):
        subcategories: list[Subcategory] = []
        titles = category.subcategory_titles(index)
        for position, subcategory in enumerate(section.subcategories):
            bullets = [
                BulletPoint(text=bullet.text.strip())
                for bullet in subcategory.bullets
                if bullet.text.strip()
            ]
            if not bullets:
                continue
            title = subcategory.title.strip() or titles[min(position, len(titles) - 1)]
            subcategories.append(Subcategory(title=title, bullets=bullets))
        sections.append(
            Section(
                heading=section.heading.strip() or category.heading(index),
                subcategories=subcategories or [placeholder_subcategory()],
            )
        )
    return ExplanationDocument(sections=pad_sections(sections, category))

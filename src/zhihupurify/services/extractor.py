"""Extraction of question threads from a story's HTML body."""

from __future__ import annotations

import logging
from typing import Iterable, List

from bs4 import Tag

from zhihupurify.models import Question

__all__ = [
    "QUESTION_SELECTOR",
    "QUESTION_TITLE_SELECTOR",
    "QUESTION_LINK_SELECTOR",
    "QUESTION_URL_MARKER",
    "attr_or_default",
    "extract_candidates",
    "extract_questions",
    "is_valid_question",
    "select_first",
    "text_or_default",
]

logger = logging.getLogger(__name__)

QUESTION_SELECTOR = "div.question"
QUESTION_TITLE_SELECTOR = "h2.question-title"
QUESTION_LINK_SELECTOR = "div.view-more a"
QUESTION_URL_MARKER = "zhihu.com/question/"


def select_first(element: Tag | None, selector: str) -> Tag | None:
    """Return the first descendant of ``element`` matching ``selector``."""

    if element is None:
        return None
    return element.select_one(selector)


def text_or_default(element: Tag | None, default: str) -> str:
    """Return the whitespace-normalised text of ``element``, or ``default`` when blank."""

    if element is None:
        return default
    text = " ".join(element.get_text().split())
    return text or default


def attr_or_default(element: Tag | None, attribute: str, default: str = "") -> str:
    if element is None:
        return default
    value = element.get(attribute)
    if value is None:
        return default
    if isinstance(value, list):
        # multi-valued attributes such as ``class`` come back as lists
        return " ".join(value)
    return str(value)


def extract_candidates(document: Tag, fallback_title: str) -> List[Question]:
    """Build one unvalidated question per question block, in document order."""

    candidates: List[Question] = []
    for block in document.select(QUESTION_SELECTOR):
        title = text_or_default(select_first(block, QUESTION_TITLE_SELECTOR), fallback_title)
        url = attr_or_default(select_first(block, QUESTION_LINK_SELECTOR), "href")
        candidates.append(Question(title=title, url=url))
    return candidates


def is_valid_question(question: Question) -> bool:
    """Return ``True`` when the question links to a real discussion thread."""

    return QUESTION_URL_MARKER in question.url


def _validated(candidates: Iterable[Question]) -> List[Question]:
    valid: List[Question] = []
    for candidate in candidates:
        if is_valid_question(candidate):
            valid.append(candidate)
        else:
            logger.debug("Dropping non-question link %r (%s)", candidate.url, candidate.title)
    return valid


def extract_questions(document: Tag, fallback_title: str) -> List[Question]:
    """Return the valid questions found in ``document``.

    Blocks without a title element use ``fallback_title``; blocks without a
    question link are dropped.
    """

    return _validated(extract_candidates(document, fallback_title))

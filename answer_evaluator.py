"""Answer normalization and exact-match checking."""

from __future__ import annotations

from typing import Optional

from question_bank import Question


def normalize_answer(raw: str) -> str:
    """Trim surrounding whitespace and lower-case an answer."""
    return raw.strip().lower()


def check_answer(question: Question, raw: Optional[str]) -> bool:
    """
    Compare a submitted answer with the question's canonical answer.

    No numeric tolerance or alternate formats: "1/2" and "0.5" differ.

    Args:
        question: Question being answered
        raw: Submitted text, or None when nothing arrived in time

    Returns:
        True if the normalized answer matches exactly
    """
    if raw is None:
        return False
    return normalize_answer(raw) == normalize_answer(question.answer)

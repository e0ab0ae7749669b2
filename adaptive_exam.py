"""
Timed Adaptive Exam Engine

Runs a bounded-count, bounded-duration exam:
- Questions come from the question bank at the current difficulty
- Each answer is collected under a per-question timeout
- Streaks of correct/wrong answers raise or lower the difficulty
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Optional, Protocol

from answer_evaluator import check_answer
from question_bank import Difficulty, Question, QuestionGenerator
from score_store import ScoreHistory, ScoreRecord
from timed_input import Clock, MonotonicClock


LOGGER = logging.getLogger(__name__)

MAX_QUESTION_SECONDS = 60
STREAK_TO_CHANGE = 2
EXAM_LABEL = "TimedExam"


# ENUMS

class Transition(Enum):
    """Outcome of feeding one answer into the adapter."""

    NONE = "none"
    PROMOTED = "promoted"
    DEMOTED = "demoted"


# PROTOCOLS

class ExamDisplay(Protocol):
    def show_question(
        self, index: int, total: int, question: Question, timeout: int
    ) -> None:
        ...

    def inform(self, message: str) -> None:
        ...


class LineSource(Protocol):
    def read(self, timeout: Optional[float] = None) -> Optional[str]:
        ...

    def close(self) -> None:
        ...


# STATE

@dataclass
class DifficultyAdapter:
    """Streak-driven difficulty level bounded to Easy..Hard."""

    difficulty: Difficulty = Difficulty.MEDIUM
    correct_streak: int = 0
    wrong_streak: int = 0

    def record(self, correct: bool) -> Transition:
        """
        Update streaks from one outcome and move the difficulty if a streak
        reached the threshold.

        Promotion is checked first; demotion only when no promotion fired.
        """
        if correct:
            self.correct_streak += 1
            self.wrong_streak = 0
        else:
            self.wrong_streak += 1
            self.correct_streak = 0

        if self.correct_streak >= STREAK_TO_CHANGE and self.difficulty < Difficulty.HARD:
            self.difficulty = Difficulty(self.difficulty + 1)
            self.correct_streak = 0
            return Transition.PROMOTED
        if self.wrong_streak >= STREAK_TO_CHANGE and self.difficulty > Difficulty.EASY:
            self.difficulty = Difficulty(self.difficulty - 1)
            self.wrong_streak = 0
            return Transition.DEMOTED
        return Transition.NONE


@dataclass
class ExamSession:
    """Mutable state of one timed exam run."""

    total_questions: int
    deadline: float
    adapter: DifficultyAdapter = field(default_factory=DifficultyAdapter)
    score: int = 0
    questions_asked: int = 0

    @property
    def current_difficulty(self) -> Difficulty:
        return self.adapter.difficulty

    @property
    def correct_streak(self) -> int:
        return self.adapter.correct_streak

    @property
    def wrong_streak(self) -> int:
        return self.adapter.wrong_streak

    def remaining(self, now: float) -> float:
        return self.deadline - now


def per_question_timeout(remaining: float, cap: int = MAX_QUESTION_SECONDS) -> int:
    """Whole seconds allowed for the next answer: remaining time rounded up, capped."""
    return min(cap, math.ceil(remaining))


# ORCHESTRATOR

class TimedExam:
    """Drives one adaptive exam against a display, an input source and a clock."""

    def __init__(
        self,
        generator: QuestionGenerator,
        reader: LineSource,
        display: ExamDisplay,
        clock: Optional[Clock] = None,
        history: Optional[ScoreHistory] = None,
        timeout_cap: int = MAX_QUESTION_SECONDS,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._generator = generator
        self._reader = reader
        self._display = display
        self._clock = clock or MonotonicClock()
        self._history = history
        self._timeout_cap = min(timeout_cap, MAX_QUESTION_SECONDS)
        self._now = now
        self.session: Optional[ExamSession] = None

    def run(self, question_count: int, total_minutes: int) -> ScoreRecord:
        """
        Run an exam until all questions are asked or the clock expires.

        Args:
            question_count: Maximum number of questions
            total_minutes: Total exam duration

        Returns:
            ScoreRecord with the accumulated score
        """
        session = ExamSession(
            total_questions=question_count,
            deadline=self._clock.now() + total_minutes * 60,
        )
        self.session = session
        LOGGER.info(
            "Exam started: %d questions, %d minutes", question_count, total_minutes
        )

        for index in range(1, question_count + 1):
            remaining = session.remaining(self._clock.now())
            if remaining <= 0:
                self._display.inform("Time's up!")
                break

            self._ask(session, index, remaining)

            if session.remaining(self._clock.now()) <= 0:
                self._display.inform("Time's up!")
                break

        record = ScoreRecord(label=EXAM_LABEL, score=session.score, timestamp=self._now())
        if self._history is not None:
            self._history.add(record)
        LOGGER.info(
            "Exam finished: score %d after %d questions",
            session.score,
            session.questions_asked,
        )
        self._display.inform(f"Exam finished. Your score: {session.score}")
        return record

    def _ask(self, session: ExamSession, index: int, remaining: float) -> None:
        question = self._generator.generate(session.current_difficulty)
        timeout = per_question_timeout(remaining, self._timeout_cap)
        self._display.show_question(index, session.total_questions, question, timeout)

        raw = self._reader.read(timeout)
        session.questions_asked += 1
        correct = check_answer(question, raw)

        if correct:
            session.score += question.points
            self._display.inform("Correct!")
        elif raw is None:
            self._display.inform(
                f"No answer entered in time. Marked wrong. Correct answer: {question.answer}"
            )
        else:
            self._display.inform(f"Incorrect. Correct answer: {question.answer}")
        LOGGER.debug("Question %d answered, correct=%s", question.id, correct)

        transition = session.adapter.record(correct)
        if transition is Transition.PROMOTED:
            self._display.inform(
                f"Difficulty increased to {session.current_difficulty.label}"
            )
        elif transition is Transition.DEMOTED:
            self._display.inform(
                f"Difficulty decreased to {session.current_difficulty.label}"
            )

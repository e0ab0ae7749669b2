#!/usr/bin/env python3
"""
Aptitude Practice Console

Text menu over the adaptive exam engine:
- Timed adaptive exam (difficulty follows answer streaks)
- Practice mode at a chosen difficulty, without a timeout
- Viewing and saving past scores
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Dict, Optional

import click
from rich.console import Console

from adaptive_exam import LineSource, TimedExam
from answer_evaluator import check_answer
from question_bank import Difficulty, Question, QuestionGenerator
from score_store import ScoreHistory, ScoreRecord, ScoreStore, ScoreStoreError
from settings import MAX_MINUTES, MAX_QUESTIONS, Settings, load_settings
from timed_input import TimedLineReader


__version__ = "1.0.0"

LOGGER = logging.getLogger(__name__)


class AptitudeConsole:
    """Menu driver and display sink for the exam engine."""

    def __init__(
        self,
        console: Console,
        reader: LineSource,
        generator: QuestionGenerator,
        history: ScoreHistory,
        store: ScoreStore,
        settings: Settings,
    ) -> None:
        self.console = console
        self.reader = reader
        self.generator = generator
        self.history = history
        self.store = store
        self.settings = settings

    # DISPLAY SINK

    def show_question(
        self, index: int, total: int, question: Question, timeout: int
    ) -> None:
        self.console.print(
            f"\nQuestion {index} of {total} (Difficulty: {question.difficulty.label})",
            style="bold cyan",
        )
        self._show_body(question)
        self.console.print(
            f"You have up to {timeout} seconds to answer. Enter answer: ", end=""
        )

    def inform(self, message: str) -> None:
        self.console.print(message, markup=False, highlight=False)

    def warn(self, message: str) -> None:
        self.console.print(message, style="yellow", markup=False, highlight=False)

    def _show_body(self, question: Question) -> None:
        self.console.print(question.prompt, markup=False, highlight=False)
        for line in question.option_lines():
            self.console.print(f"  {line}", markup=False, highlight=False)

    # PROMPTS

    def close(self) -> None:
        """Release the input reader once no more prompts will be shown."""
        self.reader.close()

    def ask(self, prompt: str) -> Optional[str]:
        """Print a prompt and wait for one line, without a timeout."""
        self.console.print(prompt, end="", markup=False, highlight=False)
        return self.reader.read()

    def prompt_int(self, prompt: str, minimum: int, maximum: int, default: int) -> int:
        """
        Ask for an integer in [minimum, maximum], re-prompting on bad input.

        Empty input (or end of input) selects the default.
        """
        while True:
            line = self.ask(prompt)
            if line is None or not line.strip():
                return default
            try:
                value = int(line.strip())
            except ValueError:
                self.inform("Please enter a valid integer.")
                continue
            if not minimum <= value <= maximum:
                self.inform("Value out of range. Try again.")
                continue
            return value

    # MENU

    def main_menu(self) -> None:
        actions: Dict[str, Callable[[], object]] = {
            "1": self.start_timed_exam,
            "2": self.practice_mode,
            "3": self.view_scores,
            "4": self.save_scores,
        }
        while True:
            self.console.print("\n=== Aptitude Practice Simulator ===", style="bold")
            self.inform("1) Start Timed Exam (Adaptive)")
            self.inform("2) Practice Mode (choose difficulty)")
            self.inform("3) View Past Scores")
            self.inform("4) Save Scores to File")
            self.inform("5) Exit")
            choice = self.ask("Choose an option: ")
            if choice is None or choice.strip() == "5":
                self.inform("Goodbye!")
                self.close()
                return
            action = actions.get(choice.strip())
            if action is None:
                self.inform("Invalid option. Try again.")
                continue
            action()

    def start_timed_exam(
        self,
        questions: Optional[int] = None,
        minutes: Optional[int] = None,
    ) -> ScoreRecord:
        self.console.print("\n-- Start Timed Exam (Aptitude + Reasoning) --", style="bold")
        if questions is None:
            questions = self.prompt_int(
                f"Number of questions (suggested {self.settings.default_questions}): ",
                1,
                MAX_QUESTIONS,
                self.settings.default_questions,
            )
        if minutes is None:
            minutes = self.prompt_int(
                f"Total time in minutes (suggested {self.settings.default_minutes}): ",
                1,
                MAX_MINUTES,
                self.settings.default_minutes,
            )

        exam = TimedExam(
            self.generator,
            self.reader,
            self,
            history=self.history,
            timeout_cap=self.settings.timeout_cap,
        )
        return exam.run(questions, minutes)

    def practice_mode(self, difficulty: Optional[int] = None) -> bool:
        self.console.print("\n-- Practice Mode --", style="bold")
        if difficulty is None:
            self.inform("Select difficulty: 1) Easy  2) Medium  3) Hard")
            difficulty = self.prompt_int("Choose: ", 1, 3, int(Difficulty.MEDIUM))

        question = self.generator.generate(difficulty)
        self._show_body(question)
        answer = self.ask("Enter answer (no timeout in practice): ")
        if check_answer(question, answer):
            self.inform("Correct!")
            return True
        self.inform(f"Incorrect. Correct: {question.answer}")
        return False

    # SCORES

    def load_scores(self) -> None:
        try:
            self.history.load(self.store)
        except ScoreStoreError as exc:
            LOGGER.warning("Could not load past scores: %s", exc)
            self.warn(f"Error loading past scores: {exc}")

    def view_scores(self) -> None:
        self.console.print("\n-- Past Scores --", style="bold")
        lines = self.history.lines()
        if not lines:
            self.inform("No past scores yet.")
            return
        for line in lines:
            self.inform(line)

    def save_scores(self) -> bool:
        try:
            written = self.history.flush(self.store)
        except ScoreStoreError as exc:
            LOGGER.warning("Could not save scores: %s", exc)
            self.warn(f"Error saving scores: {exc}")
            return False
        if written:
            self.inform(f"Scores saved to '{self.store.path}'.")
        else:
            self.inform("No new scores to save.")
        return True


def build_console_app(
    settings: Settings,
    console: Optional[Console] = None,
    reader: Optional[LineSource] = None,
) -> AptitudeConsole:
    """
    Wire the console to its collaborators and load past scores.

    Args:
        settings: Loaded settings
        console: Rich console; stdout when omitted
        reader: Line source; a TimedLineReader over `input` when omitted

    Returns:
        AptitudeConsole instance
    """
    app = AptitudeConsole(
        console=console or Console(),
        reader=reader or TimedLineReader(),
        generator=QuestionGenerator(random.Random(settings.seed)),
        history=ScoreHistory(),
        store=ScoreStore(settings.score_file),
        settings=settings,
    )
    app.load_scores()
    return app


# CLI

@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="aptitude")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Aptitude practice console with timed adaptive exams."""
    settings = load_settings()
    logging.basicConfig(level=settings.level)
    ctx.obj = settings
    if ctx.invoked_subcommand is None:
        ctx.invoke(menu)


@cli.command()
@click.pass_obj
def menu(settings: Settings) -> None:
    """Open the interactive menu."""
    build_console_app(settings).main_menu()


@cli.command()
@click.option("--questions", type=click.IntRange(1, MAX_QUESTIONS), default=None,
              help="Number of questions")
@click.option("--minutes", type=click.IntRange(1, MAX_MINUTES), default=None,
              help="Total exam time in minutes")
@click.pass_obj
def exam(settings: Settings, questions: Optional[int], minutes: Optional[int]) -> None:
    """Run one timed adaptive exam and save its score."""
    app = build_console_app(settings)
    app.start_timed_exam(
        questions or settings.default_questions,
        minutes or settings.default_minutes,
    )
    app.save_scores()
    app.close()


@cli.command()
@click.option("--difficulty", type=click.IntRange(1, 3), default=None,
              help="1=Easy, 2=Medium, 3=Hard")
@click.pass_obj
def practice(settings: Settings, difficulty: Optional[int]) -> None:
    """Answer one untimed question."""
    app = build_console_app(settings)
    app.practice_mode(difficulty)
    app.close()


@cli.command()
@click.pass_obj
def scores(settings: Settings) -> None:
    """List past scores."""
    build_console_app(settings).view_scores()


if __name__ == "__main__":
    cli()

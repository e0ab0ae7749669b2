"""Test coverage for answer checking."""
import random
from types import MappingProxyType

from answer_evaluator import check_answer, normalize_answer
from question_bank import Difficulty, Question, QuestionGenerator, QuestionVariant


def _question(answer, options=None):
    return Question(
        id=1,
        difficulty=Difficulty.MEDIUM,
        variant=QuestionVariant.PROBABILITY,
        prompt="prompt",
        options=options,
        answer=answer,
        params=MappingProxyType({}),
    )


class TestCheckAnswer:
    """Test exact normalized matching."""

    def test_missing_answer_is_wrong(self):
        assert check_answer(_question("12"), None) is False

    def test_case_and_whitespace_insensitive(self):
        question = _question("a", ("x", "y", "z", "w"))
        assert check_answer(question, " A ") == check_answer(question, "a") is True

    def test_free_form_numeric(self):
        question = _question("42")
        assert check_answer(question, "42\n")
        assert not check_answer(question, "42.0")

    def test_no_alternate_formats(self):
        assert not check_answer(_question("1/2"), "0.5")

    def test_pair_answer_exact(self):
        question = _question("12,18")
        assert check_answer(question, " 12,18 ")
        assert not check_answer(question, "12, 18")

    def test_empty_string_is_wrong(self):
        assert not check_answer(_question("7"), "   ")

    def test_generated_answer_accepted_in_upper_case(self):
        question = QuestionGenerator(random.Random(2)).generate(3, QuestionVariant.CALENDAR)
        assert check_answer(question, "A")


class TestNormalizeAnswer:
    def test_strip_and_lower(self):
        assert normalize_answer("  Each Alone \t") == "each alone"

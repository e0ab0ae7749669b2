"""
Procedural Aptitude Question Bank

Generates self-contained aptitude questions using:
- Ten templates per difficulty tier (arithmetic, logic, verbal)
- Closed-form canonical answers computed from the drawn parameters

Designed to be:
- Deterministic in structure, random in content
- Free of ambient state (id sequence and random source are injected)
"""

from __future__ import annotations

import itertools
import logging
import math
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from fractions import Fraction
from types import MappingProxyType
from typing import Callable, Dict, Iterator, Mapping, Optional, Tuple, Union


LOGGER = logging.getLogger(__name__)


# ENUMS

class Difficulty(IntEnum):
    """Difficulty tiers, usable as the 1-3 difficulty scalar."""

    EASY = 1
    MEDIUM = 2
    HARD = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @property
    def points(self) -> int:
        return _POINTS_MAP[self]

    @classmethod
    def coerce(cls, value: Union[int, "Difficulty"]) -> "Difficulty":
        """Convert a raw 1-3 integer into a Difficulty.

        Raises:
            ValueError: If the value is not a known tier
        """
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            raise ValueError(f"Difficulty must be 1, 2 or 3, got {value!r}") from None


_POINTS_MAP = {
    Difficulty.EASY: 2,
    Difficulty.MEDIUM: 5,
    Difficulty.HARD: 10,
}


class QuestionVariant(Enum):
    """Question templates, tagged with their tier and slot (0-9)."""

    LINEAR_EQUATION = (Difficulty.EASY, 0)
    NUMBER_SERIES = (Difficulty.EASY, 1)
    PERCENTAGE = (Difficulty.EASY, 2)
    AVERAGE = (Difficulty.EASY, 3)
    AGE = (Difficulty.EASY, 4)
    MULTIPLICATION = (Difficulty.EASY, 5)
    ODD_ONE_OUT = (Difficulty.EASY, 6)
    RATIO_SPLIT = (Difficulty.EASY, 7)
    ANTONYM = (Difficulty.EASY, 8)
    ADDITION = (Difficulty.EASY, 9)

    TRAIN_SPEED = (Difficulty.MEDIUM, 0)
    RATIO_WITH_SUM = (Difficulty.MEDIUM, 1)
    PROFIT = (Difficulty.MEDIUM, 2)
    TIME_AND_WORK = (Difficulty.MEDIUM, 3)
    COMPOUND_INTEREST = (Difficulty.MEDIUM, 4)
    GEOMETRIC_PROGRESSION = (Difficulty.MEDIUM, 5)
    PERMUTATION = (Difficulty.MEDIUM, 6)
    PROBABILITY = (Difficulty.MEDIUM, 7)
    BLOOD_RELATION = (Difficulty.MEDIUM, 8)
    MIXTURE = (Difficulty.MEDIUM, 9)

    NATURAL_SUM = (Difficulty.HARD, 0)
    SEQUENTIAL_WORK = (Difficulty.HARD, 1)
    CALENDAR = (Difficulty.HARD, 2)
    LOGARITHM = (Difficulty.HARD, 3)
    AP_SUM = (Difficulty.HARD, 4)
    PIPE_AND_CISTERN = (Difficulty.HARD, 5)
    CLOCK_ANGLE = (Difficulty.HARD, 6)
    SYLLOGISM = (Difficulty.HARD, 7)
    DATA_SUFFICIENCY = (Difficulty.HARD, 8)
    CUBE_ROOT = (Difficulty.HARD, 9)

    @property
    def difficulty(self) -> Difficulty:
        return self.value[0]

    @property
    def slot(self) -> int:
        return self.value[1]


VARIANTS_PER_TIER = 10

VARIANTS: Dict[Difficulty, Tuple[QuestionVariant, ...]] = {
    tier: tuple(
        sorted(
            (v for v in QuestionVariant if v.difficulty is tier),
            key=lambda v: v.slot,
        )
    )
    for tier in Difficulty
}


# DATA MODELS

@dataclass(frozen=True, slots=True)
class Question:
    """A generated question with its canonical answer."""

    id: int
    difficulty: Difficulty
    variant: QuestionVariant
    prompt: str
    options: Optional[Tuple[str, ...]]
    answer: str
    params: Mapping[str, int]

    @property
    def points(self) -> int:
        return self.difficulty.points

    def option_lines(self) -> Tuple[str, ...]:
        """Render options as "A) ..." lines in generation order."""
        if not self.options:
            return ()
        return tuple(
            f"{chr(ord('A') + i)}) {text}" for i, text in enumerate(self.options)
        )


@dataclass(frozen=True, slots=True)
class _Draft:
    prompt: str
    answer: str
    params: Dict[str, int]
    options: Optional[Tuple[str, ...]] = None


# UTILITIES

def factorial(n: int) -> int:
    result = 1
    for i in range(2, n + 1):
        result *= i
    return result


def format_fraction(numerator: int, denominator: int) -> str:
    """Format a fraction in lowest terms as "n/d"."""
    divisor = math.gcd(numerator, denominator)
    return f"{numerator // divisor}/{denominator // divisor}"


def round_half_up(value: Union[Fraction, float]) -> int:
    return math.floor(value + Fraction(1, 2))


MAX_TRIANGULAR_STEPS = 3


def solve_triangular_index(total: int, max_steps: int = MAX_TRIANGULAR_STEPS) -> int:
    """
    Find n such that 1 + 2 + ... + n == total.

    Starts from the isqrt(2 * total) estimate and searches upward, giving up
    after max_steps candidates.

    Raises:
        ValueError: If total is not a triangular number
    """
    n = math.isqrt(2 * total)
    for _ in range(max_steps):
        if n * (n + 1) // 2 == total:
            return n
        n += 1
    raise ValueError(f"{total} is not a triangular number")


# EASY BUILDERS

def _linear_equation(rng: random.Random) -> _Draft:
    a = rng.randint(2, 6)
    x = rng.randint(1, 10)
    b = rng.randint(5, 24)
    result = a * x + b
    return _Draft(
        f"If {a}x + {b} = {result}, what is x?",
        str(x),
        {"a": a, "b": b, "result": result, "x": x},
    )


def _number_series(rng: random.Random) -> _Draft:
    start = rng.randint(1, 10)
    diff = rng.randint(1, 5)
    terms = ", ".join(str(start + i * diff) for i in range(4))
    return _Draft(
        f"Find the next number: {terms}, ?",
        str(start + 4 * diff),
        {"start": start, "diff": diff},
    )


def _percentage(rng: random.Random) -> _Draft:
    percent = rng.randint(1, 4) * 25
    base = rng.randint(1, 9) * 20
    return _Draft(
        f"What is {percent}% of {base}?",
        str(base * percent // 100),
        {"percent": percent, "base": base},
    )


def _average(rng: random.Random) -> _Draft:
    a = rng.randint(10, 29)
    b = rng.randint(10, 29)
    c = rng.randint(10, 29)
    c += -(a + b + c) % 3
    return _Draft(
        f"What is the average of {a}, {b}, and {c}?",
        str((a + b + c) // 3),
        {"a": a, "b": b, "c": c},
    )


def _age(rng: random.Random) -> _Draft:
    age = rng.randint(20, 49)
    years = rng.randint(5, 14)
    return _Draft(
        f"I am {age} years old. How old will I be in {years} years?",
        str(age + years),
        {"age": age, "years": years},
    )


def _multiplication(rng: random.Random) -> _Draft:
    a = rng.randint(5, 14)
    b = rng.randint(5, 14)
    return _Draft(f"What is {a} × {b}?", str(a * b), {"a": a, "b": b})


def _odd_one_out(rng: random.Random) -> _Draft:
    return _Draft(
        "Which one is NOT a fruit?",
        "C",
        {},
        ("Apple", "Banana", "Carrot", "Mango"),
    )


def _ratio_split(rng: random.Random) -> _Draft:
    ratio1 = rng.randint(1, 3)
    ratio2 = rng.randint(1, 3)
    total = (ratio1 + ratio2) * rng.randint(2, 10)
    return _Draft(
        f"Divide {total} in the ratio {ratio1}:{ratio2}. What is the first part?",
        str(total * ratio1 // (ratio1 + ratio2)),
        {"total": total, "ratio1": ratio1, "ratio2": ratio2},
    )


_ANTONYMS = (
    ("Happy", "Sad", "Joyful", "Excited", "Cheerful"),
    ("Hot", "Cold", "Warm", "Boiling", "Heated"),
    ("Big", "Small", "Large", "Huge", "Giant"),
)


def _antonym(rng: random.Random) -> _Draft:
    index = rng.randrange(len(_ANTONYMS))
    word, *choices = _ANTONYMS[index]
    return _Draft(
        f"What is the opposite of '{word}'?",
        "A",
        {"set": index},
        tuple(choices),
    )


def _addition(rng: random.Random) -> _Draft:
    a = rng.randint(10, 59)
    b = rng.randint(10, 59)
    return _Draft(f"What is {a} + {b}?", str(a + b), {"a": a, "b": b})


# MEDIUM BUILDERS

def _train_speed(rng: random.Random) -> _Draft:
    length = rng.randint(5, 14) * 10
    seconds = rng.randint(3, 10)
    return _Draft(
        f"A train {length}m long passes a pole in {seconds} seconds. "
        "What is the speed (m/s)?",
        str(length // seconds),
        {"length": length, "seconds": seconds},
    )


def _ratio_with_sum(rng: random.Random) -> _Draft:
    ratio1 = rng.randint(2, 5)
    ratio2 = rng.randint(3, 6)
    total = (ratio1 + ratio2) * rng.randint(3, 7)
    first = total * ratio1 // (ratio1 + ratio2)
    return _Draft(
        f"The ratio of two numbers is {ratio1}:{ratio2} and their sum is {total}. "
        "What are the numbers? (smaller,larger)",
        f"{first},{total - first}",
        {"ratio1": ratio1, "ratio2": ratio2, "sum": total},
    )


def _profit(rng: random.Random) -> _Draft:
    cost = rng.randint(10, 19) * 10
    percent = rng.randint(1, 4) * 5
    return _Draft(
        f"An item is bought for ₹{cost} and sold at {percent}% profit. "
        "What is the selling price?",
        str(cost + cost * percent // 100),
        {"cost": cost, "percent": percent},
    )


def _time_and_work(rng: random.Random) -> _Draft:
    days1 = rng.randint(3, 7) * 4
    days2 = rng.randint(4, 8) * 4
    together = 1 / (Fraction(1, days1) + Fraction(1, days2))
    return _Draft(
        f"A can complete work in {days1} days, B in {days2} days. "
        "Working together, how many days?",
        str(round_half_up(together)),
        {"days1": days1, "days2": days2},
    )


def _compound_interest(rng: random.Random) -> _Draft:
    principal = rng.randint(5, 9) * 1000
    rate = rng.randint(5, 8)
    amount = principal * (100 + rate) ** 2 // 100 ** 2
    return _Draft(
        f"Find compound interest on ₹{principal} at {rate}% for 2 years.",
        str(amount - principal),
        {"principal": principal, "rate": rate, "years": 2},
    )


def _geometric_progression(rng: random.Random) -> _Draft:
    first = rng.randint(2, 6)
    ratio = rng.randint(2, 4)
    return _Draft(
        f"Find the next term: {first}, {first * ratio}, {first * ratio ** 2}, ?",
        str(first * ratio ** 3),
        {"first": first, "ratio": ratio},
    )


def _permutation(rng: random.Random) -> _Draft:
    n = rng.randint(4, 7)
    r = rng.randint(1, n - 1)
    return _Draft(
        f"How many ways can you arrange {r} items from {n} distinct items?",
        str(factorial(n) // factorial(n - r)),
        {"n": n, "r": r},
    )


def _probability(rng: random.Random) -> _Draft:
    total = rng.randint(10, 19)
    favorable = rng.randint(1, total // 2)
    return _Draft(
        f"In a bag of {total} balls, {favorable} are red. What is the probability "
        "of drawing a red ball? (as fraction, e.g., 1/4)",
        format_fraction(favorable, total),
        {"total": total, "favorable": favorable},
    )


_RELATIONS = (
    ("A's mother", "B", "grandmother"),
    ("A's brother", "C", "uncle"),
    ("A's sister", "D", "aunt"),
)


def _blood_relation(rng: random.Random) -> _Draft:
    index = rng.randrange(len(_RELATIONS))
    subject, name, relation = _RELATIONS[index]
    return _Draft(
        f"If {subject} is {name}, then what is {name} to A's child?",
        "A",
        {"set": index},
        (relation, "Sibling", "Cousin", "Niece"),
    )


def _mixture(rng: random.Random) -> _Draft:
    qty1 = rng.randint(10, 29)
    qty2 = rng.randint(10, 29)
    price1 = rng.randint(10, 19)
    price2 = rng.randint(15, 24)
    average = (qty1 * price1 + qty2 * price2) // (qty1 + qty2)
    return _Draft(
        f"Mix {qty1}kg at ₹{price1}/kg with {qty2}kg at ₹{price2}/kg. Average price/kg?",
        str(average),
        {"qty1": qty1, "qty2": qty2, "price1": price1, "price2": price2},
    )


# HARD BUILDERS

def _natural_sum(rng: random.Random) -> _Draft:
    n = rng.randint(14, 26)
    total = n * (n + 1) // 2
    return _Draft(
        f"If sum of first n natural numbers is {total}, find n.",
        str(solve_triangular_index(total)),
        {"sum": total},
    )


def _sequential_work(rng: random.Random) -> _Draft:
    days1 = rng.randint(8, 15)
    days2 = rng.randint(12, 19)
    worked = rng.randint(2, days1 - 1)
    more = -(-(days1 - worked) * days2 // days1)
    return _Draft(
        f"A can finish work in {days1} days, B in {days2} days. "
        f"A works for {worked} days then B finishes. Total days?",
        str(worked + more),
        {"days1": days1, "days2": days2, "worked": worked},
    )


WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def _calendar(rng: random.Random) -> _Draft:
    start = rng.randrange(7)
    offset = rng.randint(50, 149)
    end = (start + offset) % 7
    return _Draft(
        f"If today is {WEEKDAYS[start]}, what day will it be {offset} days later?",
        "A",
        {"start": start, "offset": offset},
        tuple(WEEKDAYS[(end + i) % 7] for i in range(4)),
    )


def _logarithm(rng: random.Random) -> _Draft:
    base = rng.randint(2, 4)
    exponent = rng.randint(2, 5)
    value = base ** exponent
    return _Draft(
        f"What is log{base}({value})?",
        str(exponent),
        {"base": base, "value": value},
    )


def _ap_sum(rng: random.Random) -> _Draft:
    first = rng.randint(5, 14)
    diff = rng.randint(2, 6)
    n = rng.randint(10, 19)
    return _Draft(
        f"Sum of {n} terms of AP with first term {first} and common difference {diff}?",
        str(n * (2 * first + (n - 1) * diff) // 2),
        {"n": n, "first": first, "diff": diff},
    )


def _pipe_and_cistern(rng: random.Random) -> _Draft:
    fill1 = rng.randint(10, 19)
    fill2 = rng.randint(15, 24)
    empty = rng.randint(20, 34)
    net_rate = Fraction(1, fill1) + Fraction(1, fill2) - Fraction(1, empty)
    return _Draft(
        f"Pipe A fills tank in {fill1}h, B in {fill2}h, C empties in {empty}h. "
        "All open, tank fills in?",
        str(round_half_up(1 / net_rate)),
        {"fill1": fill1, "fill2": fill2, "empty": empty},
    )


def _clock_angle(rng: random.Random) -> _Draft:
    hour = rng.randint(1, 11)
    minute = rng.randrange(12) * 5
    # half-degree units keep the 0.5 deg/min hour-hand drift integral
    half_degrees = abs((hour * 60 + minute) - minute * 12)
    if half_degrees > 360:
        half_degrees = 720 - half_degrees
    return _Draft(
        f"What is the angle between hour and minute hands at {hour}:{minute:02d}?",
        str(half_degrees // 2),
        {"hour": hour, "minute": minute},
    )


def _syllogism(rng: random.Random) -> _Draft:
    return _Draft(
        "All X are Y. All Y are Z. Some Z are W. Which conclusion is valid?",
        "A",
        {},
        ("All X are Z", "Some W are X", "No X are W", "None of these"),
    )


def _data_sufficiency(rng: random.Random) -> _Draft:
    x = rng.randint(10, 29)
    return _Draft(
        f"To find the value of x: (1) x + 5 = {x + 5}  (2) 2x = {2 * x}. "
        "Which statement(s) sufficient?",
        "D",
        {"x": x},
        ("(1) alone", "(2) alone", "Both together", "Each alone"),
    )


def _cube_root(rng: random.Random) -> _Draft:
    num = rng.randint(2, 10)
    return _Draft(
        f"What is the cube root of {num ** 3}?",
        str(num),
        {"cube": num ** 3},
    )


_BUILDERS: Dict[QuestionVariant, Callable[[random.Random], _Draft]] = {
    QuestionVariant.LINEAR_EQUATION: _linear_equation,
    QuestionVariant.NUMBER_SERIES: _number_series,
    QuestionVariant.PERCENTAGE: _percentage,
    QuestionVariant.AVERAGE: _average,
    QuestionVariant.AGE: _age,
    QuestionVariant.MULTIPLICATION: _multiplication,
    QuestionVariant.ODD_ONE_OUT: _odd_one_out,
    QuestionVariant.RATIO_SPLIT: _ratio_split,
    QuestionVariant.ANTONYM: _antonym,
    QuestionVariant.ADDITION: _addition,
    QuestionVariant.TRAIN_SPEED: _train_speed,
    QuestionVariant.RATIO_WITH_SUM: _ratio_with_sum,
    QuestionVariant.PROFIT: _profit,
    QuestionVariant.TIME_AND_WORK: _time_and_work,
    QuestionVariant.COMPOUND_INTEREST: _compound_interest,
    QuestionVariant.GEOMETRIC_PROGRESSION: _geometric_progression,
    QuestionVariant.PERMUTATION: _permutation,
    QuestionVariant.PROBABILITY: _probability,
    QuestionVariant.BLOOD_RELATION: _blood_relation,
    QuestionVariant.MIXTURE: _mixture,
    QuestionVariant.NATURAL_SUM: _natural_sum,
    QuestionVariant.SEQUENTIAL_WORK: _sequential_work,
    QuestionVariant.CALENDAR: _calendar,
    QuestionVariant.LOGARITHM: _logarithm,
    QuestionVariant.AP_SUM: _ap_sum,
    QuestionVariant.PIPE_AND_CISTERN: _pipe_and_cistern,
    QuestionVariant.CLOCK_ANGLE: _clock_angle,
    QuestionVariant.SYLLOGISM: _syllogism,
    QuestionVariant.DATA_SUFFICIENCY: _data_sufficiency,
    QuestionVariant.CUBE_ROOT: _cube_root,
}


# GENERATOR

class QuestionGenerator:
    """Builds questions for a tier from the injected random source."""

    FIRST_QUESTION_ID = 1000

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        ids: Optional[Iterator[int]] = None,
    ) -> None:
        """
        Initialize generator.

        Args:
            rng: Random source; a fresh unseeded one when omitted
            ids: Question id sequence; counts up from 1000 when omitted
        """
        self._rng = rng or random.Random()
        self._ids = ids or itertools.count(self.FIRST_QUESTION_ID)

    def generate(
        self,
        difficulty: Union[int, Difficulty],
        variant: Union[None, int, QuestionVariant] = None,
    ) -> Question:
        """
        Generate a question for a difficulty tier.

        Args:
            difficulty: Tier 1-3
            variant: Slot 0-9 or a variant tag of the same tier; picked
                uniformly at random when omitted

        Returns:
            Question object

        Raises:
            ValueError: If the difficulty or variant is out of range
        """
        tier = Difficulty.coerce(difficulty)
        chosen = self._resolve_variant(tier, variant)
        draft = _BUILDERS[chosen](self._rng)

        question = Question(
            id=next(self._ids),
            difficulty=tier,
            variant=chosen,
            prompt=draft.prompt,
            options=draft.options,
            answer=draft.answer.strip().lower(),
            params=MappingProxyType(dict(draft.params)),
        )
        LOGGER.debug(
            "Generated question %d (%s, %s)",
            question.id,
            tier.label,
            chosen.name,
        )
        return question

    def _resolve_variant(
        self,
        tier: Difficulty,
        variant: Union[None, int, QuestionVariant],
    ) -> QuestionVariant:
        if variant is None:
            return VARIANTS[tier][self._rng.randrange(VARIANTS_PER_TIER)]

        if isinstance(variant, QuestionVariant):
            if variant.difficulty is not tier:
                raise ValueError(
                    f"{variant.name} belongs to {variant.difficulty.label}, "
                    f"not {tier.label}"
                )
            return variant

        if not 0 <= variant < VARIANTS_PER_TIER:
            raise ValueError(f"Variant selector must be 0-9, got {variant}")
        return VARIANTS[tier][variant]

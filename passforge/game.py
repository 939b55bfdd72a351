"""Gamified build-a-password quiz.

The quiz walks through :data:`STEPS` in order.  Each accepted answer is
appended verbatim to the password being built; a rejected answer leaves
the session on the same step.  The caller owns the :class:`GameSession`
and drives it with :func:`submit` and :func:`skip`.
"""

import logging
import math
import random
import re
import string
from dataclasses import dataclass
from enum import Enum
from typing import Callable

log = logging.getLogger(__name__)


def _two_upper(s: str) -> bool:
    return re.fullmatch(r"[A-Z]{2}", s) is not None


def _symbol_then_digit(s: str) -> bool:
    return re.fullmatch(r"[!@#$%^&*][0-9]", s) is not None


def _three_lower(s: str) -> bool:
    return re.fullmatch(r"[a-z]{3}", s) is not None


def _four_digit_pin(s: str) -> bool:
    """Four digits that are not all the same and not a +1 / -1 run."""
    if re.fullmatch(r"[0-9]{4}", s) is None:
        return False
    if len(set(s)) == 1:
        return False

    digits = [int(c) for c in s]
    steps = {b - a for a, b in zip(digits, digits[1:])}
    return steps not in ({1}, {-1})


def _two_words(s: str) -> bool:
    return re.fullmatch(r"[A-Za-z]{3,6}[!@#$%^&*][A-Za-z]{3,6}", s) is not None


@dataclass(frozen=True)
class Step:
    prompt: str
    check: Callable[[str], bool]


STEPS = (
    Step("Type exactly 2 UPPERCASE letters (e.g., AB)", _two_upper),
    Step("Type a symbol from !@#$%^&* followed by a single digit (e.g., @5)",
         _symbol_then_digit),
    Step("Type 3 random lowercase letters (e.g., xqz)", _three_lower),
    Step("Enter a 4-digit number that is NOT sequential like 1234 "
         "or all repeated like 1111", _four_digit_pin),
    Step("Type two short words (3-6 letters) joined by a symbol "
         "(e.g., moon#lake)", _two_words),
)

# Skipped steps get a token from the base-36 alphabet.
_FALLBACK_ALPHABET = string.digits + string.ascii_lowercase
_FALLBACK_LENGTH = 3


class Outcome(Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    ADVANCED = "advanced"
    COMPLETED = "completed"


@dataclass(frozen=True)
class StepResult:
    outcome: Outcome
    password: str | None = None


@dataclass
class GameSession:
    step_index: int = 0
    accumulated: str = ""

    @property
    def total_steps(self) -> int:
        return len(STEPS)

    @property
    def is_complete(self) -> bool:
        return self.step_index >= self.total_steps

    @property
    def current_step(self) -> Step | None:
        if self.is_complete:
            return None
        return STEPS[self.step_index]

    def reset(self) -> None:
        self.step_index = 0
        self.accumulated = ""


def _advance(session: GameSession, piece: str, outcome: Outcome) -> StepResult:
    session.accumulated += piece
    session.step_index += 1
    if session.is_complete:
        log.debug("quiz complete after %d steps", session.total_steps)
        return StepResult(Outcome.COMPLETED, session.accumulated)
    return StepResult(outcome)


def submit(session: GameSession, answer: str) -> StepResult:
    """Validate *answer* against the current step and advance on success.

    Calling this on a finished session changes nothing and reports
    COMPLETED again.
    """
    if session.is_complete:
        return StepResult(Outcome.COMPLETED, session.accumulated)

    answer = answer.strip()
    if not STEPS[session.step_index].check(answer):
        log.debug("step %d rejected", session.step_index + 1)
        return StepResult(Outcome.REJECTED)

    log.debug("step %d accepted", session.step_index + 1)
    return _advance(session, answer, Outcome.ACCEPTED)


def skip(session: GameSession, random_source=random.random) -> StepResult:
    """Fill the current step with a random 3-character token and advance.

    The token is not validated, so a quiz with skipped steps does not
    satisfy every step's constraint.
    """
    if session.is_complete:
        return StepResult(Outcome.COMPLETED, session.accumulated)

    token = "".join(
        _FALLBACK_ALPHABET[math.floor(random_source() * len(_FALLBACK_ALPHABET))]
        for _ in range(_FALLBACK_LENGTH)
    )
    log.debug("step %d skipped", session.step_index + 1)
    return _advance(session, token, Outcome.ADVANCED)

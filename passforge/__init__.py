"""PassForge -- password strength and generation engine.

Core functions for rule-based strength evaluation, entropy and crack-time
estimation, constrained password generation, and the gamified
build-a-password quiz (see :mod:`passforge.game`).
"""

import logging
import math
import random
import string
from dataclasses import asdict, dataclass
from enum import Enum

from passforge.game import (
    STEPS,
    GameSession,
    Outcome,
    Step,
    StepResult,
    skip,
    submit,
)

log = logging.getLogger(__name__)


# ── Strength rules ─────────────────────────────────────────────────────────

MIN_LENGTH = 12
STRONG_LENGTH = 14
MAX_SCORE = 5


class Label(str, Enum):
    NOT_MET = "Requirements not met"
    INTERMEDIATE = "Intermediate"
    STRONG = "Strong"


def is_symbol(ch: str) -> bool:
    """Return True for anything that is not an ASCII letter or digit.

    Underscore and non-ASCII characters therefore count as symbols.
    """
    return ch not in string.ascii_letters and ch not in string.digits


@dataclass(frozen=True)
class PasswordAssessment:
    length: int
    meets_min_length: bool
    meets_strong_length: bool
    has_upper: bool
    has_lower: bool
    has_digit: bool
    has_symbol: bool
    score: int
    label: Label
    entropy_bits: float

    @property
    def progress(self) -> float:
        return self.score / MAX_SCORE

    def checklist(self) -> list[tuple[str, bool]]:
        """Requirement texts paired with whether each one is satisfied."""
        return [
            (f"At least {MIN_LENGTH} characters", self.meets_min_length),
            ("Uppercase letter", self.has_upper),
            ("Lowercase letter", self.has_lower),
            ("Number", self.has_digit),
            ("Special character", self.has_symbol),
            (f"{STRONG_LENGTH}+ characters for maximum strength",
             self.meets_strong_length),
        ]

    def as_dict(self) -> dict:
        d = asdict(self)
        d["label"] = self.label.value
        return d


def evaluate(password: str) -> PasswordAssessment:
    """Score and classify *password*.

    The score counts the satisfied predicates among minimum length,
    uppercase, lowercase, digit and symbol.  The label is decided in order:
    too short is always NOT_MET, then STRONG needs 14+ characters and a
    full score, everything else is INTERMEDIATE.
    """
    length = len(password)
    meets_min = length >= MIN_LENGTH
    meets_strong = length >= STRONG_LENGTH
    has_upper = any(c in string.ascii_uppercase for c in password)
    has_lower = any(c in string.ascii_lowercase for c in password)
    has_digit = any(c in string.digits for c in password)
    has_symbol = any(is_symbol(c) for c in password)

    score = sum([meets_min, has_upper, has_lower, has_digit, has_symbol])

    if not meets_min:
        label = Label.NOT_MET
    elif meets_strong and score == MAX_SCORE:
        label = Label.STRONG
    else:
        label = Label.INTERMEDIATE

    return PasswordAssessment(
        length=length,
        meets_min_length=meets_min,
        meets_strong_length=meets_strong,
        has_upper=has_upper,
        has_lower=has_lower,
        has_digit=has_digit,
        has_symbol=has_symbol,
        score=score,
        label=label,
        entropy_bits=estimate_entropy_bits(password),
    )


# ── Entropy & crack time ───────────────────────────────────────────────────

# Symbol pool is a fixed estimate, not the size of the generator alphabet.
_POOL_LOWER = 26
_POOL_UPPER = 26
_POOL_DIGIT = 10
_POOL_SYMBOL = 32

# Named attacker throughputs in guesses per second.
GUESS_RATES = {
    "online_throttled": 100 / 3600,
    "online_unthrottled": 10.0,
    "offline_slow_hash": 1e4,
    "offline_fast_hash": 1e10,
}

INFINITE = "infinite"

_UNITS = [
    ("year", 365 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
]


def estimate_entropy_bits(password: str) -> float:
    """Return ``length * log2(pool)`` rounded to 2 decimals (0.0 if empty)."""
    if not password:
        return 0.0

    pool = sum([
        _POOL_LOWER if any(c in string.ascii_lowercase for c in password) else 0,
        _POOL_UPPER if any(c in string.ascii_uppercase for c in password) else 0,
        _POOL_DIGIT if any(c in string.digits for c in password) else 0,
        _POOL_SYMBOL if any(is_symbol(c) for c in password) else 0,
    ]) or _POOL_LOWER

    return round(len(password) * math.log2(pool), 2)


def estimate_crack_time(entropy_bits: float, guesses_per_second: float) -> float:
    """Seconds needed to search half the keyspace at *guesses_per_second*.

    Returns ``math.inf`` for zero entropy or when the try count overflows.
    """
    if guesses_per_second <= 0:
        raise ValueError("Guess rate must be positive")
    if entropy_bits == 0:
        return math.inf

    try:
        tries = 2.0 ** (entropy_bits - 1)
    except OverflowError:
        return math.inf
    if not math.isfinite(tries):
        return math.inf
    return tries / guesses_per_second


def crack_times(entropy_bits: float) -> dict[str, float]:
    """Crack-time estimate in seconds for every entry of :data:`GUESS_RATES`."""
    return {
        name: estimate_crack_time(entropy_bits, rate)
        for name, rate in GUESS_RATES.items()
    }


def format_duration(seconds: float) -> str:
    """Render *seconds* in the largest whole unit, e.g. ``"3 days"``."""
    if not math.isfinite(seconds) or seconds <= 0:
        return INFINITE

    for name, size in _UNITS:
        if seconds >= size:
            n = math.floor(seconds / size)
            return f"{n} {name}" if n == 1 else f"{n} {name}s"
    return "less than a second"


# ── Password generation ────────────────────────────────────────────────────

DIGITS = string.digits
SYMBOLS = "!@#$%^&*()-_=+[]{}<>?/|"
LETTERS = string.ascii_letters


@dataclass(frozen=True)
class GeneratorSpec:
    length: int = 12
    digits: int = 2
    symbols: int = 2

    def __post_init__(self):
        if self.length < 0 or self.digits < 0 or self.symbols < 0:
            raise ValueError("Length and character counts must not be negative")


def _draw(alphabet: str, random_source) -> str:
    return alphabet[math.floor(random_source() * len(alphabet))]


def generate_password(spec: GeneratorSpec | None = None, random_source=random.random) -> str:
    """Generate a password with exactly ``spec.digits`` digits and
    ``spec.symbols`` symbols, padded with letters up to ``spec.length``.

    *random_source* is a zero-argument callable returning floats in
    ``[0, 1)``.  The default is not cryptographically secure; pass
    ``secrets.SystemRandom().random`` when that matters.  The result is
    never truncated, so it is longer than ``spec.length`` when the
    required digits and symbols do not fit.
    """
    if spec is None:
        spec = GeneratorSpec()
    if spec.digits + spec.symbols > spec.length:
        log.debug(
            "digits (%d) + symbols (%d) exceed length %d; output will be longer",
            spec.digits, spec.symbols, spec.length,
        )

    chars = [_draw(DIGITS, random_source) for _ in range(spec.digits)]
    chars += [_draw(SYMBOLS, random_source) for _ in range(spec.symbols)]
    while len(chars) < spec.length:
        chars.append(_draw(LETTERS, random_source))

    # Fisher-Yates shuffle
    for i in range(len(chars) - 1, 0, -1):
        j = math.floor(random_source() * (i + 1))
        chars[i], chars[j] = chars[j], chars[i]

    return "".join(chars)

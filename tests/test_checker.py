"""Tests for the passforge strength, entropy and generator functions."""

import math
import random
from unittest.mock import Mock

import pytest

from passforge import (
    GUESS_RATES,
    INFINITE,
    SYMBOLS,
    GeneratorSpec,
    Label,
    crack_times,
    estimate_crack_time,
    estimate_entropy_bits,
    evaluate,
    format_duration,
    generate_password,
    is_symbol,
)


# ── evaluate ───────────────────────────────────────────────────────────────


class TestEvaluate:
    def test_empty_password(self):
        r = evaluate("")
        assert r.length == 0
        assert r.score == 0
        assert r.label is Label.NOT_MET
        assert r.entropy_bits == 0
        assert not any([r.meets_min_length, r.meets_strong_length, r.has_upper,
                        r.has_lower, r.has_digit, r.has_symbol])

    @pytest.mark.parametrize("pwd", ["a", "Ab1!", "Abcdefgh1!x", "ZZZZZZZZZZZ"])
    def test_short_is_not_met(self, pwd):
        assert evaluate(pwd).label is Label.NOT_MET

    def test_short_with_all_classes_still_not_met(self):
        r = evaluate("Ab1!Ab1!Ab1")
        assert r.score == 4
        assert r.label is Label.NOT_MET

    def test_twelve_chars_all_classes_is_intermediate(self):
        r = evaluate("Abcdefghij1!")
        assert r.score == 5
        assert r.meets_min_length is True
        assert r.meets_strong_length is False
        assert r.label is Label.INTERMEDIATE

    def test_strong(self):
        r = evaluate("Abcdefghijk1!x")
        assert r.length == 14
        assert r.score == 5
        assert r.label is Label.STRONG

    def test_long_but_missing_class_is_intermediate(self):
        r = evaluate("abcdefghijklmnop1!")
        assert r.has_upper is False
        assert r.score == 4
        assert r.label is Label.INTERMEDIATE

    def test_character_classes(self):
        r = evaluate("aB1!")
        assert r.has_lower is True
        assert r.has_upper is True
        assert r.has_digit is True
        assert r.has_symbol is True

    def test_underscore_is_symbol(self):
        assert evaluate("abc_").has_symbol is True

    def test_non_ascii_is_symbol(self):
        r = evaluate("é")
        assert r.has_symbol is True
        assert r.has_lower is False

    def test_deterministic(self):
        assert evaluate("Tr0ub4dor&3xyz") == evaluate("Tr0ub4dor&3xyz")

    def test_checklist(self):
        items = evaluate("Abcdefghij1!").checklist()
        assert len(items) == 6
        assert all(ok for _, ok in items[:5])
        assert items[5] == ("14+ characters for maximum strength", False)

    def test_progress(self):
        assert evaluate("").progress == 0
        assert evaluate("Abcdefghij1!").progress == 1

    def test_as_dict_uses_label_text(self):
        d = evaluate("abc").as_dict()
        assert d["label"] == "Requirements not met"
        assert d["length"] == 3


class TestIsSymbol:
    @pytest.mark.parametrize("ch", ["!", "_", " ", "~", "é", "€"])
    def test_symbols(self, ch):
        assert is_symbol(ch)

    @pytest.mark.parametrize("ch", ["a", "Z", "0", "9"])
    def test_letters_and_digits(self, ch):
        assert not is_symbol(ch)


# ── entropy & crack time ───────────────────────────────────────────────────


class TestEntropy:
    def test_empty(self):
        assert estimate_entropy_bits("") == 0.0

    def test_twelve_lowercase(self):
        assert estimate_entropy_bits("aaaaaaaaaaaa") == 56.41

    def test_all_classes_pool(self):
        # 26 + 26 + 10 + 32 = 94
        assert estimate_entropy_bits("aB1!") == round(4 * math.log2(94), 2)

    def test_digits_only(self):
        assert estimate_entropy_bits("1234") == round(4 * math.log2(10), 2)

    def test_symbol_pool_is_fixed(self):
        assert estimate_entropy_bits("!") == 5.0

    def test_increases_with_length(self):
        assert estimate_entropy_bits("aB1!aB1!aB1!") > estimate_entropy_bits("aB1!aB1!")

    def test_increases_with_classes(self):
        assert estimate_entropy_bits("aBcDeFgHiJkL") > estimate_entropy_bits("abcdefghijkl")


class TestCrackTime:
    def test_zero_entropy_is_infinite(self):
        assert estimate_crack_time(0, 1e10) == math.inf

    def test_half_keyspace(self):
        # 2 ** (11 - 1) tries at 1024/s
        assert estimate_crack_time(11, 1024) == 1.0

    def test_overflow_is_infinite(self):
        assert estimate_crack_time(5000, 1e10) == math.inf

    def test_non_positive_rate_raises(self):
        with pytest.raises(ValueError, match="positive"):
            estimate_crack_time(40, 0)

    def test_crack_times_covers_every_rate(self):
        times = crack_times(56.41)
        assert list(times) == list(GUESS_RATES)
        assert times["online_throttled"] > times["offline_fast_hash"]


class TestFormatDuration:
    @pytest.mark.parametrize("seconds, expected", [
        (1, "1 second"),
        (59, "59 seconds"),
        (60, "1 minute"),
        (3599, "59 minutes"),
        (7200, "2 hours"),
        (3 * 86400 + 5, "3 days"),
        (365 * 86400, "1 year"),
        (10 * 365 * 86400 + 400, "10 years"),
    ])
    def test_units(self, seconds, expected):
        assert format_duration(seconds) == expected

    @pytest.mark.parametrize("seconds", [0, -5, math.inf, math.nan])
    def test_infinite_sentinel(self, seconds):
        assert format_duration(seconds) == INFINITE

    def test_sub_second(self):
        assert format_duration(0.25) == "less than a second"


# ── generate_password ──────────────────────────────────────────────────────


def _counts(pwd):
    digits = sum(c.isdigit() for c in pwd)
    symbols = sum(c in SYMBOLS for c in pwd)
    return digits, symbols


class TestGeneratePassword:
    def test_symbol_alphabet(self):
        assert len(SYMBOLS) == 23

    def test_default_spec(self):
        pwd = generate_password()
        assert len(pwd) == 12
        assert _counts(pwd) == (2, 2)

    def test_guarantees_hold_over_many_trials(self):
        spec = GeneratorSpec(length=12, digits=2, symbols=2)
        for _ in range(1000):
            pwd = generate_password(spec)
            assert len(pwd) == 12
            digits, symbols = _counts(pwd)
            assert digits >= 2
            assert symbols >= 2

    def test_exact_counts(self):
        spec = GeneratorSpec(length=20, digits=5, symbols=3)
        for _ in range(50):
            assert _counts(generate_password(spec)) == (5, 3)

    def test_overflowing_counts_are_not_truncated(self):
        pwd = generate_password(GeneratorSpec(length=2, digits=3, symbols=2))
        assert len(pwd) == 5
        assert _counts(pwd) == (3, 2)

    def test_zero_length(self):
        assert generate_password(GeneratorSpec(0, 0, 0)) == ""

    def test_letters_only(self):
        pwd = generate_password(GeneratorSpec(30, 0, 0))
        assert pwd.isalpha()
        assert pwd.isascii()

    def test_negative_spec_raises(self):
        with pytest.raises(ValueError, match="negative"):
            GeneratorSpec(length=-1)

    def test_seeded_source_is_reproducible(self):
        spec = GeneratorSpec(16, 3, 3)
        a = generate_password(spec, random.Random(42).random)
        b = generate_password(spec, random.Random(42).random)
        assert a == b

    def test_high_draws_skip_every_swap(self):
        # j == i at every shuffle step, so fill order is kept
        source = Mock(return_value=0.999)
        assert generate_password(GeneratorSpec(5, 1, 1), source) == "9|ZZZ"

    def test_zero_draws_swap_with_first(self):
        source = Mock(return_value=0.0)
        assert generate_password(GeneratorSpec(5, 1, 1), source) == "!aaa0"

    def test_draw_count(self):
        # 12 character draws + 11 shuffle draws
        source = Mock(return_value=0.5)
        generate_password(GeneratorSpec(12, 2, 2), source)
        assert source.call_count == 23

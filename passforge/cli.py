"""PassForge command-line interface.

Usage examples:
    python -m passforge check mypassword --crack-times
    python -m passforge check -f passwords.txt
    python -m passforge generate -n 20 -d 3 -s 3 -c 5
    python -m passforge play
"""

import argparse
import logging
import random
import secrets
import sys

from passforge import (
    GUESS_RATES,
    GameSession,
    GeneratorSpec,
    Label,
    Outcome,
    PasswordAssessment,
    crack_times,
    evaluate,
    format_duration,
    generate_password,
    skip,
    submit,
)

SKIP_COMMAND = ":skip"
QUIT_COMMAND = ":quit"


def _non_negative(value: str) -> int:
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return n


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="passforge",
        description="Evaluate, generate and build passwords.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command")

    # ── check ──────────────────────────────────────────────────────────
    check_p = sub.add_parser("check", help="Evaluate password strength")
    check_p.add_argument("passwords", nargs="*", help="Passwords to check")
    check_p.add_argument(
        "-f", "--file",
        help="Read passwords from a file (one per line)",
    )
    check_p.add_argument(
        "-t", "--crack-times",
        action="store_true",
        help="Include brute-force time estimates",
    )

    # ── generate ───────────────────────────────────────────────────────
    gen_p = sub.add_parser("generate", help="Generate random passwords")
    gen_p.add_argument(
        "-n", "--length", type=_non_negative, default=12,
        help="Password length (default: 12)",
    )
    gen_p.add_argument(
        "-d", "--digits", type=_non_negative, default=2,
        help="Number of digits (default: 2)",
    )
    gen_p.add_argument(
        "-s", "--symbols", type=_non_negative, default=2,
        help="Number of symbols (default: 2)",
    )
    gen_p.add_argument(
        "-c", "--count", type=int, default=1,
        help="Number of passwords to generate (default: 1)",
    )
    gen_p.add_argument(
        "--secure", action="store_true",
        help="Draw from the operating system's secure random source",
    )

    # ── play ───────────────────────────────────────────────────────────
    sub.add_parser("play", help="Build a password step by step")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "check":
        return _cmd_check(args)
    if args.command == "generate":
        return _cmd_generate(args)
    if args.command == "play":
        return _cmd_play(args)

    parser.print_help()
    return 0


def _print_report(pwd: str, with_crack_times: bool = False) -> PasswordAssessment:
    report = evaluate(pwd)
    bar = "#" * report.score + "-" * (5 - report.score)
    print(f"  '{pwd}'")
    print(f"            Strength: [{bar}] {report.label.value} ({report.entropy_bits} bits)")
    for text, ok in report.checklist():
        print(f"            {'+' if ok else '-'} {text}")

    if with_crack_times:
        for name, seconds in crack_times(report.entropy_bits).items():
            rate = GUESS_RATES[name]
            print(f"            {name} ({rate:g}/s): {format_duration(seconds)}")

    return report


def _cmd_check(args: argparse.Namespace) -> int:
    passwords = list(args.passwords)

    if args.file:
        with open(args.file) as f:
            passwords.extend(line.strip() for line in f if line.strip())

    if not passwords:
        print("Error: provide passwords as arguments or via --file", file=sys.stderr)
        return 1

    weak = False
    for pwd in passwords:
        if _print_report(pwd, args.crack_times).label is not Label.STRONG:
            weak = True

    return 1 if weak else 0


def _cmd_generate(args: argparse.Namespace) -> int:
    spec = GeneratorSpec(args.length, args.digits, args.symbols)
    random_source = secrets.SystemRandom().random if args.secure else random.random

    for _ in range(args.count):
        pwd = generate_password(spec, random_source)
        report = evaluate(pwd)
        print(f"  {pwd}  ({report.label.value}, {report.entropy_bits} bits)")

    return 0


def _cmd_play(args: argparse.Namespace) -> int:
    session = GameSession()
    print(f"Answer each step; type {SKIP_COMMAND} to skip or {QUIT_COMMAND} to stop.")

    while True:
        step = session.current_step
        print(f"Step {session.step_index + 1} / {session.total_steps}: {step.prompt}")
        try:
            answer = input("> ")
        except EOFError:
            answer = QUIT_COMMAND

        if answer.strip() == QUIT_COMMAND:
            print("Stopped.")
            return 1
        if answer.strip() == SKIP_COMMAND:
            result = skip(session)
        else:
            result = submit(session, answer)

        if result.outcome is Outcome.REJECTED:
            print("That doesn't match the requirement. Try again.")
        elif result.outcome is Outcome.COMPLETED:
            print("Password built!")
            _print_report(result.password)
            return 0


if __name__ == "__main__":
    sys.exit(main())

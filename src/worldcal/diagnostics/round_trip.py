from __future__ import annotations

import argparse
import random
from typing import List

import worldcal


def parse_calendars(s: str) -> List[str]:
    # "gregorian,harptos" -> ["gregorian", "harptos"]
    return [x.strip() for x in s.split(",") if x.strip()]


def roundtrip_test(
    calendar: str,
    N: int,
    span_years: int,
    seed: int,
    *,
    max_failures: int,
) -> int:
    random.seed(seed)
    failures = 0
    engine = worldcal.get_calendar(calendar)
    span = span_years * engine.year_length(engine.definition.year.epoch) * engine.seconds_per_day

    prev = None
    for t in sorted(random.randint(-span, span) for _ in range(N)):
        d = engine.clock_to_date(t)
        back = engine.date_to_clock(d)
        if back != t:
            failures += 1
            print("\nFAIL (clock -> date -> clock)")
            print("calendar:", calendar)
            print("t:", t)
            print("date:", d)
            print("back:", back)
            if failures >= max_failures:
                return failures

        if prev is not None and prev.sort_key() > d.sort_key():
            failures += 1
            print("\nFAIL (monotonic)")
            print("calendar:", calendar)
            print("prev:", prev)
            print("date:", d)
            if failures >= max_failures:
                return failures
        prev = d

    return failures


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip tests: clock -> date -> clock.")
    p.add_argument("--calendars", type=str, default="gregorian,harptos,golarion,exandrian",
                   help="Comma-separated calendar list.")
    p.add_argument("--N", type=int, default=2000, help="Trials per calendar.")
    p.add_argument("--span-years", type=int, default=3000, help="Sample within +/- this many years of the epoch.")
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures per calendar.")
    args = p.parse_args(argv)

    total = 0
    for cal in parse_calendars(args.calendars):
        f = roundtrip_test(cal, args.N, args.span_years, args.seed, max_failures=args.max_failures)
        print(f"{cal}: {args.N} trials, {f} failures")
        total += f
    return 1 if total else 0


if __name__ == "__main__":
    raise SystemExit(main())

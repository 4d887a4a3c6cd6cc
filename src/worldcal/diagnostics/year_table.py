from __future__ import annotations

import argparse
from typing import List

import worldcal


def parse_calendars(arg: str) -> List[str]:
    return [x.strip() for x in arg.split(",") if x.strip()]


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print year length and New Year weekday for a range of years, one column per calendar."
    )
    p.add_argument("--from-year", type=int, default=2020)
    p.add_argument("--to-year", type=int, default=2032)
    p.add_argument("--calendars", type=str, default="gregorian,golarion",
                   help='Comma list of built-in calendars (default: "gregorian,golarion").')
    args = p.parse_args(argv)

    Y0, Y1 = args.from_year, args.to_year
    if Y1 < Y0:
        raise SystemExit("--to-year must be >= --from-year")

    engines = [worldcal.get_calendar(c) for c in parse_calendars(args.calendars)]

    headers = ["Year"] + [e.definition.display_name for e in engines]
    colw = [6] + [max(16, len(h)) for h in headers[1:]]
    line = "  ".join(h.ljust(w) for h, w in zip(headers, colw))
    print(line)
    print("-" * len(line))

    for Y in range(Y0, Y1 + 1):
        row = [str(Y).ljust(colw[0])]
        for eng, w in zip(engines, colw[1:]):
            ny = worldcal.new_year_day(eng, Y)
            leap = "L" if eng.is_leap_year(Y) else " "
            row.append(f"{eng.year_length(Y):4d}{leap} {ny.weekday_name(short=True)}".ljust(w))
        print("  ".join(row))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

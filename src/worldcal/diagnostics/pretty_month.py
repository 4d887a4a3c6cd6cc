from __future__ import annotations

import argparse

import worldcal
from worldcal.engines.calendar import CalendarEngine


def dow_header(engine: CalendarEngine, w: int = 6) -> str:
    return " ".join((wd.abbreviation or wd.name)[:w].ljust(w) for wd in engine.definition.weekdays)


def cell(top: str, bot: str, w: int = 6) -> tuple[str, str]:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def print_grid(title: str, header: str, weeks: list[list[tuple[str, str]]]) -> None:
    print(title)
    print(header)
    print("-" * len(header))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    print()


def month_calendar(engine: CalendarEngine, year: int, month: int) -> None:
    n = engine.week_length
    days = worldcal.days_in_month(engine, year, month)

    weeks: list[list[tuple[str, str]]] = []
    wk: list[tuple[str, str]] = []
    for _ in range(days[0].weekday):
        wk.append(cell("", ""))
    for d in days:
        wk.append(cell(f"{d.day:2d}", str(engine.day_of_year(d))))
        if len(wk) == n:
            weeks.append(wk)
            wk = []
    if wk:
        while len(wk) < n:
            wk.append(cell("", ""))
        weeks.append(wk)

    for entry in engine.intercalary_days_before(year, month):
        d = engine.intercalary_date(year, entry.name)
        tag = "" if entry.counts_for_weekdays else "  (outside the week)"
        print(f"  first: {d.to_short_string()}, {entry.days} day(s){tag}")

    name = engine.definition.months[month - 1].name
    title = f"{engine.definition.display_name}  {name} {days[0].year_string()}  ({len(days)} days)"
    print_grid(title, dow_header(engine), weeks)

    for entry in engine.intercalary_days_after(year, month):
        d = engine.intercalary_date(year, entry.name)
        tag = "" if entry.counts_for_weekdays else "  (outside the week)"
        print(f"  then: {d.to_short_string()}, {entry.days} day(s){tag}")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Print a month grid laid out by the calendar's own weekdays.")
    p.add_argument("--calendar", default="gregorian", help="Built-in calendar id (default: gregorian)")
    p.add_argument("--file", default=None, help="Calendar JSON file (overrides --calendar)")
    p.add_argument("year", type=int)
    p.add_argument("month", type=int, nargs="?", default=None, help="1-based month; omit for the whole year")
    args = p.parse_args(argv)

    engine = worldcal.load_calendar(args.file) if args.file else worldcal.get_calendar(args.calendar)
    months = [args.month] if args.month else range(1, len(engine.definition.months) + 1)
    for m in months:
        month_calendar(engine, args.year, m)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

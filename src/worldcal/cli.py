from __future__ import annotations

import argparse
import importlib
import inspect
import json
import logging
import sys


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _engine(args):
    import worldcal

    if getattr(args, "file", None):
        return worldcal.load_calendar(args.file)
    return worldcal.build_registry().get(args.calendar)


def _add_calendar_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--calendar", default="gregorian", help="Calendar id, variants as 'base(variant)'")
    p.add_argument("--file", default=None, help="Calendar JSON file (overrides --calendar)")


def cmd_list(argv: list[str]) -> int:
    import worldcal

    p = argparse.ArgumentParser(prog="worldcal list", description="List built-in calendars")
    p.parse_args(argv)

    reg = worldcal.build_registry()
    for name in reg.list():
        eng = reg.get(name)
        print(f"{name:32s} {eng.definition.display_name}")
    return 0


def cmd_date(argv: list[str]) -> int:
    import worldcal

    p = argparse.ArgumentParser(prog="worldcal date", description="World clock seconds -> calendar date")
    p.add_argument("seconds", type=float)
    _add_calendar_args(p)
    p.add_argument("--anchor", type=float, default=None, help="Unix timestamp world clock 0 maps to")
    p.add_argument("--attr", action="append", default=[], help="attribute name (repeatable)")
    p.add_argument("--json", action="store_true", help="Print the date as JSON")
    args = p.parse_args(argv)

    engine = _engine(args)
    info = worldcal.day_info(engine, args.seconds, attributes=tuple(args.attr), anchor_timestamp=args.anchor)
    if args.json:
        out = {"calendar": info.calendar_id, "clock": info.clock, "date": info.date.to_dict()}
        if info.attributes:
            out["attributes"] = info.attributes
        print(json.dumps(out, indent=2, ensure_ascii=False))
        return 0
    print(info.date.to_long_string())
    for k, v in (info.attributes or {}).items():
        print(f"  {k}: {v}")
    return 0


def cmd_clock(argv: list[str]) -> int:
    from worldcal.core.types import TimeOfDay

    p = argparse.ArgumentParser(prog="worldcal clock", description="Calendar date -> world clock seconds")
    p.add_argument("year", type=int)
    p.add_argument("month", type=int, help="1-based month (for intercalary periods, the month they follow or precede)")
    p.add_argument("day", type=int)
    p.add_argument("--time", default="00:00:00", help="HH:MM:SS")
    p.add_argument("--intercalary", default=None, help="Intercalary period name")
    _add_calendar_args(p)
    p.add_argument("--anchor", type=float, default=None, help="Unix timestamp world clock 0 maps to")
    args = p.parse_args(argv)

    engine = _engine(args)
    h, m, s = (int(x) for x in args.time.split(":"))
    date = engine.make_date(args.year, args.month, args.day, time=TimeOfDay(h, m, s), intercalary=args.intercalary)
    print(engine.date_to_clock(date, args.anchor))
    return 0


def cmd_info(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="worldcal info", description="Summary of a calendar")
    _add_calendar_args(p)
    args = p.parse_args(argv)

    for k, v in _engine(args).info().items():
        print(f"{k:16s} {v}")
    return 0


def cmd_validate(argv: list[str]) -> int:
    from worldcal.core.parse import calendar_from_json
    from worldcal.engines.validation import validate_definition

    p = argparse.ArgumentParser(prog="worldcal validate", description="Validate a calendar JSON file")
    p.add_argument("file")
    args = p.parse_args(argv)

    report = validate_definition(calendar_from_json(args.file))
    for e in report.errors:
        print(f"ERROR   {e}")
    for w in report.warnings:
        print(f"WARNING {w}")
    print(f"{report.calendar_id}: {'valid' if report.is_valid else 'invalid'}")
    return 0 if report.is_valid else 1


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="worldcal", description="Fantasy and real-world calendar toolkit CLI.")
    p.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("list", help="List built-in calendars")
    sub.add_parser("date", help="World clock seconds -> calendar date")
    sub.add_parser("clock", help="Calendar date -> world clock seconds")
    sub.add_parser("info", help="Summary of a calendar")
    sub.add_parser("validate", help="Validate a calendar JSON file")

    # diagnostics
    sub.add_parser("pretty-month", help="Print month grids (diagnostics)")
    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument(
        "tool",
        choices=["round-trip", "year-table", "leap-years"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "list":
        return cmd_list(rest)

    if args.cmd == "date":
        return cmd_date(rest)

    if args.cmd == "clock":
        return cmd_clock(rest)

    if args.cmd == "info":
        return cmd_info(rest)

    if args.cmd == "validate":
        return cmd_validate(rest)

    if args.cmd == "pretty-month":
        return _run_module_main("worldcal.diagnostics.pretty_month", rest)

    if args.cmd == "diag":
        tool_map = {
            "round-trip": "worldcal.diagnostics.round_trip",
            "year-table": "worldcal.diagnostics.year_table",
            "leap-years": "worldcal.diagnostics.leap_years",
        }
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())

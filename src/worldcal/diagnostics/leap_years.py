#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional, Tuple

import worldcal


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "worldcal[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "worldcal[diagnostics]"') from e


def parse_calendars(s: str) -> List[str]:
    out = [x.strip() for x in s.split(",") if x.strip()]
    if not out:
        raise SystemExit("--calendars must name at least one calendar")
    return out


def leap_matrix(np, calendars: List[str], start_year: int, end_year: int) -> Tuple["np.ndarray", "np.ndarray"]:
    """Rows: calendars. Columns: years. Cells: 1 for leap years. Also returns year lengths."""
    years = np.arange(start_year, end_year + 1)
    Z = np.zeros((len(calendars), len(years)), dtype=int)
    L = np.zeros_like(Z)
    for i, cal in enumerate(calendars):
        eng = worldcal.get_calendar(cal)
        for j, y in enumerate(years):
            Z[i, j] = int(eng.is_leap_year(int(y)))
            L[i, j] = eng.year_length(int(y))
    return Z, L


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Leap-year barcode diagram across calendars.")
    p.add_argument("--start-year", type=int, default=1960)
    p.add_argument("--end-year", type=int, default=2030)
    p.add_argument("--out", default="leap_years.png")
    p.add_argument("--title", default="Leap years across calendars")
    p.add_argument("--calendars", default="gregorian,harptos,golarion",
                   help="Comma list of calendars to plot (default: gregorian,harptos,golarion).")
    p.add_argument("--year-step", type=int, default=5, help="Label every k years (default: 5).")
    p.add_argument("--cell-edge", default="0.88", help="Cell border color (matplotlib gray string).")
    p.add_argument("--cell-lw", type=float, default=0.6, help="Cell border line width.")
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()

    start_year, end_year = args.start_year, args.end_year
    if end_year < start_year:
        raise SystemExit("--end-year must be >= --start-year")

    calendars = parse_calendars(args.calendars)
    Z, L = leap_matrix(np, calendars, start_year, end_year)

    fig, ax = plt.subplots(figsize=(16, 1.0 + 0.6 * len(calendars)))
    x_edges = np.arange(start_year - 0.5, end_year + 1.5, 1.0)
    y_edges = np.arange(-0.5, len(calendars) + 0.5, 1.0)
    ax.pcolormesh(
        x_edges,
        y_edges,
        Z,
        shading="flat",
        cmap="Greys",
        vmin=0, vmax=1.6,
        edgecolors=args.cell_edge,
        linewidth=float(args.cell_lw),
        antialiased=True,
    )

    ax.tick_params(axis="both", which="both", length=0)
    step = max(1, int(args.year_step))
    xt = list(range(start_year, end_year + 1, step))
    ax.set_xticks(xt)
    ax.set_xticklabels([str(y) for y in xt])
    ax.set_yticks(list(range(len(calendars))))
    ax.set_yticklabels(calendars)
    ax.set_xlim(start_year - 0.5, end_year + 0.5)
    ax.invert_yaxis()
    ax.set_title(args.title)
    fig.tight_layout()
    fig.savefig(args.out, dpi=250)

    for cal, row, lengths in zip(calendars, Z, L):
        print(f"{cal}: {int(row.sum())} leap years, mean year {lengths.mean():.4f} days")
    print(f"Saved: {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

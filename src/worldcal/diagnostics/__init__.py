"""Diagnostics package.

- pretty_month, year_table, round_trip: plain text, standard library only
- leap_years: plots, requires the diagnostics extras (numpy, matplotlib)
"""

__all__ = ["pretty_month", "year_table", "round_trip", "leap_years"]

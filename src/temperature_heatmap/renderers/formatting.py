"""Shared label-formatting helpers for renderers."""

from __future__ import annotations

# Indexed by zero-based month
MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


def month_name(month: int) -> str:
    """Full English month name for a zero-based month index."""
    return MONTH_NAMES[month]


def format_year_month(year: int, month: int) -> str:
    """Tooltip heading, e.g. ``1753 - January``."""
    return f"{year} - {month_name(month)}"


def format_temperature(celsius: float) -> str:
    """Absolute temperature to one decimal, e.g. ``7.3 °C``."""
    return f"{celsius:z.1f} °C"


def format_variance(celsius: float) -> str:
    """Signed deviation to one decimal, e.g. ``-1.4 °C`` or ``+0.2 °C``."""
    return f"{celsius:+z.1f} °C"


def format_tick(value: float) -> str:
    """Legend axis label, one decimal place."""
    return f"{value:z.1f}"


def format_number(value: float) -> str:
    """Plain number for prose: ``8.66`` stays ``8.66``, ``9.0`` becomes ``9``."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))

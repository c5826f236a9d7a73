from __future__ import annotations

import math
from datetime import date, datetime

import pandas as pd


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up, as browsers display it."""
    return int(math.floor(value + 0.5))


def floor_age(age: float) -> int:
    return int(math.floor(age))


def format_long_date(value: date | datetime | str) -> str:
    """``January 5, 1950``."""
    stamp = pd.Timestamp(value)
    return f"{stamp:%B} {stamp.day}, {stamp:%Y}"


def format_long_datetime(value: datetime | str) -> str:
    """``January 5, 2025 at 03:04 PM``."""
    stamp = pd.Timestamp(value)
    return f"{stamp:%B} {stamp.day}, {stamp:%Y} at {stamp:%I:%M %p}"


def format_month_year(value: date | datetime | str) -> str:
    """``Jan 2020``."""
    return f"{pd.Timestamp(value):%b %Y}"


def year_label(value: date | datetime | str) -> str:
    return str(pd.Timestamp(value).year)


def is_january(value: date | datetime | str) -> bool:
    return pd.Timestamp(value).month == 1


def format_percent_label(value: float) -> str:
    return f"{round_half_up(value)}%"


def format_percent_detail(value: float) -> str:
    return f"{value:.1f}%"


def format_count(value: int) -> str:
    return f"{value:,}"

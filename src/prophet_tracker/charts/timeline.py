from __future__ import annotations

from typing import Any, Sequence

from prophet_tracker.charts.annotations import compute_annotations
from prophet_tracker.charts.formatting import (
    format_month_year,
    format_percent_detail,
    is_january,
    year_label,
)
from prophet_tracker.charts.palette import LINE_COLORS, color_map
from prophet_tracker.charts.sampling import DEFAULT_TIMELINE_STRIDE, downsample
from prophet_tracker.io.schema import TimelineEntry

TIMELINE_DOMAIN = (0, 100)
DEFAULT_TOOLTIP_MIN_PERCENT = 0.5


def timeline_tooltip(
    entry: TimelineEntry,
    names: Sequence[str],
    colors: dict[str, str],
    min_percent: float = DEFAULT_TOOLTIP_MIN_PERCENT,
) -> dict[str, Any]:
    shown = [name for name in names if entry.value_for(name) > min_percent]
    # sorted() is stable, so equal values stay in seniority order.
    shown = sorted(shown, key=entry.value_for, reverse=True)
    return {
        "date": entry.date,
        "title": format_month_year(entry.date),
        "rows": [
            {
                "name": name,
                "value": format_percent_detail(entry.value_for(name)),
                "color": colors[name],
            }
            for name in shown
        ],
    }


def build_timeline_chart(
    timeline: Sequence[TimelineEntry],
    names: Sequence[str],
    *,
    palette: Sequence[str] = LINE_COLORS,
    stride: int = DEFAULT_TIMELINE_STRIDE,
    tooltip_min_percent: float = DEFAULT_TOOLTIP_MIN_PERCENT,
) -> dict[str, Any]:
    """Probability of holding the office at each sampled date, one line per apostle."""
    sampled = downsample(timeline, stride=stride)
    colors = color_map(names, palette)
    annotations = compute_annotations(sampled, names, colors.__getitem__)
    year_ticks = [entry.date for entry in sampled if is_january(entry.date)]

    return {
        "id": "timeline",
        "kind": "line",
        "title": "Prophet Probability Over Time",
        "subtitle": "Probability of being the current church president at each point in time",
        "x_axis": {
            "key": "date",
            "values": [entry.date for entry in sampled],
            "ticks": year_ticks,
            "tick_labels": [year_label(value) for value in year_ticks],
        },
        "y_axis": {
            "domain": list(TIMELINE_DOMAIN),
            "tick_format": "{value}%",
        },
        "series": [
            {
                "key": name,
                "name": name,
                "color": colors[name],
                "points": [
                    {"x": entry.date, "y": entry.value_for(name)} for entry in sampled
                ],
            }
            for name in names
        ],
        "legend": {"order": list(names)},
        "annotations": [annotation.to_dict() for annotation in annotations],
        "tooltips": [
            timeline_tooltip(entry, names, colors, min_percent=tooltip_min_percent)
            for entry in sampled
        ],
    }

from __future__ import annotations

from typing import Any, Sequence

from prophet_tracker.charts.formatting import (
    floor_age,
    format_long_date,
    format_percent_detail,
    format_percent_label,
)
from prophet_tracker.io.schema import Apostle, Contender, Incumbent

PROBABILITY_DOMAIN = (0, 100)
PROBABILITY_GRADIENT = {"top": "#0C4A6E", "bottom": "#BAE6FD"}


def probability_tooltip(apostle: Apostle, standing: Contender) -> dict[str, Any]:
    return {
        "title": apostle.full_name,
        "headline": f"{format_percent_detail(standing.probability_percent)} chance",
        "lines": [
            {"label": "Age", "value": f"{floor_age(apostle.age)} years"},
            {"label": "Years in Quorum", "value": str(apostle.years_in_quorum)},
            {"label": "Seniority", "value": f"#{apostle.seniority}"},
            {"label": "Ordained", "value": format_long_date(apostle.ordination_date)},
        ],
    }


def _probability_point(apostle: Apostle) -> dict[str, Any] | None:
    standing = apostle.standing
    if isinstance(standing, Incumbent):
        return None
    if isinstance(standing, Contender):
        return {
            "category": apostle.last_name,
            "value": standing.probability_percent,
            "label": format_percent_label(standing.probability_percent),
            "tooltip": probability_tooltip(apostle, standing),
        }
    raise TypeError(f"unknown standing for {apostle.full_name}: {standing!r}")


def build_probability_chart(apostles: Sequence[Apostle]) -> dict[str, Any]:
    """Succession probability per contender; the incumbent is left out."""
    points = [
        point for point in (_probability_point(apostle) for apostle in apostles)
        if point is not None
    ]
    return {
        "id": "probability",
        "kind": "bar",
        "title": "Succession Probability",
        "subtitle": "Based on actuarial life expectancy modeling",
        "x_axis": {
            "key": "name",
            "categories": [point["category"] for point in points],
            "tick_angle": -45,
        },
        "y_axis": {"domain": list(PROBABILITY_DOMAIN)},
        "series": [
            {
                "key": "probability_percent",
                "name": "Probability",
                "fill": {"gradient": dict(PROBABILITY_GRADIENT)},
                "points": points,
            }
        ],
    }

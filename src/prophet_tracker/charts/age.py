from __future__ import annotations

from typing import Any, Sequence

from prophet_tracker.charts.formatting import floor_age, format_long_date
from prophet_tracker.io.schema import Apostle

AGE_DOMAIN = (50, 105)
AGE_GRADIENT = {"top": "#081D58", "bottom": "#C7E9B4"}


def age_tooltip(apostle: Apostle) -> dict[str, Any]:
    return {
        "title": apostle.full_name,
        "lines": [
            {"label": "Age", "value": f"{floor_age(apostle.age)} years"},
            {"label": "Birth Date", "value": format_long_date(apostle.birth_date)},
            {"label": "Ordained", "value": format_long_date(apostle.ordination_date)},
            {"label": "Years in Quorum", "value": str(apostle.years_in_quorum)},
            {"label": "Seniority", "value": f"#{apostle.seniority}"},
        ],
    }


def build_age_chart(apostles: Sequence[Apostle]) -> dict[str, Any]:
    """Bar chart of current ages, in seniority (input) order."""
    points = [
        {
            "category": apostle.last_name,
            "value": apostle.age,
            "label": str(floor_age(apostle.age)),
            "tooltip": age_tooltip(apostle),
        }
        for apostle in apostles
    ]
    return {
        "id": "age",
        "kind": "bar",
        "title": "Current Age of Apostles",
        "subtitle": "Ordered by seniority (ordination date)",
        "x_axis": {
            "key": "name",
            "categories": [apostle.last_name for apostle in apostles],
            "tick_angle": -45,
        },
        "y_axis": {"domain": list(AGE_DOMAIN)},
        "series": [
            {
                "key": "age",
                "name": "Age",
                "fill": {"gradient": dict(AGE_GRADIENT)},
                "points": points,
            }
        ],
    }

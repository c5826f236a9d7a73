from __future__ import annotations

from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.colors import LinearSegmentedColormap
from matplotlib.ticker import FuncFormatter

from prophet_tracker.viz.common import figure_to_svg, save_figure

GRID_COLOR = "#e5e7eb"


def _apply_y_domain(ax: Any, chart: dict[str, Any]) -> None:
    low, high = chart["y_axis"]["domain"]
    ax.set_ylim(low, high)
    ax.grid(axis="y", color=GRID_COLOR, linestyle="--", linewidth=0.8)
    ax.set_axisbelow(True)


def plot_bar_chart(chart: dict[str, Any]) -> None:
    series = chart["series"][0]
    points = series["points"]
    gradient = series["fill"]["gradient"]
    cmap = LinearSegmentedColormap.from_list(
        f"{chart['id']}_gradient", [gradient["bottom"], gradient["top"]]
    )
    low, high = chart["y_axis"]["domain"]
    span = float(high - low) or 1.0

    fig, ax = plt.subplots(figsize=(10, 5))
    positions = list(range(len(points)))
    values = [float(point["value"]) for point in points]
    colors = [cmap(min(max((value - low) / span, 0.0), 1.0)) for value in values]
    # Bars start at the domain floor; anything outside the domain is clipped, not rescaled.
    ax.bar(
        positions,
        [value - low for value in values],
        bottom=low,
        color=colors or None,
        width=0.7,
    )
    for position, point, value in zip(positions, points, values):
        ax.text(
            position,
            value,
            point["label"],
            ha="center",
            va="bottom",
            fontsize=9,
            fontweight="bold",
            clip_on=True,
        )
    ax.set_xticks(positions)
    ax.set_xticklabels(
        chart["x_axis"]["categories"],
        rotation=-chart["x_axis"].get("tick_angle", 0),
        ha="right",
        fontsize=9,
    )
    _apply_y_domain(ax, chart)
    ax.set_title(chart["title"], fontweight="bold")


def plot_line_chart(chart: dict[str, Any]) -> None:
    fig, ax = plt.subplots(figsize=(12, 5.5))
    for series in chart["series"]:
        xs = pd.to_datetime([point["x"] for point in series["points"]])
        ys = [float(point["y"]) for point in series["points"]]
        ax.plot(xs, ys, color=series["color"], linewidth=2, label=series["name"])

    for annotation in chart.get("annotations", []):
        ax.annotate(
            annotation["name"],
            xy=(pd.Timestamp(annotation["date"]), annotation["probability"]),
            xytext=(0, 28),
            textcoords="offset points",
            ha="center",
            fontsize=8,
            fontweight="bold",
            color=annotation["color"],
            arrowprops={"arrowstyle": "-|>", "color": annotation["color"], "lw": 1.2},
        )

    ticks = chart["x_axis"].get("ticks", [])
    if ticks:
        ax.set_xticks(pd.to_datetime(ticks))
        ax.set_xticklabels(chart["x_axis"]["tick_labels"], fontsize=8)
    tick_format = chart["y_axis"].get("tick_format", "{value}")
    ax.yaxis.set_major_formatter(
        FuncFormatter(lambda value, _pos: tick_format.format(value=int(value)))
    )
    _apply_y_domain(ax, chart)
    if chart["series"]:
        ax.legend(
            loc="upper center",
            bbox_to_anchor=(0.5, -0.08),
            ncol=5,
            fontsize=8,
            frameon=False,
        )
    ax.set_title(chart["title"], fontweight="bold")


def draw_chart(chart: dict[str, Any]) -> None:
    if chart["kind"] == "bar":
        plot_bar_chart(chart)
    elif chart["kind"] == "line":
        plot_line_chart(chart)
    else:
        raise ValueError(f"Unsupported chart kind: {chart['kind']}")


def render_chart_svg(chart: dict[str, Any]) -> str:
    try:
        draw_chart(chart)
        return figure_to_svg()
    finally:
        plt.close()


def save_chart_figure(chart: dict[str, Any], output_path: Path) -> Path:
    try:
        draw_chart(chart)
        return save_figure(output_path)
    finally:
        plt.close()

from __future__ import annotations

from typing import Sequence

# 15 distinct line colors, assigned by seniority position.
LINE_COLORS: tuple[str, ...] = (
    "#1f77b4",  # blue
    "#ff7f0e",  # orange
    "#2ca02c",  # green
    "#d62728",  # red
    "#9467bd",  # purple
    "#8c564b",  # brown
    "#e377c2",  # pink
    "#7f7f7f",  # gray
    "#bcbd22",  # olive
    "#17becf",  # cyan
    "#393b79",  # dark blue
    "#637939",  # dark green
    "#8c6d31",  # dark gold
    "#843c39",  # dark red
    "#7b4173",  # dark purple
)


def color_of(index: int, palette: Sequence[str] = LINE_COLORS) -> str:
    """Palette color for the entity at ``index``, wrapping past the end."""
    if not palette:
        raise ValueError("palette must contain at least one color")
    return palette[index % len(palette)]


def color_map(names: Sequence[str], palette: Sequence[str] = LINE_COLORS) -> dict[str, str]:
    return {name: color_of(index, palette) for index, name in enumerate(names)}

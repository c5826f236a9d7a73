from __future__ import annotations

from typing import Sequence, TypeVar

T = TypeVar("T")

DEFAULT_TIMELINE_STRIDE = 3


def downsample(timeline: Sequence[T], stride: int = DEFAULT_TIMELINE_STRIDE) -> list[T]:
    """Keep every ``stride``-th entry plus the final one, in original order.

    Display only: leadership runs shorter than the stride can disappear from
    the sampled series, and therefore from the annotations.
    """
    if stride < 1:
        raise ValueError(f"stride must be >= 1, got {stride}")
    last_index = len(timeline) - 1
    return [
        entry
        for index, entry in enumerate(timeline)
        if index % stride == 0 or index == last_index
    ]

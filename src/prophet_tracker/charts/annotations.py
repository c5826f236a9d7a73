"""Leader labels for the probability-over-time chart.

Each sample has a leader: the apostle with the strictly greatest probability.
Consecutive samples with the same leader form a run, and every run gets one
label at its midpoint sample. Samples where nobody is above zero have no
leader; they end the current run and never join the runs on either side.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from prophet_tracker.io.schema import TimelineEntry


@dataclass(frozen=True)
class LeaderRun:
    name: str
    start: int
    end: int

    @property
    def midpoint(self) -> int:
        return (self.start + self.end) // 2


@dataclass(frozen=True)
class Annotation:
    name: str
    date: str
    probability: float
    color: str

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "date": self.date,
            "probability": self.probability,
            "color": self.color,
        }


def leader_at(entry: TimelineEntry, names: Sequence[str]) -> str | None:
    # Strict comparison: on a tie the name scanned first keeps the lead.
    top_value = 0.0
    top_name: str | None = None
    for name in names:
        value = entry.value_for(name)
        if value > top_value:
            top_value = value
            top_name = name
    return top_name


def leader_runs(sampled: Sequence[TimelineEntry], names: Sequence[str]) -> list[LeaderRun]:
    leaders = [leader_at(entry, names) for entry in sampled]
    runs: list[LeaderRun] = []
    run_start = 0
    for index in range(1, len(leaders) + 1):
        if index < len(leaders) and leaders[index] == leaders[run_start]:
            continue
        name = leaders[run_start]
        if name is not None:
            runs.append(LeaderRun(name=name, start=run_start, end=index - 1))
        run_start = index
    return runs


def compute_annotations(
    sampled: Sequence[TimelineEntry],
    names: Sequence[str],
    color_of: Callable[[str], str],
) -> list[Annotation]:
    annotations: list[Annotation] = []
    for run in leader_runs(sampled, names):
        entry = sampled[run.midpoint]
        annotations.append(
            Annotation(
                name=run.name,
                date=entry.date,
                probability=entry.value_for(run.name),
                color=color_of(run.name),
            )
        )
    return annotations

"""Invariant checks for a parsed artifact.

Rendering never calls these: a malformed artifact still renders, just wrongly.
The ``validate`` command runs them so producers can catch problems early.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import pandas as pd

from prophet_tracker.io.schema import ApostlesData, Contender

DEFAULT_SUM_TOLERANCE = 1.0
PERCENT_TOLERANCE = 0.05


@dataclass(frozen=True, slots=True)
class ArtifactIssue:
    code: str
    message: str


def _seniority_issues(data: ApostlesData) -> list[ArtifactIssue]:
    issues: list[ArtifactIssue] = []
    ranks = [apostle.seniority for apostle in data.apostles]
    if ranks != sorted(ranks):
        issues.append(
            ArtifactIssue("seniority_order", "apostles are not sorted by ascending seniority")
        )
    if sorted(ranks) != list(range(1, len(ranks) + 1)):
        issues.append(
            ArtifactIssue(
                "seniority_ranks",
                f"seniority values are not a permutation of 1..{len(ranks)}",
            )
        )
    return issues


def _standing_issues(data: ApostlesData) -> list[ArtifactIssue]:
    issues: list[ArtifactIssue] = []
    incumbents = [apostle for apostle in data.apostles if apostle.is_incumbent]
    if len(incumbents) > 1:
        names = ", ".join(apostle.last_name for apostle in incumbents)
        issues.append(
            ArtifactIssue("incumbent_count", f"more than one apostle lacks a probability: {names}")
        )
    for apostle in incumbents:
        if apostle.seniority != 1:
            issues.append(
                ArtifactIssue(
                    "incumbent_rank",
                    f"{apostle.last_name} lacks a probability but has seniority "
                    f"#{apostle.seniority}",
                )
            )
    for apostle in data.apostles:
        standing = apostle.standing
        if not isinstance(standing, Contender):
            continue
        if not 0.0 <= standing.probability <= 1.0:
            issues.append(
                ArtifactIssue(
                    "probability_range",
                    f"{apostle.last_name} probability {standing.probability} is outside [0, 1]",
                )
            )
        if not math.isclose(
            standing.probability * 100.0,
            standing.probability_percent,
            abs_tol=PERCENT_TOLERANCE,
        ):
            issues.append(
                ArtifactIssue(
                    "probability_percent",
                    f"{apostle.last_name} probabilityPercent {standing.probability_percent} "
                    f"does not match probability {standing.probability}",
                )
            )
    return issues


def timeline_frame(data: ApostlesData) -> pd.DataFrame:
    """One row per timeline entry, one column per name seen in the timeline."""
    frame = pd.DataFrame([entry.values for entry in data.timeline])
    frame.insert(0, "date", [entry.date for entry in data.timeline])
    return frame


def _timeline_issues(data: ApostlesData, sum_tolerance: float) -> list[ArtifactIssue]:
    if not data.timeline:
        return []
    issues: list[ArtifactIssue] = []
    frame = timeline_frame(data)

    parsed = pd.to_datetime(frame["date"], errors="coerce", format="ISO8601")
    if parsed.isna().any():
        bad = ", ".join(frame.loc[parsed.isna(), "date"].astype(str).head(5))
        issues.append(ArtifactIssue("timeline_dates", f"unparseable timeline dates: {bad}"))
    elif not parsed.is_monotonic_increasing:
        issues.append(ArtifactIssue("timeline_order", "timeline is not in chronological order"))

    known = set(data.last_names())
    value_columns = [column for column in frame.columns if column != "date"]
    unknown = sorted(set(value_columns) - known)
    if unknown:
        issues.append(
            ArtifactIssue(
                "timeline_names",
                f"timeline has values for unknown names: {', '.join(unknown)}",
            )
        )

    totals = frame[value_columns].fillna(0.0).sum(axis=1)
    off = frame.loc[(totals - 100.0).abs() > sum_tolerance, "date"]
    if not off.empty:
        sample = ", ".join(off.astype(str).head(5))
        issues.append(
            ArtifactIssue(
                "timeline_sums",
                f"{len(off)} timeline entries do not sum to 100 (first: {sample})",
            )
        )
    return issues


def check_artifact(
    data: ApostlesData,
    *,
    sum_tolerance: float = DEFAULT_SUM_TOLERANCE,
) -> list[ArtifactIssue]:
    issues = _seniority_issues(data)
    if data.metadata.total_apostles != len(data.apostles):
        issues.append(
            ArtifactIssue(
                "total_apostles",
                f"metadata.totalApostles is {data.metadata.total_apostles} "
                f"but {len(data.apostles)} apostles are listed",
            )
        )
    issues.extend(_standing_issues(data))
    issues.extend(_timeline_issues(data, sum_tolerance))
    return issues

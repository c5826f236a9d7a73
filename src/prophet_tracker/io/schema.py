from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping, Union

import pandas as pd


@dataclass(frozen=True)
class Incumbent:
    """The apostle currently holding the office; carries no probability."""


@dataclass(frozen=True)
class Contender:
    probability: float
    probability_percent: float


Standing = Union[Incumbent, Contender]


@dataclass(frozen=True)
class Apostle:
    id: int
    first_name: str
    last_name: str
    full_name: str
    age: float
    birth_date: date
    ordination_date: date
    years_in_quorum: int
    seniority: int
    standing: Standing = field(default_factory=Incumbent)
    middle_name: str | None = None

    @property
    def is_incumbent(self) -> bool:
        return isinstance(self.standing, Incumbent)

    @property
    def probability(self) -> float | None:
        if isinstance(self.standing, Contender):
            return self.standing.probability
        return None

    @property
    def probability_percent(self) -> float | None:
        if isinstance(self.standing, Contender):
            return self.standing.probability_percent
        return None


@dataclass(frozen=True)
class TimelineEntry:
    date: str
    values: dict[str, float]

    def value_for(self, name: str) -> float:
        return self.values.get(name, 0.0)


@dataclass(frozen=True)
class ArtifactMetadata:
    generated_at: datetime
    total_apostles: int
    simulation_runs: int
    description: str


@dataclass(frozen=True)
class ApostlesData:
    metadata: ArtifactMetadata
    apostles: tuple[Apostle, ...]
    timeline: tuple[TimelineEntry, ...]

    def last_names(self) -> list[str]:
        return [apostle.last_name for apostle in self.apostles]

    def contenders(self) -> list[Apostle]:
        return [apostle for apostle in self.apostles if isinstance(apostle.standing, Contender)]


def _require(payload: Mapping[str, Any], key: str, *, context: str) -> Any:
    if key not in payload or payload[key] is None:
        raise ValueError(f"{context} is missing required field '{key}'")
    return payload[key]


def _require_string(payload: Mapping[str, Any], key: str, *, context: str) -> str:
    value = _require(payload, key, context=context)
    if not isinstance(value, str):
        raise ValueError(f"{context} field '{key}' must be a string")
    return value


def _require_number(payload: Mapping[str, Any], key: str, *, context: str) -> float:
    value = _require(payload, key, context=context)
    # bool is an int subclass but never a valid measurement.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{context} field '{key}' must be a number")
    return float(value)


def _require_int(payload: Mapping[str, Any], key: str, *, context: str) -> int:
    value = _require_number(payload, key, context=context)
    if not value.is_integer():
        raise ValueError(f"{context} field '{key}' must be an integer")
    return int(value)


def _optional_number(payload: Mapping[str, Any], key: str, *, context: str) -> float | None:
    if payload.get(key) is None:
        return None
    return _require_number(payload, key, context=context)


def _parse_date(payload: Mapping[str, Any], key: str, *, context: str) -> date:
    raw_value = _require_string(payload, key, context=context)
    return _parse_timestamp(raw_value, context=f"{context}.{key}").date()


def _parse_timestamp(raw_value: str, *, context: str) -> datetime:
    try:
        parsed = pd.Timestamp(raw_value.strip())
    except (ValueError, TypeError) as exc:
        raise ValueError(f"{context} is not an ISO datetime: {raw_value!r}") from exc
    if pd.isna(parsed):
        raise ValueError(f"{context} is not an ISO datetime: {raw_value!r}")
    return parsed.to_pydatetime()


def parse_standing(payload: Mapping[str, Any], *, context: str) -> Standing:
    probability = _optional_number(payload, "probability", context=context)
    if probability is None:
        return Incumbent()
    percent = _optional_number(payload, "probabilityPercent", context=context)
    return Contender(
        probability=probability,
        probability_percent=percent if percent is not None else 0.0,
    )


def parse_apostle(payload: Mapping[str, Any], *, index: int) -> Apostle:
    context = f"apostles[{index}]"
    if not isinstance(payload, Mapping):
        raise ValueError(f"{context} must be an object")
    middle_name = payload.get("middleName")
    if middle_name is not None and not isinstance(middle_name, str):
        raise ValueError(f"{context} field 'middleName' must be a string")
    return Apostle(
        id=_require_int(payload, "id", context=context),
        first_name=_require_string(payload, "firstName", context=context),
        middle_name=middle_name or None,
        last_name=_require_string(payload, "lastName", context=context),
        full_name=_require_string(payload, "fullName", context=context),
        age=_require_number(payload, "age", context=context),
        birth_date=_parse_date(payload, "birthDate", context=context),
        ordination_date=_parse_date(payload, "ordinationDate", context=context),
        years_in_quorum=_require_int(payload, "yearsInQuorum", context=context),
        seniority=_require_int(payload, "seniority", context=context),
        standing=parse_standing(payload, context=context),
    )


def parse_timeline_entry(payload: Mapping[str, Any], *, index: int) -> TimelineEntry:
    context = f"timeline[{index}]"
    if not isinstance(payload, Mapping):
        raise ValueError(f"{context} must be an object")
    entry_date = _require_string(payload, "date", context=context)
    values: dict[str, float] = {}
    for key in payload:
        if key == "date":
            continue
        values[str(key)] = _require_number(payload, key, context=context)
    return TimelineEntry(date=entry_date, values=values)


def parse_metadata(payload: Any) -> ArtifactMetadata:
    context = "metadata"
    if not isinstance(payload, Mapping):
        raise ValueError("artifact field 'metadata' must be an object")
    return ArtifactMetadata(
        generated_at=_parse_timestamp(
            _require_string(payload, "generatedAt", context=context),
            context="metadata.generatedAt",
        ),
        total_apostles=_require_int(payload, "totalApostles", context=context),
        simulation_runs=_require_int(payload, "simulationRuns", context=context),
        description=str(payload.get("description") or ""),
    )


def _require_list(payload: Mapping[str, Any], key: str) -> list[Any]:
    value = _require(payload, key, context="artifact")
    if not isinstance(value, list):
        raise ValueError(f"artifact field '{key}' must be a list")
    return value


def parse_artifact(payload: Any) -> ApostlesData:
    """Convert a decoded artifact into typed records.

    Only the shape is checked. Ordering, seniority ranks and timeline sums are
    taken as given; see ``prophet_tracker.io.integrity`` for those.
    """
    if not isinstance(payload, Mapping):
        raise ValueError("artifact must contain a JSON object")
    metadata = parse_metadata(_require(payload, "metadata", context="artifact"))
    apostles = tuple(
        parse_apostle(item, index=index)
        for index, item in enumerate(_require_list(payload, "apostles"))
    )
    timeline = tuple(
        parse_timeline_entry(item, index=index)
        for index, item in enumerate(_require_list(payload, "timeline"))
    )
    return ApostlesData(metadata=metadata, apostles=apostles, timeline=timeline)

from __future__ import annotations

from datetime import date
from typing import Any

import pytest

from prophet_tracker.io.schema import (
    Contender,
    Incumbent,
    TimelineEntry,
    parse_artifact,
)


def test_parse_artifact_builds_typed_records(artifact_payload: dict[str, Any]) -> None:
    data = parse_artifact(artifact_payload)

    assert data.metadata.total_apostles == 4
    assert data.metadata.simulation_runs == 10000
    assert data.metadata.generated_at.year == 2025
    assert data.last_names() == ["Adams", "Baker", "Clark", "Davis"]
    assert len(data.timeline) == 13

    adams, baker = data.apostles[0], data.apostles[1]
    assert adams.middle_name == "B."
    assert adams.birth_date == date(1926, 8, 20)
    assert adams.standing == Incumbent()
    assert adams.is_incumbent
    assert adams.probability is None
    assert adams.probability_percent is None
    assert baker.middle_name is None
    assert baker.standing == Contender(probability=0.62, probability_percent=62.0)
    assert baker.probability_percent == 62.0
    assert [apostle.last_name for apostle in data.contenders()] == ["Baker", "Clark", "Davis"]


def test_parse_artifact_keeps_input_order(artifact_payload: dict[str, Any]) -> None:
    artifact_payload["apostles"].reverse()

    data = parse_artifact(artifact_payload)

    assert [apostle.seniority for apostle in data.apostles] == [4, 3, 2, 1]


def test_probability_without_percent_defaults_percent_to_zero(
    artifact_payload: dict[str, Any],
) -> None:
    del artifact_payload["apostles"][1]["probabilityPercent"]

    data = parse_artifact(artifact_payload)

    assert data.apostles[1].standing == Contender(probability=0.62, probability_percent=0.0)


def test_percent_without_probability_is_treated_as_incumbent(
    artifact_payload: dict[str, Any],
) -> None:
    del artifact_payload["apostles"][2]["probability"]

    data = parse_artifact(artifact_payload)

    assert data.apostles[2].is_incumbent


def test_timeline_entry_defaults_missing_names_to_zero() -> None:
    entry = TimelineEntry(date="2020-01", values={"Adams": 40.0})

    assert entry.value_for("Adams") == 40.0
    assert entry.value_for("Baker") == 0.0


@pytest.mark.parametrize(
    ("mutate", "message"),
    [
        (lambda p: p["apostles"][0].pop("lastName"), r"apostles\[0\] is missing required field 'lastName'"),
        (lambda p: p["apostles"][1].update(age="old"), r"apostles\[1\] field 'age' must be a number"),
        (lambda p: p["apostles"][1].update(seniority=2.5), r"field 'seniority' must be an integer"),
        (lambda p: p["apostles"][2].update(birthDate="not a date"), r"birthDate is not an ISO datetime"),
        (lambda p: p["apostles"][3].update(probability=True), r"field 'probability' must be a number"),
        (lambda p: p["timeline"][4].update(Adams="high"), r"timeline\[4\] field 'Adams' must be a number"),
        (lambda p: p["timeline"][0].pop("date"), r"timeline\[0\] is missing required field 'date'"),
        (lambda p: p.update(metadata=[]), r"'metadata' must be an object"),
        (lambda p: p.update(timeline={}), r"'timeline' must be a list"),
        (lambda p: p.pop("apostles"), r"artifact is missing required field 'apostles'"),
    ],
)
def test_parse_artifact_rejects_malformed_shapes(
    artifact_payload: dict[str, Any],
    mutate: Any,
    message: str,
) -> None:
    mutate(artifact_payload)

    with pytest.raises(ValueError, match=message):
        parse_artifact(artifact_payload)


def test_parse_artifact_requires_an_object() -> None:
    with pytest.raises(ValueError, match="JSON object"):
        parse_artifact([])

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

TIMELINE_ROWS = [
    ("2025-01-01", 100.0, 0.0, 0.0, 0.0),
    ("2025-02-01", 92.0, 6.0, 1.5, 0.5),
    ("2025-03-01", 84.0, 12.0, 3.0, 1.0),
    ("2025-04-01", 76.0, 18.0, 4.5, 1.5),
    ("2025-05-01", 68.0, 24.0, 6.0, 2.0),
    ("2025-06-01", 60.0, 30.0, 7.5, 2.5),
    ("2025-07-01", 52.0, 36.0, 9.0, 3.0),
    ("2025-08-01", 45.0, 41.0, 10.5, 3.5),
    ("2025-09-01", 38.0, 46.0, 12.0, 4.0),
    ("2025-10-01", 32.0, 50.0, 13.5, 4.5),
    ("2025-11-01", 27.0, 53.0, 15.0, 5.0),
    ("2025-12-01", 22.0, 56.0, 16.5, 5.5),
    ("2026-01-01", 18.0, 58.0, 18.0, 6.0),
]


def build_payload() -> dict[str, Any]:
    return {
        "metadata": {
            "generatedAt": "2025-01-15T18:30:00Z",
            "totalApostles": 4,
            "simulationRuns": 10000,
            "description": "test artifact",
        },
        "apostles": [
            {
                "id": 1,
                "firstName": "Henry",
                "middleName": "B.",
                "lastName": "Adams",
                "fullName": "Henry B. Adams",
                "age": 98.4,
                "birthDate": "1926-08-20",
                "ordinationDate": "1984-04-12",
                "yearsInQuorum": 40,
                "seniority": 1,
            },
            {
                "id": 2,
                "firstName": "Walter",
                "lastName": "Baker",
                "fullName": "Walter Baker",
                "age": 91.7,
                "birthDate": "1933-04-02",
                "ordinationDate": "1984-05-03",
                "yearsInQuorum": 40,
                "seniority": 2,
                "probability": 0.62,
                "probabilityPercent": 62.0,
            },
            {
                "id": 3,
                "firstName": "Samuel",
                "middleName": "R.",
                "lastName": "Clark",
                "fullName": "Samuel R. Clark",
                "age": 84.2,
                "birthDate": "1940-10-31",
                "ordinationDate": "1994-06-23",
                "yearsInQuorum": 30,
                "seniority": 3,
                "probability": 0.27,
                "probabilityPercent": 27.0,
            },
            {
                "id": 4,
                "firstName": "Daniel",
                "lastName": "Davis",
                "fullName": "Daniel Davis",
                "age": 72.5,
                "birthDate": "1952-07-08",
                "ordinationDate": "2015-10-03",
                "yearsInQuorum": 9,
                "seniority": 4,
                "probability": 0.11,
                "probabilityPercent": 11.0,
            },
        ],
        "timeline": [
            {"date": day, "Adams": adams, "Baker": baker, "Clark": clark, "Davis": davis}
            for day, adams, baker, clark, davis in TIMELINE_ROWS
        ],
    }


@pytest.fixture
def artifact_payload() -> dict[str, Any]:
    return build_payload()


@pytest.fixture
def artifact_path(tmp_path: Path, artifact_payload: dict[str, Any]) -> Path:
    path = tmp_path / "apostles.json"
    path.write_text(json.dumps(artifact_payload), encoding="utf-8")
    return path

"""Tests for the command-line front end."""

from __future__ import annotations

import json

import pytest

from src.cli import build_parser, main


def write_dataset(tmp_path):
    records = [
        {"geoid": "L1", "state": "01", "centroid": "-5,0", "population": 1000},
        {"geoid": "C1", "state": "01", "centroid": "0,0", "population": 2000},
        {"geoid": "R1", "state": "01", "centroid": "5,0", "population": 8000},
        {"geoid": "L2", "state": "06", "centroid": "25,0", "population": 4000},
        {"geoid": "C2", "state": "06", "centroid": "30,0", "population": 16000},
        {"geoid": "R2", "state": "06", "centroid": "35,0", "population": 32000},
        {"geoid": "AK", "state": "02", "centroid": "-150,61", "population": 900000},
    ]
    path = tmp_path / "county_centroids.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


def test_find_closest_prints_each_location_count(tmp_path, capsys):
    path = write_dataset(tmp_path)

    status = main(
        [
            "--data",
            str(path),
            "find-closest",
            "-k",
            "1",
            "2",
            "7",
            "--strategy",
            "sequential",
        ]
    )

    out = capsys.readouterr().out
    assert status == 0
    assert "Got 6 counties" in out
    assert "7 locations: no solution" in out
    assert "2 locations: " in out
    assert "took " in out


def test_find_closest_reports_geoids(tmp_path, capsys):
    path = write_dataset(tmp_path)
    # Equal populations make the cluster centres optimal
    records = json.loads(path.read_text(encoding="utf-8"))
    for record in records:
        record["population"] = 1000
    path.write_text(json.dumps(records), encoding="utf-8")

    main(["--data", str(path), "find-closest", "-k", "2", "--jobs", "1"])

    out = capsys.readouterr().out
    assert "2 locations: (0.0, 0.0) [C1], (30.0, 0.0) [C2]" in out


def test_count_closest_population(tmp_path, capsys):
    path = write_dataset(tmp_path)

    status = main(["--data", str(path), "count-closest-population", "--geoids", "C1", "C2"])

    out = capsys.readouterr().out
    assert status == 0
    assert "Counting population" in out
    assert "2 locations: [11000, 52000]" in out


def test_unknown_geoid_propagates(tmp_path):
    from domain.placement.errors import LocationResolutionError

    path = write_dataset(tmp_path)

    with pytest.raises(LocationResolutionError):
        main(["--data", str(path), "count-closest-population", "--geoids", "AK"])


def test_invalid_chunk_size_is_usage_error(tmp_path):
    path = write_dataset(tmp_path)

    with pytest.raises(SystemExit) as exc_info:
        main(["--data", str(path), "find-closest", "--chunk-size", "0"])

    assert exc_info.value.code == 2


def test_mode_defaults_to_find_closest():
    args = build_parser().parse_args(["find-closest"])

    assert args.locations == [1, 2]
    assert args.strategy == "parallel"
    assert args.jobs == -1


def test_missing_dataset_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        main(["--data", str(tmp_path / "nope.json"), "count-closest-population"])

"""
this file contains fixtures that are intended to be used across multiple test
files
"""

from pathlib import Path
from typing import Iterator

import pytest
from _pytest.monkeypatch import MonkeyPatch
from google.transit import gtfs_realtime_pb2

from .test_resources import scenario_feed, write_resources


@pytest.fixture(autouse=True, name="service_name_patch")
def fixture_service_name_patch(
    monkeypatch: MonkeyPatch,
) -> Iterator[None]:
    """
    tag every process log line written during tests with a fixed service name
    so log assertions don't depend on the calling environment
    """
    monkeypatch.setenv("SERVICE_NAME", "ztm_rt_test")

    yield


@pytest.fixture(name="scenario")
def fixture_scenario() -> gtfs_realtime_pb2.FeedMessage:
    """feed message with one trip update, one vehicle and one with both"""
    return scenario_feed()


@pytest.fixture(name="resource_dir")
def fixture_resource_dir(tmp_path: Path, scenario: gtfs_realtime_pb2.FeedMessage) -> Path:
    """
    local directory holding all four resources, each feed being the scenario
    feed. usable as the base url of a run.
    """
    payload = scenario.SerializeToString()
    write_resources(
        str(tmp_path),
        feeds=payload,
        trip_updates=payload,
        vehicle_positions=payload,
    )
    return tmp_path

from pathlib import Path

import pytest
from google.transit import gtfs_realtime_pb2

from ztm_rt.ingestion.flattener import FailedFeed, FlattenedFeed
from ztm_rt.ingestion.pipeline import build_tables, main, parse_args, start
from ztm_rt.runtime_utils.remote_files import ZTM_BASE_URL, TRIP_UPDATES
from ztm_rt.runtime_utils.ztm_exception import DictionaryLoadError

from ..test_resources import TRUNCATED_PAYLOAD, VEHICLE_DICTIONARY_CSV


def test_parse_args_defaults() -> None:
    """no arguments fetches from ztm with one worker per resource"""
    args = parse_args([])

    assert args.base_url == ZTM_BASE_URL
    assert args.max_workers is None

    args = parse_args(["--base-url", "/tmp/snapshot", "--max-workers", "2"])
    assert args.base_url == "/tmp/snapshot"
    assert args.max_workers == 2


def test_build_tables_scenario(scenario: gtfs_realtime_pb2.FeedMessage) -> None:
    """
    three entities: A with a trip update, B with a vehicle position and C with
    both give 3 summary rows, 2 trip update rows and 2 vehicle rows
    """
    payload = scenario.SerializeToString()
    tables = build_tables([payload, payload, payload, VEHICLE_DICTIONARY_CSV])

    assert isinstance(tables.feeds, FlattenedFeed)
    assert tables.feeds.table.height == 3
    assert tables.trip_updates.table.get_column("entity_id").to_list() == ["A", "C"]
    assert tables.vehicle_positions.table.get_column("entity_id").to_list() == ["B", "C"]
    assert tables.vehicle_dictionary.height == 3


@pytest.mark.parametrize("failing_index", [0, 1, 2], ids=["feeds", "trip_updates", "vehicle_positions"])
def test_one_malformed_feed_is_isolated(scenario: gtfs_realtime_pb2.FeedMessage, failing_index: int) -> None:
    """a malformed feed only degrades its own table"""
    payloads = [scenario.SerializeToString()] * 3 + [VEHICLE_DICTIONARY_CSV]
    payloads[failing_index] = TRUNCATED_PAYLOAD

    tables = build_tables(payloads)
    results = [tables.feeds, tables.trip_updates, tables.vehicle_positions]

    for index, result in enumerate(results):
        if index == failing_index:
            assert isinstance(result, FailedFeed)
            assert result.table.shape == (1, 1)
            assert result.table.columns == ["error"]
        else:
            assert isinstance(result, FlattenedFeed)
            assert result.table.height > 0


def test_build_tables_bad_dictionary(scenario: gtfs_realtime_pb2.FeedMessage) -> None:
    """a dictionary that fails to parse is fatal"""
    payload = scenario.SerializeToString()

    with pytest.raises(DictionaryLoadError):
        build_tables([payload, payload, payload, b""])


def test_main_local_snapshot(resource_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """a full run against local files prints every table, the mean speed and timings"""
    tables = main(parse_args(["--base-url", str(resource_dir)]))

    assert tables.feeds.table.height == 3

    out = capsys.readouterr().out
    for heading in ("Vehicle Dictionary", "Feeds", "Trip Updates", "Vehicle Positions"):
        assert f"=== {heading} ===" in out
    assert "MEAN SPEED = 10.0" in out
    assert "TIME SPENT DOWNLOADING DATA" in out
    assert "TIME SPENT CONSTRUCTING DATA" in out


def test_main_with_malformed_feed(resource_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """a malformed feed is reported in its table and the run still completes"""
    (resource_dir / TRIP_UPDATES).write_bytes(TRUNCATED_PAYLOAD)

    tables = main(parse_args(["--base-url", str(resource_dir)]))

    assert tables.trip_updates.failed
    assert not tables.feeds.failed
    assert not tables.vehicle_positions.failed
    assert "Failed to parse trip updates" in capsys.readouterr().out


def test_start_exits_on_fetch_failure(resource_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """a missing resource ends the run with a non-zero status and no tables"""
    (resource_dir / TRIP_UPDATES).unlink()

    with pytest.raises(SystemExit) as exc_info:
        start(["--base-url", str(resource_dir)])

    assert exc_info.value.code == 1

    captured = capsys.readouterr()
    assert "===" not in captured.out
    assert "Unable to fetch resource" in captured.err


def test_start_exits_on_dictionary_failure(resource_dir: Path) -> None:
    """an unparseable dictionary ends the run with a non-zero status"""
    (resource_dir / "vehicle_dictionary.csv").write_bytes(b"")

    with pytest.raises(SystemExit) as exc_info:
        start(["--base-url", str(resource_dir)])

    assert exc_info.value.code == 1

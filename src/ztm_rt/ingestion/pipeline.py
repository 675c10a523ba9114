#!/usr/bin/env python

import argparse
import logging
import os
import sys
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import polars as pl

from ztm_rt.ingestion.convert_gtfs_rt import flatten_feed, flattener_for
from ztm_rt.ingestion.converter import FeedType
from ztm_rt.ingestion.fetch import fetch_resources
from ztm_rt.ingestion.flattener import FeedResult
from ztm_rt.ingestion.report import report_speed, report_table, report_timing
from ztm_rt.ingestion.vehicle_dictionary import load_vehicle_dictionary
from ztm_rt.runtime_utils.process_logger import ProcessLogger
from ztm_rt.runtime_utils.remote_files import ZTM_BASE_URL, ztm_resources
from ztm_rt.runtime_utils.ztm_exception import ZtmFatalError

logging.getLogger().setLevel("INFO")

DESCRIPTION = """Snapshot ZTM Poznań GTFS Realtime feeds into flat tables"""


@dataclass(frozen=True)
class RunTables:
    """every table produced by a single run"""

    vehicle_dictionary: pl.DataFrame
    feeds: FeedResult
    trip_updates: FeedResult
    vehicle_positions: FeedResult


def parse_args(args: List[str]) -> argparse.Namespace:
    """parse args for running this entrypoint script"""
    parser = argparse.ArgumentParser(description=DESCRIPTION)
    parser.add_argument(
        "--base-url",
        default=ZTM_BASE_URL,
        dest="base_url",
        help="endpoint (or local directory) serving the gtfs-rt files",
    )
    parser.add_argument(
        "--max-workers",
        default=None,
        type=int,
        dest="max_workers",
        help="maximum number of parallel fetches, defaults to one per resource",
    )

    return parser.parse_args(args)


def build_tables(payloads: Sequence[bytes]) -> RunTables:
    """
    build all tables from fetched payloads, ordered as ztm_resources

    a vehicle dictionary that fails to parse raises. a feed that fails to
    decode is returned as a FailedFeed and does not affect the others.
    """
    by_type: Dict[FeedType, bytes] = {
        FeedType.from_filename(resource.file_name): payload
        for resource, payload in zip(ztm_resources(), payloads, strict=True)
    }

    vehicle_dictionary = load_vehicle_dictionary(by_type[FeedType.VEHICLE_DICTIONARY])

    results: Dict[FeedType, FeedResult] = {
        feed_type: flatten_feed(payload, flattener_for(feed_type))
        for feed_type, payload in by_type.items()
        if feed_type.is_gtfs_rt()
    }

    return RunTables(
        vehicle_dictionary=vehicle_dictionary,
        feeds=results[FeedType.FEEDS],
        trip_updates=results[FeedType.TRIP_UPDATES],
        vehicle_positions=results[FeedType.VEHICLE_POSITIONS],
    )


def report(tables: RunTables) -> None:
    """print every table, then the mean vehicle speed"""
    report_table("Vehicle Dictionary", tables.vehicle_dictionary)
    report_table("Feeds", tables.feeds.table)
    report_table("Trip Updates", tables.trip_updates.table)
    report_table("Vehicle Positions", tables.vehicle_positions.table)
    report_speed(tables.vehicle_positions.table)


def main(args: argparse.Namespace) -> RunTables:
    """
    run a single snapshot

    * fetch all resources in parallel, failing on the first error
    * load the vehicle dictionary and flatten each feed
    * print the tables and timings
    """
    main_process_logger = ProcessLogger("main", **vars(args))
    main_process_logger.log_start()

    urls = [resource.url for resource in ztm_resources(args.base_url)]

    try:
        download_start = time.monotonic()
        payloads = fetch_resources(urls, max_workers=args.max_workers)
        download_seconds = time.monotonic() - download_start

        construct_start = time.monotonic()
        tables = build_tables(payloads)
        construct_seconds = time.monotonic() - construct_start
    except ZtmFatalError as exception:
        main_process_logger.log_failure(exception)
        raise

    report(tables)
    report_timing(download_seconds, construct_seconds)

    main_process_logger.add_metadata(
        failed_feeds=",".join(
            str(result.feed_type)
            for result in (tables.feeds, tables.trip_updates, tables.vehicle_positions)
            if result.failed
        ),
        print_log=False,
    )
    main_process_logger.log_complete()

    return tables


def start(argv: Optional[List[str]] = None) -> None:
    """configure and run a snapshot, exiting non-zero on fatal errors"""
    # parse arguments from the command line
    parsed_args = parse_args(sys.argv[1:] if argv is None else argv)

    # configure the environment
    os.environ["SERVICE_NAME"] = "ztm_rt"

    try:
        main(parsed_args)
    except ZtmFatalError as exception:
        print(f"ztm_rt: {exception}", file=sys.stderr)
        raise SystemExit(1) from exception


if __name__ == "__main__":
    start()

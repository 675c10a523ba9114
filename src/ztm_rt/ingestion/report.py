from typing import Optional

import polars as pl


def report_table(title: str, table: pl.DataFrame) -> None:
    """print a table rendering followed by its column names"""
    print(f"\n=== {title} ===")
    print(table)
    print(table.columns)


def mean_speed(table: pl.DataFrame) -> Optional[float]:
    """
    mean of the speed column over non-null values. None for tables without a
    speed column (degenerate error tables) or without any non-null speed.
    """
    if "speed" not in table.columns:
        return None

    speed = table.get_column("speed").mean()
    if speed is None:
        return None
    return float(speed)  # type: ignore[arg-type]


def report_speed(table: pl.DataFrame) -> None:
    """print the mean vehicle speed, nothing when it can't be computed"""
    speed = mean_speed(table)
    if speed is not None:
        print(f"MEAN SPEED = {speed}")


def report_timing(download_seconds: float, construct_seconds: float) -> None:
    """print elapsed seconds for fetching and for building the tables"""
    print(f"TIME SPENT DOWNLOADING DATA = {download_seconds:.3f}s")
    print(f"TIME SPENT CONSTRUCTING DATA = {construct_seconds:.3f}s")

# use annotations to type hint a method with the type of the enclosing class
# https://stackoverflow.com/a/33533514
from __future__ import annotations

from enum import auto
from enum import Enum

from ztm_rt.runtime_utils.ztm_exception import FeedTypeFromFilenameException
from ztm_rt.runtime_utils.remote_files import (
    FEEDS,
    TRIP_UPDATES,
    VEHICLE_POSITIONS,
    VEHICLE_DICTIONARY,
)


class FeedType(Enum):
    """
    FeedType is an Enumeration that is inclusive of all resources retrieved
    from ZTM on each run
    """

    FEEDS = auto()
    TRIP_UPDATES = auto()
    VEHICLE_POSITIONS = auto()
    VEHICLE_DICTIONARY = auto()

    def __str__(self) -> str:
        return self.name

    @classmethod
    def from_filename(cls, filename: str) -> FeedType:
        """
        Figure out which feed type to use for a given resource name. Raise a
        FeedTypeFromFilenameException if unable to determine.
        """
        if filename.endswith(FEEDS):
            return cls.FEEDS
        if filename.endswith(TRIP_UPDATES):
            return cls.TRIP_UPDATES
        if filename.endswith(VEHICLE_POSITIONS):
            return cls.VEHICLE_POSITIONS
        if filename.endswith(VEHICLE_DICTIONARY):
            return cls.VEHICLE_DICTIONARY

        raise FeedTypeFromFilenameException(filename)

    def is_gtfs_rt(self) -> bool:
        """Is this a GTFS Real Time protobuf feed?"""
        return self in [
            self.FEEDS,
            self.TRIP_UPDATES,
            self.VEHICLE_POSITIONS,
        ]

    @property
    def description(self) -> str:
        """human readable name used in diagnostics and report headings"""
        return self.name.replace("_", " ").lower()

import os
from dataclasses import dataclass
from typing import List
from urllib.parse import urlencode, urlparse

# endpoint serving every gtfs-rt file and the vehicle dictionary
ZTM_BASE_URL = "https://www.ztm.poznan.pl/pl/dla-deweloperow/getGtfsRtFile"

# resource file names
FEEDS = "feeds.pb"
TRIP_UPDATES = "trip_updates.pb"
VEHICLE_POSITIONS = "vehicle_positions.pb"
VEHICLE_DICTIONARY = "vehicle_dictionary.csv"


def is_http_url(location: str) -> bool:
    """is this location fetched over http(s) rather than read from disk"""
    return urlparse(location).scheme in ("http", "https")


@dataclass
class RemoteResource:
    """
    wrapper for a resource file name and the location serving it. the location
    is either an http(s) endpoint taking the file name as a query parameter or
    a local directory holding the file.
    """

    file_name: str
    base_url: str = ZTM_BASE_URL

    @property
    def url(self) -> str:
        """generate the full identifier used to fetch the resource"""
        if is_http_url(self.base_url):
            return f"{self.base_url}?{urlencode({'file': self.file_name})}"
        return os.path.join(self.base_url, self.file_name)


def ztm_resources(base_url: str = ZTM_BASE_URL) -> List[RemoteResource]:
    """
    all resources retrieved on each run, in the order their payloads are
    returned by the fetcher
    """
    return [
        RemoteResource(file_name=FEEDS, base_url=base_url),
        RemoteResource(file_name=TRIP_UPDATES, base_url=base_url),
        RemoteResource(file_name=VEHICLE_POSITIONS, base_url=base_url),
        RemoteResource(file_name=VEHICLE_DICTIONARY, base_url=base_url),
    ]

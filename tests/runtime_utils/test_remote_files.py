from ztm_rt.runtime_utils.remote_files import RemoteResource, is_http_url, ztm_resources


def test_remote_url() -> None:
    """http resources pass the file name as a query parameter"""
    resource = RemoteResource(file_name="feeds.pb")

    assert resource.url == "https://www.ztm.poznan.pl/pl/dla-deweloperow/getGtfsRtFile?file=feeds.pb"


def test_local_url() -> None:
    """local resources are joined onto the directory"""
    resource = RemoteResource(file_name="feeds.pb", base_url="/tmp/snapshot")

    assert resource.url == "/tmp/snapshot/feeds.pb"


def test_ztm_resources_order() -> None:
    """the three feeds come first, the dictionary last"""
    assert [resource.file_name for resource in ztm_resources()] == [
        "feeds.pb",
        "trip_updates.pb",
        "vehicle_positions.pb",
        "vehicle_dictionary.csv",
    ]


def test_local_directory_starting_with_http() -> None:
    """only an http(s) scheme makes a location remote"""
    assert is_http_url("https://www.ztm.poznan.pl/pl/dla-deweloperow/getGtfsRtFile")
    assert is_http_url("http://localhost:8080/getGtfsRtFile")
    assert not is_http_url("httpcache/snapshot")

    resource = RemoteResource(file_name="feeds.pb", base_url="httpcache/snapshot")

    assert resource.url == "httpcache/snapshot/feeds.pb"

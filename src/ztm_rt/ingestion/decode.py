from google.protobuf.message import DecodeError
from google.transit import gtfs_realtime_pb2

from ztm_rt.runtime_utils.ztm_exception import FeedDecodeError


def decode_feed(payload: bytes) -> gtfs_realtime_pb2.FeedMessage:
    """
    decode raw GTFS Realtime bytes into a FeedMessage

    truncated or malformed bytes and messages missing required fields (header,
    entity id, ...) raise a FeedDecodeError. a partially populated message is
    never returned.

    :param payload: serialized FeedMessage

    :return decoded FeedMessage
    """
    feed = gtfs_realtime_pb2.FeedMessage()
    try:
        feed.ParseFromString(payload)
    except DecodeError as exception:
        raise FeedDecodeError(f"Unable to decode FeedMessage: {exception}") from exception

    if not feed.IsInitialized():
        missing = ", ".join(feed.FindInitializationErrors())
        raise FeedDecodeError(f"FeedMessage missing required fields: {missing}")

    return feed

from ztm_rt.ingestion.config_rt_summary import RtSummaryDetail
from ztm_rt.ingestion.config_rt_trip import RtTripDetail
from ztm_rt.ingestion.config_rt_vehicle import RtVehicleDetail
from ztm_rt.ingestion.converter import FeedType
from ztm_rt.ingestion.decode import decode_feed
from ztm_rt.ingestion.flattener import (
    FailedFeed,
    FeedFlattener,
    FeedResult,
    FlattenedFeed,
)
from ztm_rt.runtime_utils.process_logger import ProcessLogger
from ztm_rt.runtime_utils.ztm_exception import FeedDecodeError, NoImplException


def flattener_for(feed_type: FeedType) -> FeedFlattener:
    """
    Depending on feed type, return the correct implementation of the
    FeedFlattener class.
    """
    if feed_type == FeedType.FEEDS:
        return RtSummaryDetail()
    if feed_type == FeedType.TRIP_UPDATES:
        return RtTripDetail()
    if feed_type == FeedType.VEHICLE_POSITIONS:
        return RtVehicleDetail()

    raise NoImplException(f"No Flattener for {feed_type}")


def flatten_feed(payload: bytes, flattener: FeedFlattener) -> FeedResult:
    """
    decode a GTFS Realtime payload and flatten it into a table

    decode failures are contained here: they are logged and returned as a
    FailedFeed so the remaining feeds keep processing.

    :param payload: raw protobuf bytes of one feed
    :param flattener: flattener for the feed the payload belongs to

    :return FlattenedFeed on success, FailedFeed if the payload did not decode
    """
    feed_type = flattener.feed_type
    process_logger = ProcessLogger(
        "flatten_feed",
        feed_type=str(feed_type),
        payload_bytes=len(payload),
    )
    process_logger.log_start()

    try:
        feed = decode_feed(payload)
    except FeedDecodeError as exception:
        process_logger.log_failure(exception)
        return FailedFeed(
            feed_type=feed_type,
            message=f"Failed to parse {feed_type.description}",
            cause=exception,
        )

    table = flattener.flatten(feed)

    process_logger.add_metadata(entity_count=len(feed.entity), row_count=table.height, print_log=False)
    process_logger.log_complete()

    return FlattenedFeed(feed_type=feed_type, table=table)

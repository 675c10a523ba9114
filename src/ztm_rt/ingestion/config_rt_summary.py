from typing import Any, Dict, Type

import dataframely as dy
from google.transit import gtfs_realtime_pb2

from ztm_rt.ingestion.converter import FeedType
from ztm_rt.ingestion.flattener import FeedFlattener
from ztm_rt.ingestion.gtfs_rt_defaults import entity_id_field


class FeedSummary(dy.Schema):
    "One row per entity describing which payloads it carries."
    entity_id = dy.String(nullable=False)
    has_trip_update = dy.Bool(nullable=False)
    has_vehicle_position = dy.Bool(nullable=False)
    has_alert = dy.Bool(nullable=False)


class RtSummaryDetail(FeedFlattener):
    """
    Detail for flattening the combined feeds.pb FeedMessage. No entity is
    filtered out so the row count always matches the entity count.

    An entity may carry more than one payload at once, each flag is
    computed independently.
    """

    @property
    def feed_type(self) -> FeedType:
        return FeedType.FEEDS

    @property
    def schema(self) -> Type[dy.Schema]:
        return FeedSummary

    def entity_filter(self, entity: gtfs_realtime_pb2.FeedEntity) -> bool:
        return True

    def entity_record(self, entity: gtfs_realtime_pb2.FeedEntity) -> Dict[str, Any]:
        return {
            **entity_id_field(entity),
            "has_trip_update": entity.HasField("trip_update"),
            "has_vehicle_position": entity.HasField("vehicle"),
            "has_alert": entity.HasField("alert"),
        }

from typing import Any, Dict, Type

import dataframely as dy
from google.transit import gtfs_realtime_pb2

from ztm_rt.ingestion.converter import FeedType
from ztm_rt.ingestion.flattener import FeedFlattener
from ztm_rt.ingestion.gtfs_rt_defaults import (
    entity_id_field,
    trip_descriptor_fields,
)


class TripUpdateSummary(dy.Schema):
    "One row per entity carrying a TripUpdate."
    entity_id = dy.String(nullable=False)
    trip_id = dy.String(nullable=False)
    route_id = dy.String(nullable=False)
    start_time = dy.String(nullable=False)
    start_date = dy.String(nullable=False)
    num_stop_updates = dy.Int64(nullable=False, min=0)


class RtTripDetail(FeedFlattener):
    """
    Detail for flattening RT GTFS Trip Updates. Entities without a trip update
    are skipped, stop time updates are only counted.
    """

    @property
    def feed_type(self) -> FeedType:
        return FeedType.TRIP_UPDATES

    @property
    def schema(self) -> Type[dy.Schema]:
        return TripUpdateSummary

    def entity_filter(self, entity: gtfs_realtime_pb2.FeedEntity) -> bool:
        return entity.HasField("trip_update")

    def entity_record(self, entity: gtfs_realtime_pb2.FeedEntity) -> Dict[str, Any]:
        trip_update = entity.trip_update
        return {
            **entity_id_field(entity),
            **trip_descriptor_fields(trip_update),
            "num_stop_updates": len(trip_update.stop_time_update),
        }

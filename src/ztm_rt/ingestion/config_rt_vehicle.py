from typing import Any, Dict, Type

import dataframely as dy
from google.transit import gtfs_realtime_pb2

from ztm_rt.ingestion.converter import FeedType
from ztm_rt.ingestion.flattener import FeedFlattener
from ztm_rt.ingestion.gtfs_rt_defaults import (
    entity_id_field,
    position_fields,
    vehicle_descriptor_fields,
    vehicle_trip_fields,
)


class VehiclePositionSummary(dy.Schema):
    "One row per entity carrying a VehiclePosition."
    entity_id = dy.String(nullable=False)
    vehicle_id = dy.String(nullable=False)
    vehicle_label = dy.String(nullable=False)
    latitude = dy.Float64(nullable=False, allow_inf_nan=True)
    longitude = dy.Float64(nullable=False, allow_inf_nan=True)
    bearing = dy.Float64(nullable=False, allow_inf_nan=True)
    speed = dy.Float64(nullable=False, allow_inf_nan=True)
    trip_id = dy.String(nullable=False)
    route_id = dy.String(nullable=False)


class RtVehicleDetail(FeedFlattener):
    """
    Detail for flattening RT GTFS Vehicle Positions. Entities without a
    vehicle position are skipped.

    A missing Position zeroes all four of latitude, longitude, bearing and
    speed. This is a chosen default, a real vehicle at 0.0, 0.0 is
    indistinguishable from one that reported no position.
    """

    @property
    def feed_type(self) -> FeedType:
        return FeedType.VEHICLE_POSITIONS

    @property
    def schema(self) -> Type[dy.Schema]:
        return VehiclePositionSummary

    def entity_filter(self, entity: gtfs_realtime_pb2.FeedEntity) -> bool:
        return entity.HasField("vehicle")

    def entity_record(self, entity: gtfs_realtime_pb2.FeedEntity) -> Dict[str, Any]:
        vehicle_position = entity.vehicle
        return {
            **entity_id_field(entity),
            **vehicle_descriptor_fields(vehicle_position),
            **position_fields(vehicle_position),
            **vehicle_trip_fields(vehicle_position),
        }

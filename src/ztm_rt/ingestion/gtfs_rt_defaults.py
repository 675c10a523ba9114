"""
Default substitution for the optional GTFS Realtime structures read by the
flatteners.

Each function takes the message owning an optional sub-structure and returns
every column that sub-structure contributes. When the sub-structure is absent
all of its columns take their default: an empty string for text and 0.0 for
floats. When it is present, each unset optional field takes the same default
on its own.
"""

from typing import Dict

from google.protobuf.message import Message
from google.transit import gtfs_realtime_pb2

STRING_DEFAULT = ""
FLOAT_DEFAULT = 0.0


def _string_field(message: Message, field: str) -> str:
    if message.HasField(field):
        return str(getattr(message, field))
    return STRING_DEFAULT


def _float_field(message: Message, field: str) -> float:
    if message.HasField(field):
        return float(getattr(message, field))
    return FLOAT_DEFAULT


def entity_id_field(entity: gtfs_realtime_pb2.FeedEntity) -> Dict[str, str]:
    """entity id, empty when unset"""
    return {"entity_id": _string_field(entity, "id")}


def trip_descriptor_fields(trip_update: gtfs_realtime_pb2.TripUpdate) -> Dict[str, str]:
    """trip_id, route_id, start_time and start_date of a trip update's trip"""
    if not trip_update.HasField("trip"):
        return {
            "trip_id": STRING_DEFAULT,
            "route_id": STRING_DEFAULT,
            "start_time": STRING_DEFAULT,
            "start_date": STRING_DEFAULT,
        }

    trip = trip_update.trip
    return {
        "trip_id": _string_field(trip, "trip_id"),
        "route_id": _string_field(trip, "route_id"),
        "start_time": _string_field(trip, "start_time"),
        "start_date": _string_field(trip, "start_date"),
    }


def vehicle_descriptor_fields(vehicle_position: gtfs_realtime_pb2.VehiclePosition) -> Dict[str, str]:
    """id and label of a vehicle position's vehicle"""
    if not vehicle_position.HasField("vehicle"):
        return {
            "vehicle_id": STRING_DEFAULT,
            "vehicle_label": STRING_DEFAULT,
        }

    vehicle = vehicle_position.vehicle
    return {
        "vehicle_id": _string_field(vehicle, "id"),
        "vehicle_label": _string_field(vehicle, "label"),
    }


def position_fields(vehicle_position: gtfs_realtime_pb2.VehiclePosition) -> Dict[str, float]:
    """
    latitude, longitude, bearing and speed of a vehicle position

    latitude and longitude are required inside a Position, so they are read
    directly and fall back to the protobuf default of 0.0 if a producer leaves
    them unset. bearing and speed are optional and default to 0.0.
    """
    if not vehicle_position.HasField("position"):
        return {
            "latitude": FLOAT_DEFAULT,
            "longitude": FLOAT_DEFAULT,
            "bearing": FLOAT_DEFAULT,
            "speed": FLOAT_DEFAULT,
        }

    position = vehicle_position.position
    return {
        "latitude": float(position.latitude),
        "longitude": float(position.longitude),
        "bearing": _float_field(position, "bearing"),
        "speed": _float_field(position, "speed"),
    }


def vehicle_trip_fields(vehicle_position: gtfs_realtime_pb2.VehiclePosition) -> Dict[str, str]:
    """trip_id and route_id of a vehicle position's trip"""
    if not vehicle_position.HasField("trip"):
        return {
            "trip_id": STRING_DEFAULT,
            "route_id": STRING_DEFAULT,
        }

    trip = vehicle_position.trip
    return {
        "trip_id": _string_field(trip, "trip_id"),
        "route_id": _string_field(trip, "route_id"),
    }

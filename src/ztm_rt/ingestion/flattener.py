from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Type, Union

import dataframely as dy
import polars as pl
from google.transit import gtfs_realtime_pb2

from ztm_rt.ingestion.converter import FeedType
from ztm_rt.runtime_utils.ztm_exception import FeedDecodeError


class FeedFlattener(ABC):
    """
    Abstract Base Class for flattening a decoded FeedMessage into a table with
    one row per entity that passes the flattener's filter.
    """

    @property
    @abstractmethod
    def feed_type(self) -> FeedType:
        """Feed this flattener is applied to"""

    @property
    @abstractmethod
    def schema(self) -> Type[dy.Schema]:
        """Schema of the flattened table"""

    @abstractmethod
    def entity_filter(self, entity: gtfs_realtime_pb2.FeedEntity) -> bool:
        """Should this entity produce a row"""

    @abstractmethod
    def entity_record(self, entity: gtfs_realtime_pb2.FeedEntity) -> Dict[str, Any]:
        """Row values for an entity that passed entity_filter, keyed by column"""

    def flatten(self, feed: gtfs_realtime_pb2.FeedMessage) -> pl.DataFrame:
        """
        walk feed entities in order and build a validated table

        entities are not de-duplicated on id.
        """
        columns: Dict[str, List[Any]] = {name: [] for name in self.schema.column_names()}

        for entity in feed.entity:
            if not self.entity_filter(entity):
                continue
            record = self.entity_record(entity)
            for name, values in columns.items():
                values.append(record[name])

        return self.schema.validate(pl.DataFrame(columns, schema=self.schema.polars_schema()))


@dataclass(frozen=True)
class FlattenedFeed:
    """Feed that decoded and flattened successfully"""

    feed_type: FeedType
    table: pl.DataFrame

    @property
    def failed(self) -> bool:
        """flattened feeds never fail"""
        return False


@dataclass(frozen=True)
class FailedFeed:
    """
    Feed whose payload could not be decoded

    table is a degenerate one row frame with a single `error` column so the
    failure still shows up wherever the feed's table would have.
    """

    feed_type: FeedType
    message: str
    cause: FeedDecodeError

    @property
    def failed(self) -> bool:
        """failed feeds always fail"""
        return True

    @property
    def table(self) -> pl.DataFrame:
        """degenerate table describing the failure"""
        return pl.DataFrame({"error": [self.message]}, schema={"error": pl.String})


FeedResult = Union[FlattenedFeed, FailedFeed]

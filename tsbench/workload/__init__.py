"""Workload payloads exchanged between the benchmark driver and adapters."""

from .ingestion import Batch, Record
from .queries import (
    AggRangeQuery,
    AggRangeValueQuery,
    AggValueQuery,
    GroupByQuery,
    LatestPointQuery,
    PreciseQuery,
    RangeQuery,
    ValueRangeQuery,
)

__all__ = [
    "AggRangeQuery",
    "AggRangeValueQuery",
    "AggValueQuery",
    "Batch",
    "GroupByQuery",
    "LatestPointQuery",
    "PreciseQuery",
    "RangeQuery",
    "Record",
    "ValueRangeQuery",
]

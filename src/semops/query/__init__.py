"""SPARQL execution and result-stream aggregation."""

from semops.query.streams import DATA, END, ERROR, ResultStream, collect
from semops.query.aggregator import QueryAggregator, QueryEngine, RdflibQueryEngine

__all__ = [
    "DATA",
    "END",
    "ERROR",
    "ResultStream",
    "collect",
    "QueryAggregator",
    "QueryEngine",
    "RdflibQueryEngine",
]

"""Graph conversion and comparison."""

from semops.graph.conversion import GraphConverter
from semops.graph.equivalence import graph_diff, isomorphic

__all__ = [
    "GraphConverter",
    "graph_diff",
    "isomorphic",
]

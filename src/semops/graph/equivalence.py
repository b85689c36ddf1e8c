"""
Structural comparison of quad collections.

Two graphs are equivalent when they are equal up to a consistent renaming of
blank nodes. The canonicalisation itself is rdflib's.
"""

from rdflib import Graph
from rdflib.compare import graph_diff as _graph_diff
from rdflib.compare import isomorphic as _isomorphic
from rdflib.compare import to_isomorphic


def isomorphic(a: Graph, b: Graph) -> bool:
    """True if ``a`` and ``b`` hold the same triples modulo blank-node labels."""
    return _isomorphic(a, b)


def graph_diff(a: Graph, b: Graph) -> tuple[Graph, Graph, Graph]:
    """
    Split two graphs into shared and distinct triples.

    Blank nodes are canonicalised first, so relabelled blank nodes count as
    shared.

    Returns:
        (in_both, only_in_a, only_in_b)
    """
    return _graph_diff(to_isomorphic(a), to_isomorphic(b))

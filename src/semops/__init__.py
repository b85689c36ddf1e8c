"""
SemOps: a semantic-graph data facade.

Moves triple data between Turtle, rdflib graphs, JSON-LD documents and SPARQL
results while applying one literal/IRI typing policy everywhere.
"""

from semops.core.exceptions import (
    ConfigurationError,
    ConversionError,
    ParseError,
    SemOpsError,
    ShaclError,
    StreamFailure,
)
from semops.core.schemas import Quad, ValidationReport, ValidationResult
from semops.graph.conversion import GraphConverter
from semops.graph.equivalence import graph_diff, isomorphic
from semops.ontology.classifier import TermClassifier, classify
from semops.ontology.namespaces import (
    Namespace,
    PrefixRegistry,
    build_registry,
    default_registry,
)
from semops.query.aggregator import QueryAggregator, RdflibQueryEngine
from semops.query.streams import ResultStream
from semops.validation.shacl import ShaclValidator, build_validator

__version__ = "0.1.0"

__all__ = [
    # Errors
    "SemOpsError",
    "ConfigurationError",
    "ConversionError",
    "ParseError",
    "ShaclError",
    "StreamFailure",
    # Types
    "Quad",
    "ValidationReport",
    "ValidationResult",
    # Prefixes and terms
    "Namespace",
    "PrefixRegistry",
    "build_registry",
    "default_registry",
    "TermClassifier",
    "classify",
    # Conversion
    "GraphConverter",
    "isomorphic",
    "graph_diff",
    # Query
    "QueryAggregator",
    "RdflibQueryEngine",
    "ResultStream",
    # Validation
    "ShaclValidator",
    "build_validator",
]

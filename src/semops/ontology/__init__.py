"""
Ontology package: the prefix registry and the term classifier.
"""

from semops.ontology.namespaces import (
    FF,
    RDF,
    RDFS,
    SCHEMA,
    SH,
    XSD,
    Namespace,
    PrefixRegistry,
    build_registry,
    default_registry,
)
from semops.ontology.classifier import TermClassifier, classify

__all__ = [
    # Namespaces
    "FF",
    "RDF",
    "RDFS",
    "SCHEMA",
    "SH",
    "XSD",
    "Namespace",
    # Registry
    "PrefixRegistry",
    "build_registry",
    "default_registry",
    # Classification
    "TermClassifier",
    "classify",
]

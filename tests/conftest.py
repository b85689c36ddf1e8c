"""Shared fixtures for the SemOps test suite."""

import pytest
import structlog

from semops.graph.conversion import GraphConverter
from semops.ontology.classifier import TermClassifier
from semops.ontology.namespaces import RDF, SH, XSD, Namespace, PrefixRegistry
from semops.query.aggregator import QueryAggregator

FF_URI = "https://foerderfunke.org/default#"


@pytest.fixture(autouse=True)
def captured_logs():
    """Capture structlog events instead of printing them."""
    with structlog.testing.capture_logs() as logs:
        yield logs


@pytest.fixture
def registry():
    """The default prefix table, built without reading settings."""
    return PrefixRegistry([Namespace("ff", FF_URI), SH, XSD, RDF])


@pytest.fixture
def classifier(registry):
    return TermClassifier(registry)


@pytest.fixture
def converter(registry):
    return GraphConverter(registry)


@pytest.fixture
def aggregator(registry):
    return QueryAggregator(registry=registry)


@pytest.fixture
def profile_turtle():
    """A small user profile in Turtle."""
    return f"""
        @prefix ff: <{FF_URI}> .
        @prefix xsd: <http://www.w3.org/2001/XMLSchema#> .

        ff:alice a ff:Citizen ;
            ff:name "Alice" ;
            ff:age 34 ;
            ff:birthday "1990-05-01"^^xsd:date ;
            ff:hasChild ff:bob .

        ff:bob a ff:Person ;
            ff:name "Bob" ;
            ff:age 7 .
    """

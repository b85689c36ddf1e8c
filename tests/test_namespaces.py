"""Tests for the prefix registry."""

import pytest
from rdflib import Graph

from semops.config.settings import Settings
from semops.core.exceptions import ConfigurationError
from semops.ontology.namespaces import (
    RDF,
    RDFS,
    SCHEMA,
    SH,
    XSD,
    Namespace,
    PrefixRegistry,
    build_registry,
)

FF_URI = "https://foerderfunke.org/default#"


# ============================================================================
# Namespace Tests
# ============================================================================

class TestNamespace:
    """Tests for the Namespace dataclass."""

    def test_attribute_and_item_access(self):
        ns = Namespace("ex", "http://example.org/")
        assert ns.Foo == "http://example.org/Foo"
        assert ns["bar-baz"] == "http://example.org/bar-baz"
        assert ns.term("qux") == "http://example.org/qux"

    def test_dunder_lookup_is_not_a_term(self):
        ns = Namespace("ex", "http://example.org/")
        assert not hasattr(ns, "__deepcopy__")


# ============================================================================
# Expansion / Compaction Tests
# ============================================================================

class TestExpandCompact:
    """Tests for the two lookup directions."""

    @pytest.mark.parametrize("local", ["Foo", "bar_baz", "x-1", ""])
    def test_round_trip_for_every_prefix(self, registry, local):
        for ns in registry:
            assert registry.expand(f"{ns.prefix}:{local}") == ns.uri + local
            assert registry.compact(ns.uri + local) == f"{ns.prefix}:{local}"

    def test_expand_known_prefix(self, registry):
        assert registry.expand("ff:Citizen") == FF_URI + "Citizen"
        assert registry.expand("sh:NodeShape") == "http://www.w3.org/ns/shacl#NodeShape"

    def test_expand_passes_unknown_values_through(self, registry):
        assert registry.expand("foo:bar") == "foo:bar"
        assert registry.expand("hello") == "hello"
        assert registry.expand("https://example.org/x") == "https://example.org/x"
        assert registry.expand("") == ""

    def test_expand_requires_colon_after_prefix(self, registry):
        # "ffx:" is not the "ff" prefix
        assert registry.expand("ffx:Citizen") == "ffx:Citizen"

    def test_compact_passes_unknown_iris_through(self, registry):
        assert registry.compact("https://example.org/x") == "https://example.org/x"

    def test_first_registered_base_wins(self):
        registry = PrefixRegistry([
            Namespace("ex", "http://example.org/"),
            Namespace("exa", "http://example.org/a#"),
        ])
        assert registry.compact("http://example.org/a#x") == "ex:a#x"

        reordered = PrefixRegistry([
            Namespace("exa", "http://example.org/a#"),
            Namespace("ex", "http://example.org/"),
        ])
        assert reordered.compact("http://example.org/a#x") == "exa:x"


# ============================================================================
# Construction Tests
# ============================================================================

class TestRegistryConstruction:
    """Tests for registry validation and helpers."""

    def test_duplicate_prefix_rejected(self):
        with pytest.raises(ConfigurationError):
            PrefixRegistry([
                Namespace("ex", "http://example.org/"),
                Namespace("ex", "http://example.com/"),
            ])

    def test_duplicate_namespace_rejected(self):
        with pytest.raises(ConfigurationError):
            PrefixRegistry([
                Namespace("a", "http://example.org/"),
                Namespace("b", "http://example.org/"),
            ])

    @pytest.mark.parametrize("prefix", ["", "a:b"])
    def test_invalid_prefix_rejected(self, prefix):
        with pytest.raises(ConfigurationError):
            PrefixRegistry([Namespace(prefix, "http://example.org/")])

    def test_order_and_membership(self, registry):
        assert [ns.prefix for ns in registry] == ["ff", "sh", "xsd", "rdf"]
        assert len(registry) == 4
        assert "xsd" in registry
        assert "rdfs" not in registry
        assert registry.get("rdf") == RDF
        assert registry.get("nope") is None

    def test_with_namespace_returns_new_registry(self, registry):
        extended = registry.with_namespace(RDFS)
        assert "rdfs" in extended
        assert "rdfs" not in registry

    def test_as_dict_preserves_order(self, registry):
        assert list(registry.as_dict().items()) == [
            ("ff", FF_URI),
            ("sh", SH.uri),
            ("xsd", XSD.uri),
            ("rdf", RDF.uri),
        ]
        assert registry.jsonld_context() == registry.as_dict()

    def test_sparql_and_turtle_prefix_blocks(self, registry):
        sparql = registry.sparql_prefixes().splitlines()
        turtle = registry.turtle_prefixes().splitlines()
        assert sparql[0] == f"PREFIX ff: <{FF_URI}>"
        assert turtle[0] == f"@prefix ff: <{FF_URI}> ."
        assert len(sparql) == len(turtle) == 4

    def test_bind_sets_graph_prefixes(self, registry):
        graph = registry.bind(Graph())
        bound = {prefix: str(uri) for prefix, uri in graph.namespaces()}
        assert bound["ff"] == FF_URI
        assert bound["sh"] == SH.uri


# ============================================================================
# Settings-driven Registry Tests
# ============================================================================

class TestBuildRegistry:
    """Tests for building the registry from settings."""

    def test_default_table(self):
        registry = build_registry(Settings(_env_file=None))
        assert [ns.prefix for ns in registry] == ["ff", "sh", "xsd", "rdf"]
        assert registry.expand("ff:x") == FF_URI + "x"

    def test_extended_table(self):
        registry = build_registry(Settings(_env_file=None, extended_prefixes=True))
        assert [ns.prefix for ns in registry][-2:] == ["rdfs", "schema"]
        assert registry.compact(SCHEMA.uri + "Person") == "schema:Person"

    def test_custom_domain_namespace(self):
        settings = Settings(
            _env_file=None,
            domain_prefix="ex",
            domain_namespace="https://example.org/default#",
        )
        registry = build_registry(settings)
        assert registry.expand("ex:Foo") == "https://example.org/default#Foo"
        assert "ff" not in registry

    def test_domain_namespace_from_environment(self, monkeypatch):
        monkeypatch.setenv("SEMOPS_DOMAIN_PREFIX", "dom")
        monkeypatch.setenv("SEMOPS_DOMAIN_NAMESPACE", "https://dom.example/#")
        registry = build_registry(Settings(_env_file=None))
        assert registry.expand("dom:A") == "https://dom.example/#A"

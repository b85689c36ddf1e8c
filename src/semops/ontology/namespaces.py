"""
Prefix registry for the SemOps toolkit.

Maps short prefixes to canonical IRI bases in both directions:

    ff:Citizen   <->  https://foerderfunke.org/default#Citizen
    sh:NodeShape <->  http://www.w3.org/ns/shacl#NodeShape

The registry is an immutable, insertion-ordered table. Lookups scan the
entries in registration order and the first match wins, so a base IRI that
is itself a prefix of another registered base shadows it during compaction.
Duplicate prefix names or duplicate bases are rejected when the registry is
built.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Iterator, Optional

from rdflib import Graph

from semops.config.settings import Settings, get_settings
from semops.core.exceptions import ConfigurationError


@dataclass(frozen=True)
class Namespace:
    """RDF namespace with prefix and URI."""

    prefix: str
    uri: str

    def __getattr__(self, name: str) -> str:
        """Allow namespace.Property syntax for building URIs."""
        if name.startswith("__"):
            raise AttributeError(name)
        return f"{self.uri}{name}"

    def __getitem__(self, name: str) -> str:
        """Allow namespace['property'] syntax for building URIs."""
        return f"{self.uri}{name}"

    def term(self, name: str) -> str:
        """Build a URI for a term in this namespace."""
        return f"{self.uri}{name}"


# Standard namespaces
SH = Namespace("sh", "http://www.w3.org/ns/shacl#")
XSD = Namespace("xsd", "http://www.w3.org/2001/XMLSchema#")
RDF = Namespace("rdf", "http://www.w3.org/1999/02/22-rdf-syntax-ns#")
RDFS = Namespace("rdfs", "http://www.w3.org/2000/01/rdf-schema#")
SCHEMA = Namespace("schema", "http://schema.org/")

# Domain namespace (overridable through settings)
FF = Namespace("ff", "https://foerderfunke.org/default#")


class PrefixRegistry:
    """
    Ordered, read-only table of prefix/namespace pairs.

    Both lookups are total: a value that matches no entry is returned
    unchanged.
    """

    def __init__(self, namespaces: Iterable[Namespace]):
        entries = tuple(namespaces)

        seen_prefixes: set[str] = set()
        seen_uris: set[str] = set()
        for ns in entries:
            if not ns.prefix or ":" in ns.prefix:
                raise ConfigurationError(
                    message=f"Invalid prefix name: {ns.prefix!r}",
                    details={"prefix": ns.prefix, "uri": ns.uri},
                )
            if ns.prefix in seen_prefixes:
                raise ConfigurationError(
                    message=f"Prefix registered twice: {ns.prefix}",
                    details={"prefix": ns.prefix},
                )
            if ns.uri in seen_uris:
                raise ConfigurationError(
                    message=f"Namespace registered twice: {ns.uri}",
                    details={"uri": ns.uri},
                )
            seen_prefixes.add(ns.prefix)
            seen_uris.add(ns.uri)

        self._entries: tuple[Namespace, ...] = entries

    def __iter__(self) -> Iterator[Namespace]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, prefix: object) -> bool:
        return any(ns.prefix == prefix for ns in self._entries)

    def __repr__(self) -> str:
        prefixes = ", ".join(ns.prefix for ns in self._entries)
        return f"<PrefixRegistry [{prefixes}]>"

    def get(self, prefix: str) -> Optional[Namespace]:
        """Return the namespace registered under ``prefix``, if any."""
        for ns in self._entries:
            if ns.prefix == prefix:
                return ns
        return None

    def expand(self, name: str) -> str:
        """
        Expand a prefixed name into a full IRI.

        Args:
            name: Prefixed name such as ``ff:Citizen``

        Returns:
            The full IRI, or ``name`` unchanged if no registered prefix matches
        """
        for ns in self._entries:
            head = ns.prefix + ":"
            if name.startswith(head):
                return ns.uri + name[len(head):]
        return name

    def compact(self, iri: str) -> str:
        """
        Compact a full IRI into a prefixed name.

        Args:
            iri: Full IRI

        Returns:
            ``prefix:local``, or ``iri`` unchanged if no registered base matches
        """
        for ns in self._entries:
            if iri.startswith(ns.uri):
                return f"{ns.prefix}:{iri[len(ns.uri):]}"
        return iri

    def with_namespace(self, namespace: Namespace) -> "PrefixRegistry":
        """Return a new registry with ``namespace`` appended."""
        return PrefixRegistry((*self._entries, namespace))

    def as_dict(self) -> dict[str, str]:
        """
        Get all namespace prefixes as a dictionary.

        Returns:
            Dict mapping prefix names to URIs, in registration order
        """
        return {ns.prefix: ns.uri for ns in self._entries}

    def jsonld_context(self) -> dict[str, str]:
        """The prefix table as a JSON-LD ``@context`` value."""
        return self.as_dict()

    def sparql_prefixes(self) -> str:
        """
        Get SPARQL PREFIX declarations for all namespaces.

        Returns:
            String with all PREFIX declarations
        """
        return "\n".join(
            f"PREFIX {ns.prefix}: <{ns.uri}>"
            for ns in self._entries
        )

    def turtle_prefixes(self) -> str:
        """Get Turtle ``@prefix`` declarations for all namespaces."""
        return "\n".join(
            f"@prefix {ns.prefix}: <{ns.uri}> ."
            for ns in self._entries
        )

    def bind(self, graph: Graph) -> Graph:
        """
        Bind every registered prefix on an rdflib graph.

        Existing bindings for the same prefix are replaced so the writer
        always uses this table.
        """
        for ns in self._entries:
            graph.bind(ns.prefix, ns.uri, override=True, replace=True)
        return graph


def build_registry(settings: Optional[Settings] = None) -> PrefixRegistry:
    """
    Build the prefix registry described by the settings.

    Args:
        settings: Settings instance (default: cached settings)

    Returns:
        Registry holding the domain, shacl, xsd and rdf namespaces, plus rdfs
        and schema.org when ``extended_prefixes`` is enabled
    """
    settings = settings or get_settings()
    namespaces = [
        Namespace(settings.domain_prefix, settings.domain_namespace),
        SH,
        XSD,
        RDF,
    ]
    if settings.extended_prefixes:
        namespaces.extend([RDFS, SCHEMA])
    return PrefixRegistry(namespaces)


@lru_cache()
def default_registry() -> PrefixRegistry:
    """
    Get the process-wide registry.
    Built once from settings and never mutated afterwards.
    """
    return build_registry()

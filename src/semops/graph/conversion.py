"""
Graph conversion facade.

Moves triples between a Turtle document, an in-memory rdflib graph and a
JSON-LD document. Parsing and writing are delegated to rdflib (Turtle,
N-Triples, N-Quads) and pyld (JSON-LD expansion, framing, compaction); the
prefix registry supplies the prefixes for readable output and the JSON-LD
context.
"""

from __future__ import annotations

import asyncio
import re
from typing import Any, Iterable, Optional, Sequence, Union

import structlog
from pyld import jsonld
from rdflib import BNode, Dataset, Graph, URIRef

from semops.core.exceptions import ConversionError, ParseError
from semops.core.schemas import ObjectValue, Quad
from semops.ontology.classifier import TermClassifier
from semops.ontology.namespaces import PrefixRegistry, default_registry

logger = structlog.get_logger(__name__)

NQUADS_FORMAT = "application/n-quads"


class GraphConverter:
    """
    Converts quad collections to and from Turtle and JSON-LD.

    Conversions to text or documents never modify the input graph; parsing
    into an existing graph only touches it once the whole document parsed.
    """

    def __init__(
        self,
        registry: Optional[PrefixRegistry] = None,
        classifier: Optional[TermClassifier] = None,
    ):
        """
        Initialize the converter.

        Args:
            registry: Prefix registry (default: process-wide registry)
            classifier: Term classifier for add_triple (default: built on registry)
        """
        self.registry = registry or default_registry()
        self.classifier = classifier or TermClassifier(self.registry)

    # ═══════════════════════════════════════════════════════════════════════════════
    # STORES
    # ═══════════════════════════════════════════════════════════════════════════════

    def new_store(self) -> Graph:
        """Create an empty graph with the registry's prefixes bound."""
        return self.registry.bind(Graph(bind_namespaces="core"))

    def add_triple(
        self,
        graph: Graph,
        subject: Union[str, URIRef, BNode],
        predicate: Union[str, URIRef],
        value: ObjectValue,
    ) -> Quad:
        """
        Add one triple, classifying the object value.

        Subject and predicate are taken as full IRIs; only the object goes
        through the term classifier.

        Args:
            graph: Target graph (mutated)
            subject: Subject IRI or blank node
            predicate: Predicate IRI
            value: Object value, typed term or scalar

        Returns:
            The quad that was added
        """
        if not isinstance(subject, (URIRef, BNode)):
            subject = URIRef(subject)
        quad = Quad(subject, URIRef(predicate), self.classifier.classify(value))
        graph.add(quad.triple())
        return quad

    async def add_turtle_to_store(self, graph: Graph, turtle: str) -> Graph:
        """Parse a Turtle document into an existing graph."""
        return await self.from_turtle(turtle, graph)

    async def store_from_turtles(self, turtles: Iterable[str]) -> Graph:
        """
        Build one graph from several Turtle documents.

        Args:
            turtles: Turtle documents, parsed in order

        Returns:
            A new graph holding the union of all documents
        """
        graph = self.new_store()
        for turtle in turtles:
            await self.from_turtle(turtle, graph)
        return graph

    # ═══════════════════════════════════════════════════════════════════════════════
    # TURTLE
    # ═══════════════════════════════════════════════════════════════════════════════

    async def to_turtle(self, graph: Graph) -> str:
        """
        Serialize a graph as Turtle using the registry's prefixes.

        Args:
            graph: Graph to serialize (not modified)

        Returns:
            Turtle text
        """
        return await asyncio.to_thread(self._write, graph, "turtle")

    async def from_turtle(self, turtle: str, graph: Optional[Graph] = None) -> Graph:
        """
        Parse a Turtle document.

        Args:
            turtle: Turtle text
            graph: Graph to add the triples to (default: a new store)

        Returns:
            The graph holding the parsed triples

        Raises:
            ParseError: If the document is malformed; ``graph`` is left untouched
        """
        parsed = await asyncio.to_thread(self._parse, turtle, "turtle")
        return self._merge(parsed, graph)

    async def to_ntriples(self, graph: Graph) -> str:
        """
        Serialize a graph as N-Triples, lines sorted.

        This is the canonical exchange form fed to the JSON-LD processor.
        """
        text = await asyncio.to_thread(self._write, graph, "nt")
        lines = sorted(line for line in text.splitlines() if line.strip())
        return "".join(f"{line}\n" for line in lines)

    # ═══════════════════════════════════════════════════════════════════════════════
    # JSON-LD
    # ═══════════════════════════════════════════════════════════════════════════════

    async def to_jsonld(
        self,
        graph: Graph,
        root_types: Sequence[str] = (),
    ) -> dict[str, Any]:
        """
        Convert a graph into a compacted JSON-LD document.

        With ``root_types`` the document is framed first, so nodes of those
        types become the top-level entries and the nodes they reference are
        embedded beneath them.

        Args:
            graph: Graph to convert (not modified)
            root_types: Class IRIs (full or prefixed) to frame on

        Returns:
            JSON-LD document compacted with the registry's context
        """
        nquads = await self.to_ntriples(graph)
        context = self.registry.jsonld_context()
        types = [self.registry.expand(str(t)) for t in root_types]

        def _convert() -> dict[str, Any]:
            document = jsonld.from_rdf(nquads, {"format": NQUADS_FORMAT})
            if types:
                document = jsonld.frame(document, {"@context": context, "@type": types})
            return jsonld.compact(document, context)

        try:
            document = await asyncio.to_thread(_convert)
        except jsonld.JsonLdError as e:
            logger.error("JSON-LD conversion failed", error=str(e), root_types=types)
            raise ConversionError(
                message=f"JSON-LD conversion failed: {e}",
                format="json-ld",
                cause=e,
            )

        logger.debug("Graph converted to JSON-LD", triples=len(graph), root_types=types)
        return document

    async def from_jsonld(
        self,
        document: Union[dict[str, Any], list[Any]],
        graph: Optional[Graph] = None,
    ) -> Graph:
        """
        Convert a JSON-LD document into triples.

        Named graphs in the document are merged into the target graph.

        Args:
            document: JSON-LD document (any form: compacted, expanded, framed)
            graph: Graph to add the triples to (default: a new store)

        Returns:
            The graph holding the converted triples

        Raises:
            ParseError: If the document cannot be processed
        """
        try:
            nquads = await asyncio.to_thread(
                jsonld.to_rdf, document, {"format": NQUADS_FORMAT}
            )
        except jsonld.JsonLdError as e:
            logger.error("JSON-LD document rejected", error=str(e))
            raise ParseError(
                message=f"Invalid JSON-LD document: {e}",
                format="json-ld",
                cause=e,
            )

        parsed = await asyncio.to_thread(self._parse, nquads, "nquads")
        return self._merge(parsed, graph)

    # ═══════════════════════════════════════════════════════════════════════════════
    # HELPERS
    # ═══════════════════════════════════════════════════════════════════════════════

    def extract_first_individual_uri(self, turtle: str, class_uri: str) -> str:
        """
        Find the first individual declared with ``<subject> a <class_uri>``.

        This is a plain text scan; ``class_uri`` must be written the way the
        document writes it (prefixed name or ``<IRI>``).

        Args:
            turtle: Turtle text
            class_uri: Class as it appears in the text, e.g. ``ff:Citizen``

        Returns:
            The expanded subject IRI, or "" if no declaration was found
        """
        match = re.search(rf"(.*?)\s+a\s+{re.escape(class_uri)}", turtle)
        if match:
            return self.registry.expand(match.group(1).strip())
        logger.warning(
            "Could not extract individual URI from turtle",
            class_uri=class_uri,
        )
        return ""

    def _write(self, graph: Graph, format: str) -> str:
        """Serialize a copy of ``graph`` carrying the registry's prefixes."""
        out = self.new_store()
        for triple in graph:
            out.add(triple)
        return out.serialize(format=format)

    def _parse(self, data: str, format: str) -> Graph:
        """Parse ``data`` into a fresh graph, wrapping parser failures."""
        try:
            if format == "nquads":
                dataset = Dataset()
                dataset.parse(data=data, format=format)
                parsed = self.new_store()
                for s, p, o, _ in dataset.quads((None, None, None, None)):
                    parsed.add((s, p, o))
                return parsed

            parsed = self.new_store()
            parsed.parse(data=data, format=format)
            return parsed
        except Exception as e:
            logger.error("Failed to parse document", format=format, error=str(e))
            raise ParseError(
                message=f"Failed to parse {format} document: {e}",
                format=format,
                cause=e,
            )

    def _merge(self, parsed: Graph, graph: Optional[Graph]) -> Graph:
        if graph is None:
            return parsed
        for triple in parsed:
            graph.add(triple)
        logger.debug("Triples added to store", added=len(parsed), total=len(graph))
        return graph

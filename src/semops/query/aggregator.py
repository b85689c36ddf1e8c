"""
SPARQL query execution over in-memory graphs.

The query engine exposes three result modes (quad stream, bindings stream,
boolean). The aggregator drives it and turns each mode into a fully
materialized, order-preserving result or a single ``StreamFailure``.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional, Protocol, Sequence, Union, runtime_checkable

import structlog
from rdflib import Graph

from semops.core.exceptions import StreamFailure
from semops.core.schemas import Quad
from semops.ontology.namespaces import PrefixRegistry, default_registry
from semops.query.streams import DATA, ResultStream, collect

logger = structlog.get_logger(__name__)

Sources = Union[Graph, Sequence[Graph]]

# rdflib result types accepted by each mode
QUAD_RESULT_TYPES = ("CONSTRUCT", "DESCRIBE")


@runtime_checkable
class QueryEngine(Protocol):
    """
    Protocol for query engines.

    Stream modes return an unstarted ``ResultStream``; the caller subscribes
    and starts it.
    """

    def quads(self, query: str, sources: Sequence[Graph]) -> ResultStream:
        """Stream of ``Quad`` results for CONSTRUCT/DESCRIBE queries."""
        ...

    def bindings(self, query: str, sources: Sequence[Graph]) -> ResultStream:
        """Stream of ``dict[str, str]`` rows for SELECT queries."""
        ...

    async def boolean(self, query: str, sources: Sequence[Graph]) -> bool:
        """Answer of an ASK query."""
        ...


class RdflibQueryEngine:
    """
    Query engine backed by rdflib's SPARQL implementation.

    Sources are merged into one graph per query. Queries run in a worker
    thread and may use every prefix of the registry without declaring it.
    """

    def __init__(self, registry: Optional[PrefixRegistry] = None):
        """
        Initialize the engine.

        Args:
            registry: Prefixes made available to every query
                      (default: process-wide registry)
        """
        self.registry = registry or default_registry()

    def quads(self, query: str, sources: Sequence[Graph]) -> ResultStream:
        async def produce(stream: ResultStream) -> None:
            triples = await asyncio.to_thread(
                self._run, query, sources, QUAD_RESULT_TYPES, self._triples
            )
            for s, p, o in triples:
                stream.emit(DATA, Quad(s, p, o))

        return ResultStream(produce, mode="quads")

    def bindings(self, query: str, sources: Sequence[Graph]) -> ResultStream:
        async def produce(stream: ResultStream) -> None:
            rows = await asyncio.to_thread(
                self._run, query, sources, ("SELECT",), self._rows
            )
            for row in rows:
                stream.emit(DATA, row)

        return ResultStream(produce, mode="bindings")

    async def boolean(self, query: str, sources: Sequence[Graph]) -> bool:
        return await asyncio.to_thread(
            self._run, query, sources, ("ASK",), lambda result: bool(result.askAnswer)
        )

    def _run(self, query, sources, accepted, extract):
        """Execute ``query`` and extract its results inside the worker thread."""
        graph = self._merge(sources)
        result = graph.query(query, initNs=self.registry.as_dict())
        if result.type not in accepted:
            raise StreamFailure(
                message=f"Expected a {'/'.join(accepted)} query, got {result.type}",
                mode=result.type,
            )
        return extract(result)

    @staticmethod
    def _merge(sources: Sequence[Graph]) -> Graph:
        if len(sources) == 1:
            return sources[0]
        merged = Graph()
        for source in sources:
            for triple in source:
                merged.add(triple)
        return merged

    @staticmethod
    def _triples(result) -> list:
        return list(result.graph)

    @staticmethod
    def _rows(result) -> list[dict[str, str]]:
        # asdict() follows the projection order and skips unbound variables
        return [
            {str(var): str(value) for var, value in row.asdict().items()}
            for row in result
        ]


class QueryAggregator:
    """
    Runs queries against one or more graphs and materializes their results.

    Nothing is retried and nothing partial is returned: a call either yields
    the complete result or raises ``StreamFailure``.
    """

    def __init__(
        self,
        engine: Optional[QueryEngine] = None,
        registry: Optional[PrefixRegistry] = None,
    ):
        """
        Initialize the aggregator.

        Args:
            engine: Query engine (default: RdflibQueryEngine on the registry)
            registry: Prefix registry for the default engine
        """
        self.engine = engine or RdflibQueryEngine(registry)

    async def construct_quads(
        self,
        query: str,
        sources: Sources,
        target: Optional[Graph] = None,
    ) -> list[Quad]:
        """
        Run a CONSTRUCT query.

        Args:
            query: SPARQL CONSTRUCT (or DESCRIBE) query
            sources: Graph or graphs to query
            target: Graph that receives every constructed triple

        Returns:
            Constructed quads in emission order

        Raises:
            StreamFailure: If the engine reports an error; ``target`` is left
                           untouched
        """
        quads = await self._collect(self.engine.quads(query, self._sources(sources)), query)
        if target is not None:
            for quad in quads:
                target.add(quad.triple())
        logger.debug("CONSTRUCT results", count=len(quads), stored=target is not None)
        return quads

    async def select_bindings(self, query: str, sources: Sources) -> list[dict[str, str]]:
        """
        Run a SELECT query.

        Args:
            query: SPARQL SELECT query
            sources: Graph or graphs to query

        Returns:
            One dict per row, mapping variable name to the bound value's
            lexical form; row and variable order are the engine's
        """
        rows = await self._collect(self.engine.bindings(query, self._sources(sources)), query)
        logger.debug("SELECT results", count=len(rows))
        return rows

    async def ask_boolean(self, query: str, sources: Sources) -> bool:
        """
        Run an ASK query.

        Args:
            query: SPARQL ASK query
            sources: Graph or graphs to query

        Returns:
            The engine's answer
        """
        logger.debug("Executing SPARQL query", query=query)
        try:
            return await self.engine.boolean(query, self._sources(sources))
        except StreamFailure:
            raise
        except Exception as e:
            logger.error("ASK query failed", error=str(e))
            raise StreamFailure(
                message=f"ASK query failed: {e}",
                mode="boolean",
                cause=e,
            )

    async def _collect(self, stream: ResultStream, query: str) -> list[Any]:
        logger.debug("Executing SPARQL query", query=query, mode=stream.mode)
        try:
            return await collect(stream)
        except StreamFailure:
            raise
        except Exception as e:
            logger.error("Query stream failed", mode=stream.mode, error=str(e))
            raise StreamFailure(
                message=f"Query stream failed: {e}",
                mode=stream.mode,
                cause=e,
            )

    @staticmethod
    def _sources(sources: Sources) -> list[Graph]:
        if isinstance(sources, Graph):
            return [sources]
        return list(sources)

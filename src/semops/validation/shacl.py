"""
SHACL validation of data graphs.

Shapes are parsed once into a validator; validation runs pyshacl in a worker
thread and reports the results as pydantic models with compacted IRIs.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import structlog
from pyshacl import validate as shacl_validate
from rdflib import Graph, URIRef
from rdflib.namespace import RDF, SH

from semops.core.exceptions import ParseError, ShaclError
from semops.core.schemas import Severity, ValidationReport, ValidationResult
from semops.ontology.namespaces import PrefixRegistry, default_registry

logger = structlog.get_logger(__name__)

SEVERITIES = {
    SH.Violation: Severity.VIOLATION,
    SH.Warning: Severity.WARNING,
    SH.Info: Severity.INFO,
}


class ShaclValidator:
    """
    Validates data graphs against a fixed shapes graph.
    """

    def __init__(
        self,
        shapes: Graph,
        registry: Optional[PrefixRegistry] = None,
        advanced: bool = False,
    ):
        """
        Initialize the validator.

        Args:
            shapes: Shapes graph
            registry: Registry used to compact IRIs in results
            advanced: Enable SHACL Advanced Features (rules, functions)
        """
        self.shapes = shapes
        self.registry = registry or default_registry()
        self.advanced = advanced

    async def validate(self, data: Graph) -> ValidationReport:
        """
        Validate a data graph.

        Args:
            data: Graph to validate (not modified)

        Returns:
            Report with conformance flag and one entry per result

        Raises:
            ShaclError: If the SHACL engine itself fails
        """
        try:
            conforms, results_graph, results_text = await asyncio.to_thread(
                shacl_validate,
                data,
                shacl_graph=self.shapes,
                inference="none",
                advanced=self.advanced,
            )
        except Exception as e:
            logger.error("SHACL validation failed", error=str(e))
            raise ShaclError(
                message=f"SHACL validation failed: {e}",
                cause=e,
            )

        results = self._results(results_graph)
        logger.info(
            "SHACL validation finished",
            conforms=conforms,
            results=len(results),
        )
        return ValidationReport(conforms=bool(conforms), results=results, text=results_text)

    def _results(self, report: Graph) -> list[ValidationResult]:
        results = []
        for node in report.subjects(RDF.type, SH.ValidationResult):
            severity = report.value(node, SH.resultSeverity)
            message = report.value(node, SH.resultMessage)
            results.append(
                ValidationResult(
                    focus_node=self._text(report.value(node, SH.focusNode)) or "",
                    result_path=self._text(report.value(node, SH.resultPath)),
                    value=self._text(report.value(node, SH.value)),
                    source_shape=self._text(report.value(node, SH.sourceShape)),
                    source_constraint=self._text(
                        report.value(node, SH.sourceConstraintComponent)
                    ),
                    severity=SEVERITIES.get(severity, Severity.VIOLATION),
                    message=str(message) if message is not None else None,
                )
            )
        # the report graph is unordered
        results.sort(key=lambda r: (r.focus_node, r.result_path or "", r.source_constraint or ""))
        return results

    def _text(self, term) -> Optional[str]:
        if term is None:
            return None
        if isinstance(term, URIRef):
            return self.registry.compact(str(term))
        return str(term)


def build_validator(
    shapes_turtle: str,
    registry: Optional[PrefixRegistry] = None,
    advanced: bool = False,
) -> ShaclValidator:
    """
    Build a validator from a Turtle shapes document.

    Args:
        shapes_turtle: SHACL shapes as Turtle
        registry: Prefix registry (default: process-wide registry)
        advanced: Enable SHACL Advanced Features

    Returns:
        Validator bound to the parsed shapes

    Raises:
        ParseError: If the shapes document is malformed
    """
    shapes = Graph()
    try:
        shapes.parse(data=shapes_turtle, format="turtle")
    except Exception as e:
        logger.error("Failed to parse shapes graph", error=str(e))
        raise ParseError(
            message=f"Failed to parse shapes graph: {e}",
            format="turtle",
            cause=e,
        )
    logger.debug("Shapes graph loaded", triples=len(shapes))
    return ShaclValidator(shapes, registry=registry, advanced=advanced)

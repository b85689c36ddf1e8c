"""
Core value types shared across SemOps.
"""

from enum import Enum
from typing import NamedTuple, Optional, Union

from pydantic import BaseModel, Field
from rdflib import BNode, Literal, URIRef

# An RDF term as held in a quad collection
Term = Union[URIRef, Literal, BNode]

# Anything the term classifier accepts
ObjectValue = Union[URIRef, Literal, BNode, str, bool, int, float]


class Quad(NamedTuple):
    """A subject/predicate/object triple plus an optional named graph."""

    subject: Union[URIRef, BNode]
    predicate: URIRef
    object: Term
    graph: Optional[Union[URIRef, BNode]] = None

    def triple(self) -> tuple[Union[URIRef, BNode], URIRef, Term]:
        """Drop the graph component."""
        return (self.subject, self.predicate, self.object)


class Severity(str, Enum):
    """SHACL result severities."""

    VIOLATION = "Violation"
    WARNING = "Warning"
    INFO = "Info"


class ValidationResult(BaseModel):
    """
    One result of a SHACL validation report.

    IRIs are compacted through the prefix registry where possible.
    """

    focus_node: str = Field(..., description="Node that failed the constraint")
    result_path: Optional[str] = Field(None, description="Property path of the failing value")
    value: Optional[str] = Field(None, description="Offending value, if any")
    source_shape: Optional[str] = Field(None, description="Shape that produced the result")
    source_constraint: Optional[str] = Field(
        None,
        description="Constraint component, e.g. sh:MinCountConstraintComponent",
    )
    severity: Severity = Field(default=Severity.VIOLATION)
    message: Optional[str] = Field(None, description="Human-readable message")


class ValidationReport(BaseModel):
    """Outcome of validating a data graph against a shapes graph."""

    conforms: bool
    results: list[ValidationResult] = Field(default_factory=list)
    text: str = Field(default="", description="Report text produced by the SHACL engine")

    @property
    def violations(self) -> list[ValidationResult]:
        """Results with severity Violation."""
        return [r for r in self.results if r.severity == Severity.VIOLATION]

"""
Term classifier: turns loosely typed scalars into RDF terms.

The classifier runs an ordered list of matchers over the input and the first
one that returns a term wins:

    already typed term  -> returned unchanged
    boolean             -> xsd:boolean
    IRI / prefixed name -> named resource
    date-time           -> xsd:dateTime
    date                -> xsd:date
    number              -> xsd:integer / xsd:decimal
    anything else       -> plain string literal

Order matters because the categories overlap ("2025-07-27" also starts like a
number, "ff:7" is both a prefixed name and a string).

Typed literals go through rdflib's lexical normalisation, so each lexical form
is the canonical one a parser yields when the literal is read back
("2025-07-27T14:30:00Z" -> "2025-07-27T14:30:00+00:00").
"""

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional, Union

from rdflib import BNode, Literal, URIRef
from rdflib.namespace import XSD

from semops.core.schemas import ObjectValue, Term
from semops.ontology.namespaces import PrefixRegistry, default_registry

DATETIME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}")
NUMBER_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")

TYPED_TERMS = (URIRef, Literal, BNode)

Matcher = Callable[[Union[Term, bool, str]], Optional[Term]]


def _as_text(value: Union[Term, bool, str]) -> Optional[str]:
    """Trimmed text of a string input, None for typed input."""
    if isinstance(value, str) and not isinstance(value, TYPED_TERMS):
        return value.strip()
    return None


def _scalar_text(value: Any) -> str:
    """Text of a non-string scalar; finite floats and decimals in positional notation."""
    if isinstance(value, float) and math.isfinite(value):
        return format(Decimal(repr(value)), "f")
    if isinstance(value, Decimal) and value.is_finite():
        return format(value, "f")
    return str(value)


def match_typed(value: Union[Term, bool, str]) -> Optional[Term]:
    """Already typed terms pass through untouched."""
    if isinstance(value, TYPED_TERMS):
        return value
    return None


def match_boolean(value: Union[Term, bool, str]) -> Optional[Term]:
    """Native booleans and "true"/"false" in any casing."""
    if isinstance(value, bool):
        return Literal("true" if value else "false", datatype=XSD.boolean)
    text = _as_text(value)
    if text is not None and text.lower() in ("true", "false"):
        return Literal(text.lower(), datatype=XSD.boolean)
    return None


def match_datetime(value: Union[Term, bool, str]) -> Optional[Term]:
    text = _as_text(value)
    if text is not None and DATETIME_PATTERN.match(text):
        return Literal(text, datatype=XSD.dateTime)
    return None


def match_date(value: Union[Term, bool, str]) -> Optional[Term]:
    text = _as_text(value)
    if text is not None and DATE_PATTERN.match(text):
        return Literal(text[:10], datatype=XSD.date)
    return None


def match_number(value: Union[Term, bool, str]) -> Optional[Term]:
    """
    Integers and decimals in plain decimal notation.

    Integral values are re-stringified from the parsed integer ("+4" -> "4",
    "3.0" -> "3"), other values from the parsed decimal in positional
    notation (".5" -> "0.5", "+2.50" -> "2.50").
    """
    text = _as_text(value)
    if text is None or not NUMBER_PATTERN.match(text):
        return None
    try:
        number = Decimal(text)
    except InvalidOperation:
        return None

    if number == number.to_integral_value():
        return Literal(str(int(number)), datatype=XSD.integer)
    return Literal(format(number, "f"), datatype=XSD.decimal)


def match_plain(value: Union[Term, bool, str]) -> Optional[Term]:
    text = _as_text(value)
    if text is None:
        return None
    return Literal(text)


class TermClassifier:
    """
    Classifies scalar values into RDF terms.

    The IRI matcher depends on the prefix registry, so it is bound per
    instance; all other matchers are plain functions.
    """

    def __init__(self, registry: Optional[PrefixRegistry] = None):
        """
        Initialize the classifier.

        Args:
            registry: Prefix registry used to expand prefixed names
                      (default: process-wide registry)
        """
        self.registry = registry or default_registry()
        self.matchers: tuple[Matcher, ...] = (
            match_typed,
            match_boolean,
            self.match_iri,
            match_datetime,
            match_date,
            match_number,
            match_plain,
        )

    def match_iri(self, value: Union[Term, bool, str]) -> Optional[Term]:
        """Full http(s) IRIs and prefixed names that expand to one."""
        text = _as_text(value)
        if text is None:
            return None
        expanded = self.registry.expand(text)
        if expanded.startswith(("http://", "https://")):
            return URIRef(expanded)
        return None

    def classify(self, value: ObjectValue) -> Term:
        """
        Convert a value into an RDF term.

        Args:
            value: An rdflib term, a bool, a string, or any other scalar
                   (stringified before matching,
                   floats and decimals without exponent)

        Returns:
            The first term produced by the ordered matchers
        """
        if not isinstance(value, (bool, str, *TYPED_TERMS)):
            value = _scalar_text(value)

        for matcher in self.matchers:
            term = matcher(value)
            if term is not None:
                return term

        # match_plain accepts every string, so this is unreachable for valid input
        raise TypeError(f"Cannot classify value of type {type(value).__name__}")

    __call__ = classify


def classify(value: ObjectValue, registry: Optional[PrefixRegistry] = None) -> Term:
    """Classify a value with a one-off classifier."""
    return TermClassifier(registry).classify(value)

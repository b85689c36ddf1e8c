"""
CLI commands for SemOps.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path

import click
from rdflib.plugins.sparql.parser import parseQuery
from rich.console import Console
from rich.table import Table

from semops import __version__
from semops.core.exceptions import ParseError, SemOpsError

console = Console()

QUERY_FORMS = {
    "SelectQuery": "select",
    "AskQuery": "ask",
    "ConstructQuery": "construct",
    "DescribeQuery": "describe",
}


def run_async(coro):
    """Run an async function in sync context."""
    return asyncio.run(coro)


def detect_query_form(query: str) -> str:
    """
    Detect the form of a SPARQL query.

    The query is parsed without resolving prefixes, so undeclared registry
    prefixes are fine.

    Returns:
        "select", "ask", "construct" or "describe"

    Raises:
        ParseError: If the text is not a SPARQL query
    """
    try:
        parsed = parseQuery(query)
    except Exception as e:
        raise ParseError(
            message=f"Not a SPARQL query: {e}",
            format="sparql",
            cause=e,
        )
    return QUERY_FORMS[parsed[1].name]


def fail(error: Exception) -> None:
    """Print an error and exit with status 1."""
    console.print(f"[red]Error:[/red] {error}")
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="semops")
@click.option("--verbose", "-v", is_flag=True, help="Log at DEBUG level")
def cli(verbose: bool):
    """
    SemOps CLI.

    Convert, query and validate RDF data with a shared prefix table.
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--to",
    "target_format",
    type=click.Choice(["turtle", "json-ld", "ntriples"]),
    default="json-ld",
    help="Output format",
)
@click.option("--frame", "-f", "root_types", multiple=True, help="Root type to frame on (repeatable)")
def convert(source: Path, target_format: str, root_types: tuple[str, ...]):
    """
    Convert a Turtle or JSON-LD file.

    The input format is taken from the file extension (.jsonld/.json is
    JSON-LD, anything else Turtle).

    Examples:

        semops convert profile.ttl --to json-ld --frame ff:Citizen

        semops convert profile.jsonld --to turtle
    """
    from semops.graph.conversion import GraphConverter

    async def _convert() -> str:
        converter = GraphConverter()
        text = source.read_text(encoding="utf-8")

        if source.suffix in (".jsonld", ".json"):
            graph = await converter.from_jsonld(json.loads(text))
        else:
            graph = await converter.from_turtle(text)

        if target_format == "turtle":
            return await converter.to_turtle(graph)
        if target_format == "ntriples":
            return await converter.to_ntriples(graph)
        document = await converter.to_jsonld(graph, root_types=list(root_types))
        return json.dumps(document, indent=2, ensure_ascii=False)

    try:
        click.echo(run_async(_convert()))
    except (SemOpsError, json.JSONDecodeError) as e:
        fail(e)


@cli.command()
@click.argument("query_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument(
    "sources",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
def query(query_file: Path, sources: tuple[Path, ...]):
    """
    Run a SPARQL query over one or more Turtle files.

    SELECT results are printed as a table, ASK as true/false and
    CONSTRUCT/DESCRIBE as Turtle.

    Examples:

        semops query rules.rq profile.ttl datafields.ttl
    """
    from semops.graph.conversion import GraphConverter
    from semops.query.aggregator import QueryAggregator

    sparql = query_file.read_text(encoding="utf-8")
    try:
        form = detect_query_form(sparql)
    except ParseError as e:
        fail(e)
        return

    async def _query():
        converter = GraphConverter()
        aggregator = QueryAggregator(registry=converter.registry)
        graphs = [
            await converter.from_turtle(path.read_text(encoding="utf-8"))
            for path in sources
        ]

        if form == "select":
            return await aggregator.select_bindings(sparql, graphs)
        if form == "ask":
            return await aggregator.ask_boolean(sparql, graphs)
        target = converter.new_store()
        await aggregator.construct_quads(sparql, graphs, target)
        return await converter.to_turtle(target)

    try:
        result = run_async(_query())
    except SemOpsError as e:
        fail(e)
        return

    if form == "select":
        if not result:
            console.print("[yellow]No results found.[/yellow]")
            return
        columns: list[str] = []
        for row in result:
            columns.extend(var for var in row if var not in columns)
        table = Table(title=query_file.name)
        for column in columns:
            table.add_column(column)
        for row in result:
            table.add_row(*(row.get(column, "") for column in columns))
        console.print(table)
        console.print(f"\nTotal: {len(result)} rows")
    elif form == "ask":
        click.echo("true" if result else "false")
    else:
        click.echo(result)


@cli.command()
@click.argument("shapes", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument(
    "data",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
def validate(shapes: Path, data: tuple[Path, ...]):
    """
    Validate Turtle data files against a SHACL shapes file.

    Exits with status 1 if the data does not conform.

    Examples:

        semops validate shapes.ttl profile.ttl
    """
    from semops.graph.conversion import GraphConverter
    from semops.validation.shacl import build_validator

    async def _validate():
        converter = GraphConverter()
        validator = build_validator(shapes.read_text(encoding="utf-8"), converter.registry)
        graph = await converter.store_from_turtles(
            path.read_text(encoding="utf-8") for path in data
        )
        return await validator.validate(graph)

    try:
        report = run_async(_validate())
    except SemOpsError as e:
        fail(e)
        return

    if report.conforms:
        console.print("[green]✓ Data conforms.[/green]")
        return

    table = Table(title="SHACL results")
    table.add_column("Severity")
    table.add_column("Focus node")
    table.add_column("Path")
    table.add_column("Constraint")
    table.add_column("Message")
    for r in report.results:
        table.add_row(
            r.severity.value,
            r.focus_node,
            r.result_path or "",
            r.source_constraint or "",
            r.message or "",
        )
    console.print(table)
    sys.exit(1)


@cli.command()
@click.argument("names", nargs=-1, required=True)
def expand(names: tuple[str, ...]):
    """
    Expand prefixed names into full IRIs.

    Examples:

        semops expand ff:Citizen sh:NodeShape
    """
    from semops.ontology.namespaces import default_registry

    registry = default_registry()
    for name in names:
        click.echo(registry.expand(name))


@cli.command()
@click.argument("iris", nargs=-1, required=True)
def compact(iris: tuple[str, ...]):
    """
    Compact full IRIs into prefixed names.

    Examples:

        semops compact https://foerderfunke.org/default#Citizen
    """
    from semops.ontology.namespaces import default_registry

    registry = default_registry()
    for iri in iris:
        click.echo(registry.compact(iri))


@cli.command()
def prefixes():
    """Show the registered prefix table."""
    from semops.ontology.namespaces import default_registry

    table = Table(title="Prefixes")
    table.add_column("Prefix", style="cyan")
    table.add_column("Namespace")
    for ns in default_registry():
        table.add_row(ns.prefix, ns.uri)
    console.print(table)


def main():
    """Console script entry point."""
    from semops.core.logging import configure_logging

    configure_logging()
    cli()

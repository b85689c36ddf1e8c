"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from semops.cli.commands import cli, detect_query_form
from semops.core.exceptions import ParseError

FF_URI = "https://foerderfunke.org/default#"

SHAPES = f"""
    @prefix ff: <{FF_URI}> .
    @prefix sh: <http://www.w3.org/ns/shacl#> .
    @prefix xsd: <http://www.w3.org/2001/XMLSchema#> .

    ff:CitizenShape a sh:NodeShape ;
        sh:targetClass ff:Citizen ;
        sh:property [ sh:path ff:age ; sh:minCount 1 ] .
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def profile_file(tmp_path, profile_turtle):
    path = tmp_path / "profile.ttl"
    path.write_text(profile_turtle, encoding="utf-8")
    return path


def write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


class TestDetectQueryForm:
    """Tests for query form detection."""

    @pytest.mark.parametrize("query,form", [
        ("SELECT ?s WHERE { ?s ?p ?o }", "select"),
        ("PREFIX ff: <https://example.org/ff#>\nask { ?s ?p ?o }", "ask"),
        ("# SELECT in a comment\nCONSTRUCT { ?s ?p ?o } WHERE { ?s ?p ?o }", "construct"),
        ("DESCRIBE <https://example.org/alice>", "describe"),
        ("PREFIX ask: <https://example.org/ask#>\nSELECT ?s WHERE { ?s ask:p ?o }", "select"),
        ("SELECT ?s WHERE { ?s a <https://example.org/ask> }", "select"),
        ("SELECT ?s WHERE { ?s a ff:Citizen }", "select"),
    ])
    def test_forms(self, query, form):
        assert detect_query_form(query) == form

    @pytest.mark.parametrize("text", [
        "not a query",
        "SELECT WHERE {",
        "INSERT DATA { <a:b> <a:c> <a:d> }",
    ])
    def test_non_queries_raise_parse_error(self, text):
        with pytest.raises(ParseError) as exc_info:
            detect_query_form(text)
        assert exc_info.value.format == "sparql"


class TestPrefixCommands:
    """Tests for expand, compact and prefixes."""

    def test_expand(self, runner):
        result = runner.invoke(cli, ["expand", "ff:Citizen", "sh:NodeShape"])

        assert result.exit_code == 0
        assert result.output.splitlines() == [
            FF_URI + "Citizen",
            "http://www.w3.org/ns/shacl#NodeShape",
        ]

    def test_compact(self, runner):
        result = runner.invoke(cli, ["compact", FF_URI + "Citizen", "https://other.example/x"])

        assert result.exit_code == 0
        assert result.output.splitlines() == ["ff:Citizen", "https://other.example/x"]

    def test_prefixes(self, runner):
        result = runner.invoke(cli, ["prefixes"])

        assert result.exit_code == 0
        for prefix in ("ff", "sh", "xsd", "rdf"):
            assert prefix in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "semops" in result.output


class TestConvertCommand:
    """Tests for the convert command."""

    def test_turtle_to_jsonld(self, runner, profile_file):
        result = runner.invoke(cli, ["convert", str(profile_file), "--to", "json-ld"])

        assert result.exit_code == 0
        document = json.loads(result.output)
        assert document["@context"]["ff"] == FF_URI

    def test_framed_jsonld(self, runner, profile_file):
        result = runner.invoke(cli, ["convert", str(profile_file), "-f", "ff:Citizen"])

        assert result.exit_code == 0
        document = json.loads(result.output)
        assert document["@id"] == "ff:alice"
        assert document["ff:hasChild"]["@id"] == "ff:bob"

    def test_jsonld_to_ntriples(self, runner, tmp_path):
        source = write(tmp_path, "alice.jsonld", json.dumps({
            "@context": {"ff": FF_URI},
            "@id": "ff:alice",
            "ff:name": "Alice",
        }))

        result = runner.invoke(cli, ["convert", str(source), "--to", "ntriples"])

        assert result.exit_code == 0
        assert f'<{FF_URI}alice> <{FF_URI}name> "Alice" .' in result.output

    def test_malformed_turtle_fails(self, runner, tmp_path):
        source = write(tmp_path, "broken.ttl", "ff:alice a ff:Citizen ;; [[")

        result = runner.invoke(cli, ["convert", str(source), "--to", "turtle"])

        assert result.exit_code == 1
        assert "Error" in result.output


class TestQueryCommand:
    """Tests for the query command."""

    def test_ask(self, runner, tmp_path, profile_file):
        query = write(tmp_path, "ask.rq", "ASK { ff:alice a ff:Citizen }")

        result = runner.invoke(cli, ["query", str(query), str(profile_file)])

        assert result.exit_code == 0
        assert result.output.strip() == "true"

    def test_select_table(self, runner, tmp_path, profile_file):
        query = write(
            tmp_path,
            "names.rq",
            "SELECT ?name ?age WHERE { ?p ff:name ?name ; ff:age ?age } ORDER BY ?name",
        )

        result = runner.invoke(cli, ["query", str(query), str(profile_file)])

        assert result.exit_code == 0
        assert "Alice" in result.output
        assert "Bob" in result.output
        assert "Total: 2 rows" in result.output

    def test_prefix_named_like_a_query_form(self, runner, tmp_path, profile_file):
        query = write(
            tmp_path,
            "prefixed.rq",
            f"PREFIX ask: <{FF_URI}>\nSELECT ?name WHERE {{ ask:alice ask:name ?name }}",
        )

        result = runner.invoke(cli, ["query", str(query), str(profile_file)])

        assert result.exit_code == 0
        assert "Alice" in result.output
        assert "Total: 1 rows" in result.output

    def test_select_without_results(self, runner, tmp_path, profile_file):
        query = write(tmp_path, "none.rq", "SELECT ?p WHERE { ?p a ff:Nobody }")

        result = runner.invoke(cli, ["query", str(query), str(profile_file)])

        assert result.exit_code == 0
        assert "No results found." in result.output

    def test_construct_prints_turtle(self, runner, tmp_path, profile_file):
        query = write(
            tmp_path,
            "parents.rq",
            "CONSTRUCT { ?c ff:hasParent ?p } WHERE { ?p ff:hasChild ?c }",
        )

        result = runner.invoke(cli, ["query", str(query), str(profile_file)])

        assert result.exit_code == 0
        assert "ff:hasParent" in result.output

    def test_not_a_query(self, runner, tmp_path, profile_file):
        query = write(tmp_path, "bad.rq", "nothing to see here")

        result = runner.invoke(cli, ["query", str(query), str(profile_file)])

        assert result.exit_code == 1
        assert "Error" in result.output


class TestValidateCommand:
    """Tests for the validate command."""

    def test_conforming_data(self, runner, tmp_path, profile_file):
        shapes = write(tmp_path, "shapes.ttl", SHAPES)

        result = runner.invoke(cli, ["validate", str(shapes), str(profile_file)])

        assert result.exit_code == 0
        assert "Data conforms" in result.output

    def test_violations_exit_with_status_1(self, runner, tmp_path):
        shapes = write(tmp_path, "shapes.ttl", SHAPES)
        data = write(tmp_path, "data.ttl", f"""
            @prefix ff: <{FF_URI}> .
            ff:alice a ff:Citizen .
        """)

        result = runner.invoke(cli, ["validate", str(shapes), str(data)])

        assert result.exit_code == 1
        assert "SHACL results" in result.output
        assert "Data conforms" not in result.output

    def test_malformed_shapes(self, runner, tmp_path, profile_file):
        shapes = write(tmp_path, "shapes.ttl", "this is not [[ turtle")

        result = runner.invoke(cli, ["validate", str(shapes), str(profile_file)])

        assert result.exit_code == 1
        assert "Error" in result.output

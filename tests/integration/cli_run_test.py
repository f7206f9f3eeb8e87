"""End-to-end tests for the CLI: schema file, query document and data file on disk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from typer.testing import CliRunner

from gql_engine.cli.app import app

runner = CliRunner()


def _write(tmp_path: Path, name: str, payload: Any) -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TestRunCommand:
    def test_success_prints_data(self, tmp_path: Path, schema_file: Path) -> None:
        query = _write(tmp_path, "query.json", [{"name": "foo", "alias": "bar"}])
        data = _write(tmp_path, "data.json", {"foo": 42})

        result = runner.invoke(app, ["run", str(schema_file), str(query), "--data", str(data)])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {"data": {"bar": 42}}

    def test_partial_success_exits_zero(self, tmp_path: Path, schema_file: Path) -> None:
        query = _write(tmp_path, "query.json", {"selectionSet": [{"name": "foo"}, {"name": "nope"}]})
        data = _write(tmp_path, "data.json", {"foo": 1})

        result = runner.invoke(app, ["run", str(schema_file), str(query), "--data", str(data)])

        assert result.exit_code == 0, result.output
        body = json.loads(result.stdout)
        assert body["data"] == {"foo": 1}
        assert body["errors"][0]["statusCode"] == 400

    def test_invalid_document_exits_two(self, tmp_path: Path, schema_file: Path) -> None:
        query = _write(tmp_path, "query.json", [{"name": "not valid"}])

        result = runner.invoke(app, ["run", str(schema_file), str(query)])

        assert result.exit_code == 2
        assert "data" not in json.loads(result.stdout)

    def test_arguments_flag_passes_arguments(self, tmp_path: Path) -> None:
        schema = _write(tmp_path, "schema.json", {"echo": "JSON"})
        query = _write(tmp_path, "query.json", [{"name": "echo", "arguments": [{"name": "x", "value": 1}]}])

        rejected = runner.invoke(app, ["run", str(schema), str(query)])
        assert json.loads(rejected.stdout)["errors"][0]["message"].startswith("Field 'echo' does not accept")

        accepted = runner.invoke(app, ["run", str(schema), str(query), "--arguments"])
        assert accepted.exit_code == 0, accepted.output
        assert json.loads(accepted.stdout) == {"data": {"echo": None}}

    def test_missing_query_file(self, tmp_path: Path, schema_file: Path) -> None:
        result = runner.invoke(app, ["run", str(schema_file), str(tmp_path / "absent.json")])
        assert result.exit_code == 1

    def test_undecodable_query_file(self, tmp_path: Path, schema_file: Path) -> None:
        query = tmp_path / "query.json"
        query.write_bytes(b'[{"name": "\xff"}]')
        result = runner.invoke(app, ["run", str(schema_file), str(query)])
        assert result.exit_code == 1

    def test_invalid_schema(self, tmp_path: Path) -> None:
        schema = _write(tmp_path, "schema.json", {"bad-name": "Int"})
        query = _write(tmp_path, "query.json", [])
        result = runner.invoke(app, ["run", str(schema), str(query)])
        assert result.exit_code == 1


class TestSchemaCommand:
    def test_renders_tree(self, schema_file: Path) -> None:
        result = runner.invoke(app, ["schema", str(schema_file)])
        assert result.exit_code == 0, result.output
        assert "Query" in result.output
        assert "User" in result.output
        assert "greeting" in result.output

    def test_missing_schema_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["schema", str(tmp_path / "absent.json")])
        assert result.exit_code == 1

"""
Tests for the schema-synth command line interface.
"""
import json
import textwrap

import pytest  # type: ignore[import-not-found]
from click.testing import CliRunner

from schema_synth import __version__
from schema_synth.__main__ import cli

SCHEMAS_MODULE = textwrap.dedent(
    """
    from schema_synth.models.nodes import CustomNode, NumberNode, ObjectNode, StringNode

    pet = ObjectNode(shape={
        "name": StringNode(),
        "age": NumberNode(integer=True).default(0),
    }).openapi(ref="Pet")

    listing = ObjectNode(shape={"pets": pet.array()})

    broken = ObjectNode(shape={"price": CustomNode(type_name="Money")})

    not_a_node = 42
    """
)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()

@pytest.fixture
def schemas_module(tmp_path, monkeypatch) -> str:
    (tmp_path / "cli_test_schemas.py").write_text(SCHEMAS_MODULE)
    monkeypatch.syspath_prepend(str(tmp_path))
    return "cli_test_schemas"


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["version"])

    assert result.exit_code == 0
    assert f"schema-synth v{__version__}" in result.output


def test_config_show(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--log-level", "ERROR", "config-show"])

    assert result.exit_code == 0
    shown = json.loads(result.stdout)
    assert shown["document"]["openapi_version"] == "3.1.0"
    assert shown["logging"]["level"] == "ERROR"


def test_config_show_from_file(runner: CliRunner, tmp_path) -> None:
    config_file = tmp_path / "synth.json"
    config_file.write_text(json.dumps({"document": {"union_one_of": True}}))

    result = runner.invoke(cli, ["-c", str(config_file), "-l", "ERROR", "config-show"])

    assert result.exit_code == 0
    assert json.loads(result.stdout)["document"]["union_one_of"] is True


def test_generate_output_shape(runner: CliRunner, schemas_module: str) -> None:
    result = runner.invoke(cli, ["-l", "ERROR", "generate", f"{schemas_module}:listing"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["schema"] == {
        "type": "object",
        "properties": {"pets": {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}}},
        "required": ["pets"],
    }
    assert payload["components"]["schemas"]["Pet"]["required"] == ["name", "age"]
    assert [effect["creation_type"] for effect in payload["effects"]] == ["output"]


def test_generate_input_shape_with_ref_path(runner: CliRunner, schemas_module: str) -> None:
    result = runner.invoke(
        cli,
        ["-l", "ERROR", "generate", f"{schemas_module}:pet", "--mode", "input", "--ref-path", "#/definitions/"],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["schema"] == {"$ref": "#/definitions/Pet"}
    assert payload["components"]["schemas"]["Pet"]["required"] == ["name"]
    assert [effect["creation_type"] for effect in payload["effects"]] == ["input"]
    assert payload["effects"][0]["path"] == ["property: age"]


def test_generate_to_file(runner: CliRunner, schemas_module: str, tmp_path) -> None:
    output_file = tmp_path / "out.json"

    result = runner.invoke(cli, ["-l", "ERROR", "generate", f"{schemas_module}:pet", "-o", str(output_file)])

    assert result.exit_code == 0, result.output
    assert "Schema written to" in result.stdout
    assert json.loads(output_file.read_text())["schema"] == {"$ref": "#/components/schemas/Pet"}


def test_generate_reports_synthesis_errors(runner: CliRunner, schemas_module: str) -> None:
    result = runner.invoke(cli, ["-l", "ERROR", "generate", f"{schemas_module}:broken"])

    assert result.exit_code == 1
    assert "Schema generation failed" in result.output
    assert "property: price" in result.output


@pytest.mark.parametrize("target", [
    "no_colon",
    "missing_module_for_cli_tests:node",
    "{module}:does_not_exist",
    "{module}:not_a_node",
])
def test_generate_rejects_bad_targets(runner: CliRunner, schemas_module: str, target: str) -> None:
    result = runner.invoke(cli, ["-l", "ERROR", "generate", target.format(module=schemas_module)])

    assert result.exit_code != 0
    assert "TARGET" in result.output

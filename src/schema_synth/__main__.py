"""CLI entry point for schema-synth."""

import importlib
import json
import sys
from pathlib import Path
from typing import Optional

import click

from .config import Config
from .exceptions import SchemaSynthError
from .models.common import CreationType
from .models.nodes import SchemaNode
from .schema_gen import SchemaGeneratorService
from .utils.logging import setup_logging


def load_node(target: str) -> SchemaNode:
    """Import ``package.module:attribute`` and return the schema node it names."""
    module_name, _, attribute = target.partition(":")
    if not module_name or not attribute:
        raise click.BadParameter("expected MODULE:ATTRIBUTE", param_hint="TARGET")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"cannot import {module_name!r}: {e}", param_hint="TARGET") from e

    node = module
    for part in attribute.split("."):
        node = getattr(node, part, None)
        if node is None:
            raise click.BadParameter(f"{target!r} does not exist", param_hint="TARGET")
    if not isinstance(node, SchemaNode):
        raise click.BadParameter(f"{target!r} is not a schema node", param_hint="TARGET")
    return node


@click.group()
@click.option(
    "--config-file", "-c",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    help="Path to a JSON configuration file.",
    envvar="SCHEMA_SYNTH_CONFIG_FILE"
)
@click.option(
    "--log-level", "-l",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Override the logging level (e.g., DEBUG, INFO)."
)
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"], case_sensitive=False),
    default=None,
    help="Override logging format."
)
@click.pass_context
def cli(ctx: click.Context, config_file: Optional[str], log_level: Optional[str], log_format: Optional[str]) -> None:
    """schema-synth - Generates OpenAPI schemas from schema node trees."""
    try:
        if config_file:
            cfg = Config.from_file(Path(config_file))
        else:
            cfg = Config()
    except Exception as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(1)

    if log_level:
        cfg.logging.level = log_level.upper()
    if log_format:
        cfg.logging.format = log_format.lower()

    setup_logging(cfg.logging)
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


@cli.command()
@click.argument("target")
@click.option(
    "--mode", "-m",
    type=click.Choice([creation_type.value for creation_type in CreationType], case_sensitive=False),
    default=None,
    help="Generate the input (request) or output (response) shape. Defaults to the configured creation type."
)
@click.option(
    "--ref-path",
    default=None,
    help="Prefix for component references (default '#/components/schemas/')."
)
@click.option(
    "--output-file", "-o",
    type=click.Path(dir_okay=False, writable=True, resolve_path=True),
    help="Write the generated JSON here instead of stdout."
)
@click.pass_context
def generate(ctx: click.Context, target: str, mode: Optional[str], ref_path: Optional[str], output_file: Optional[str]) -> None:
    """Generates the schema of TARGET (MODULE:ATTRIBUTE) and its components."""
    config: Config = ctx.obj["config"]
    if ref_path:
        config.document.component_ref_path = ref_path

    node = load_node(target)
    service = SchemaGeneratorService(app_config=config)
    try:
        result = service.generate(node, CreationType(mode.lower()) if mode else None)
        components = service.create_components()
    except SchemaSynthError as e:
        click.echo(f"Schema generation failed: {e}", err=True)
        sys.exit(1)

    payload = {
        "schema": result.schema_object,
        "components": components,
        "effects": [effect.describe() for effect in result.effects],
    }
    rendered = json.dumps(payload, indent=2, default=str)
    if output_file:
        try:
            with open(output_file, "w") as f:
                f.write(rendered)
            click.echo(f"Schema written to {output_file}")
        except IOError as e:
            click.echo(f"Error writing output file {output_file}: {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered)


@cli.command()
@click.pass_context
def version(ctx: click.Context) -> None:
    """Show version information."""
    from . import __version__
    click.echo(f"schema-synth v{__version__}")


@cli.command()
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show current configuration."""
    config: Config = ctx.obj["config"]
    click.echo(json.dumps(config.model_dump(mode="json"), indent=2))


if __name__ == "__main__":
    cli()

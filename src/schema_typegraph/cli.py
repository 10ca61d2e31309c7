"""Command line interface entry point."""

from __future__ import annotations

import functools
import json
import logging
import sys
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Any, cast

import click
import yaml

from schema_typegraph.class_model import AttributeField, ClassDescriptor, RelationField
from schema_typegraph.configuration import (
    SCHEMA_FORMATS,
    ConfigurationError,
    load_configuration,
    load_schema_source,
)
from schema_typegraph.model_errors import ModelError
from schema_typegraph.schema_sources import load_configured_model, load_model
from schema_typegraph.type_registry import Model


class CliError(Exception):
    """Custom CLI error."""


def _schema_options(command: Callable[..., None]) -> Callable[..., None]:
    @click.option(
        "--config",
        "config_path",
        required=False,
        type=click.Path(path_type=str),
        help="Path to YAML/JSON configuration naming the schema source",
    )
    @click.option(
        "--schema",
        "schema_path",
        required=False,
        type=click.Path(path_type=str),
        help="Path to a schema file (.xml, .yaml, .yml or .json)",
    )
    @click.option(
        "--format",
        "schema_format",
        required=False,
        type=click.Choice(SCHEMA_FORMATS, case_sensitive=False),
        help="Schema format when it cannot be inferred from the --schema suffix",
    )
    @functools.wraps(command)
    def wrapper(
        config_path: str | None, schema_path: str | None, schema_format: str | None, **kwargs: Any
    ) -> None:
        command(_load_model(config_path, schema_path, schema_format), **kwargs)

    return wrapper


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="schema-typegraph")
@click.option("--verbose", is_flag=True, default=False, help="Log model building to stderr.")
def cli(verbose: bool) -> None:
    """Inspect schema models and build typed objects from them."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)


@cli.command(name="classes")
@_schema_options
def list_classes(model: Model) -> None:
    """List the classes declared by the schema."""
    for name in sorted(descriptor.name for descriptor in model.all_classes()):
        click.echo(name)


@cli.command(name="describe")
@click.argument("class_name")
@_schema_options
def describe_class(model: Model, class_name: str) -> None:
    """Show parents, ancestors and fields of one class."""
    try:
        descriptor = model.get_class(class_name)
    except ModelError as exc:
        raise CliError(str(exc)) from exc

    suffix = " (interface)" if descriptor.is_interface else ""
    click.echo(f"Class: {descriptor.display_name()}{suffix}")
    click.echo(f"Parents: {_names(descriptor.parents)}")
    click.echo(f"Ancestors: {_names(descriptor.ancestors[1:])}")
    click.echo("Fields:")
    for field in descriptor.fields():
        if field.declaring_class_name == descriptor.name:
            origin = "own"
        else:
            origin = f"inherited from {field.declaring_class_name}"
        type_name = (
            field.value_type.value
            if isinstance(field, AttributeField)
            else cast(RelationField, field).referenced_class_name
        )
        click.echo(f"  {field.name}: {field.kind.value} {type_name} [{origin}]")


@cli.command(name="construct")
@click.argument("class_name")
@click.option(
    "--data",
    "data_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to a YAML/JSON file holding the object data",
)
@_schema_options
def construct_object(model: Model, class_name: str, data_path: str) -> None:
    """Build a typed object from a data file and print it as JSON."""
    try:
        data = yaml.safe_load(Path(data_path).read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise CliError(f"Failed to read data file: {exc}") from exc
    try:
        instance = model.construct(class_name, data)
    except ModelError as exc:
        raise CliError(str(exc)) from exc
    click.echo(json.dumps(instance.as_dict(), indent=2, default=_json_default))


def _load_model(
    config_path: str | None, schema_path: str | None, schema_format: str | None
) -> Model:
    if bool(config_path) == bool(schema_path):
        raise CliError("Provide exactly one of --config or --schema.")
    try:
        if config_path:
            return load_configured_model(load_configuration(config_path))
        assert schema_path is not None
        return load_model(load_schema_source(schema_path, schema_format))
    except (ConfigurationError, ModelError, OSError) as exc:
        raise CliError(str(exc)) from exc


def _names(descriptors: tuple[ClassDescriptor, ...]) -> str:
    return ", ".join(descriptor.display_name() for descriptor in descriptors) or "-"


def _json_default(value: object) -> str:
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

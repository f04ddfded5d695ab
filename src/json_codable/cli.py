"""Command-line interface for JSON Codable."""

import importlib
import json
import logging
import sys
from pathlib import Path

import click

from . import __version__
from .adapter import CodableAdapter
from .error_handler import ErrorHandler
from .types import ProcessingError


def load_schema(reference: str) -> type:
    """
    Import a schema class from a ``package.module:ClassName`` reference.

    Raises:
        click.BadParameter: If the reference is malformed or cannot be imported
    """
    module_name, _, attribute = reference.partition(":")
    if not module_name or not attribute:
        raise click.BadParameter(f"expected 'module:ClassName', got {reference!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"cannot import {module_name!r}: {e}") from e
    schema = module
    for part in attribute.split("."):
        try:
            schema = getattr(schema, part)
        except AttributeError as e:
            raise click.BadParameter(f"{module_name!r} has no attribute {attribute!r}") from e
    return schema


def _read_input(input_file: Path, handler: ErrorHandler) -> str:
    text = input_file.read_text(encoding='utf-8')
    validation = handler.validate_input(text)
    for warning in validation.warnings:
        click.echo(f"⚠️  {warning}", err=True)
    if not validation.is_valid:
        error = validation.errors[0]
        raise ProcessingError(f"{error.message} ({error.location})", error.type)
    return text


def _fail(handler: ErrorHandler, error: Exception) -> None:
    response = handler.describe(error)
    click.echo(f"❌ Error: {error}", err=True)
    click.echo(f"   • {response.suggested_action}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option('--max-depth', default=32, show_default=True, type=click.IntRange(min=0), help='Maximum nested schema depth')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.pass_context
def main(ctx: click.Context, max_depth: int, verbose: bool):
    """JSON Codable - decode JSON documents into typed schemas."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = {
        "adapter": CodableAdapter(max_depth=max_depth),
        "handler": ErrorHandler(max_depth=max_depth),
    }


@main.command()
@click.argument('schema')
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--list', 'as_list', is_flag=True, help='Decode a JSON array of objects')
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path), help='Output JSON file path')
@click.pass_context
def decode(ctx: click.Context, schema: str, input_file: Path, as_list: bool, output: Path):
    """Decode INPUT_FILE with SCHEMA and print the re-encoded JSON."""
    adapter: CodableAdapter = ctx.obj["adapter"]
    handler: ErrorHandler = ctx.obj["handler"]
    schema_class = load_schema(schema)

    try:
        text = _read_input(input_file, handler)
        if as_list:
            instances = adapter.decode_list(schema_class, text)
            encoded = adapter.encode_list(instances)
            logging.getLogger(__name__).info(f"Decoded {len(instances)} {schema_class.__name__} objects")
        else:
            encoded = adapter.encode(adapter.decode(schema_class, text))
    except Exception as e:
        _fail(handler, e)
        return

    if output:
        output.write_bytes(encoded)
        click.echo(f"✅ Successfully wrote JSON to {output}")
    else:
        click.echo(encoded.decode('utf-8'))


@main.command()
@click.argument('schema')
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def alter(ctx: click.Context, schema: str, input_file: Path):
    """Print INPUT_FILE rewritten by SCHEMA's transformers, before structural decoding."""
    adapter: CodableAdapter = ctx.obj["adapter"]
    handler: ErrorHandler = ctx.obj["handler"]
    schema_class = load_schema(schema)

    try:
        value = adapter.parser.parse(_read_input(input_file, handler))
        if isinstance(value, list):
            altered = [adapter.alter(schema_class, item) for item in value]
        else:
            altered = adapter.alter(schema_class, value)
    except Exception as e:
        _fail(handler, e)
        return

    click.echo(json.dumps(altered, indent=2, ensure_ascii=False))


if __name__ == '__main__':
    main()

"""Command-line interface for the JSON Builder."""

import json
import logging
import sys
import click
from pathlib import Path
from typing import Optional
from .error_handler import ErrorHandler
from .json_builder import JSONBuilder
from .shape_loader import ShapeLoader
from .types import BuilderError, EncodeResult
from . import __version__


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr
        )


def _report(error: BuilderError) -> None:
    response = ErrorHandler().handle_builder_error(error)
    click.echo(f"❌ Error: {error}", err=True)
    if response.location:
        click.echo(f"   • at {response.location}", err=True)
    click.echo(f"   • {response.suggested_action}", err=True)


@click.group()
@click.version_option(version=__version__)
def main():
    """JSON Builder - Encode data as JSON, directed by a shape schema."""
    pass


@main.command()
@click.argument('schema_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('params_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path),
              help='Output JSON file path (default: stdout)')
@click.option('--ascii', 'ensure_ascii', is_flag=True, help='Escape non-ASCII characters')
@click.option('--profile', is_flag=True, help='Print performance metrics to stderr')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def encode(schema_file: Path, params_file: Path, output: Optional[Path],
           ensure_ascii: bool, profile: bool, verbose: bool):
    """Encode PARAMS_FILE as JSON shaped by SCHEMA_FILE."""
    _configure_logging(verbose)

    try:
        shape = ShapeLoader().load_file(schema_file)
        params = json.loads(params_file.read_text(encoding='utf-8'))
    except BuilderError as e:
        _report(e)
        sys.exit(1)
    except json.JSONDecodeError as e:
        click.echo(f"❌ Error: params file is not valid JSON: {e.msg} at line {e.lineno}", err=True)
        sys.exit(1)

    builder = JSONBuilder(ensure_ascii=ensure_ascii, enable_profiling=profile)
    try:
        json_string = builder.to_json(shape, params)
    except BuilderError as e:
        _report(e)
        sys.exit(1)

    result = EncodeResult(success=True, json_string=json_string,
                          output_size=len(json_string.encode('utf-8')))

    if output:
        output.write_text(result.json_string, encoding='utf-8')
        click.echo(f"✅ Wrote {result.output_size} bytes to {output}", err=True)
    else:
        click.echo(result.json_string)

    if builder.profiler is not None:
        click.echo(builder.profiler.export_metrics("summary"), err=True)


@main.command()
@click.argument('schema_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def inspect(schema_file: Path, verbose: bool):
    """Build the shape in SCHEMA_FILE and print its tree."""
    _configure_logging(verbose)

    try:
        shape = ShapeLoader().load_file(schema_file)
    except BuilderError as e:
        _report(e)
        sys.exit(1)

    click.echo(shape.describe())


if __name__ == '__main__':
    main()

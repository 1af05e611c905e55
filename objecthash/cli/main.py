"""
objecthash Command Line Interface

Provides commands for hashing JSON documents and checking golden fixture files.
"""

import logging
import sys
from typing import Optional

import click

from objecthash.core.config import ALLOW_NON_FINITE_ENV, DEFAULT_MAX_DEPTH, MAX_DEPTH_ENV, HasherConfig
from objecthash.core.errors import GoldenFixtureError, ObjectHashError, ParseError
from objecthash.core.hasher import ObjectHasher
from objecthash.golden import run_golden_file

# Configure click
CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])


def get_hasher(ctx: click.Context) -> ObjectHasher:
    """Return the hasher configured by the global options."""
    return ctx.find_object(ObjectHasher)


def error_message(error: ObjectHashError) -> str:
    """Format an error for stderr, naming the offending character of a parse error."""
    if isinstance(error, ParseError) and error.unexpected:
        return f"Error: {error} (unexpected {error.unexpected!r})"
    return f"Error: {error}"


def echo_digest(hasher: ObjectHasher, text: str) -> None:
    """Hash JSON text and print the hex digest, exiting 1 on failure."""
    try:
        digest = hasher.hash_common_json(text)
    except ObjectHashError as e:
        click.echo(error_message(e), err=True)
        sys.exit(1)
    click.echo(digest.hex())


# Command groups
@click.group(context_settings=CONTEXT_SETTINGS)
@click.option('--max-depth', type=click.IntRange(min=1), default=DEFAULT_MAX_DEPTH,
              envvar=MAX_DEPTH_ENV, show_default=True,
              help='Deepest nesting level accepted')
@click.option('--allow-non-finite/--strict-numbers', default=True,
              envvar=ALLOW_NON_FINITE_ENV,
              help='Accept or reject NaN and Infinity literals')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx: click.Context, max_depth: int, allow_non_finite: bool, verbose: bool):
    """objecthash - structure-sensitive digests of JSON values."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s')
    config = HasherConfig(max_depth=max_depth, allow_non_finite=allow_non_finite)
    ctx.obj = ObjectHasher(config)


@cli.command('json')
@click.argument('text', required=False)
@click.pass_context
def json_command(ctx: click.Context, text: Optional[str]):
    """Hash JSON TEXT, or JSON read from stdin."""
    if text is None:
        text = click.get_text_stream('stdin').read()
    echo_digest(get_hasher(ctx), text)


@cli.command('file')
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def file_command(ctx: click.Context, path: str):
    """Hash the JSON document stored at PATH."""
    with open(path, 'rb') as f:
        data = f.read()
    try:
        digest = get_hasher(ctx).hash_common_json(data)
    except ObjectHashError as e:
        click.echo(error_message(e), err=True)
        sys.exit(1)
    click.echo(digest.hex())


@cli.command('golden')
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def golden_command(ctx: click.Context, path: str):
    """Check every case in the golden fixture file at PATH."""
    try:
        results = run_golden_file(path, get_hasher(ctx))
    except GoldenFixtureError as e:
        click.echo(f"Error loading fixture: {e}", err=True)
        sys.exit(1)

    failures = [result for result in results if not result.ok]
    for result in failures:
        line = result.case.line_number
        if result.error:
            click.echo(f"line {line}: {result.error}", err=True)
        else:
            click.echo(
                f"line {line}: got {result.actual_hex} expected {result.case.expected_hex}",
                err=True,
            )

    click.echo(f"{len(results) - len(failures)}/{len(results)} cases passed")
    sys.exit(1 if failures else 0)


# Main entry point
if __name__ == '__main__':
    cli()

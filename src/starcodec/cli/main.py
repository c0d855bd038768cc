"""
Main CLI entry point for star-codec using Click.

Usage:
    star-codec demo [--shape keyed|sequence|wrapped|all]
    star-codec encode --shape SHAPE [--indent N] [--output DIR]
    star-codec decode FILE --shape SHAPE [--keys K1,K2,...] [--field NAME]
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import click

from starcodec import __version__
from starcodec.catalog import BRIGHTEST_STAR_KEYS, catalog_for
from starcodec.codec import (
    CodecError,
    CodecOptions,
    DecodeError,
    ShapeDescriptor,
    StructuredRecordCodec,
)
from starcodec.enums import Shape
from starcodec.models import Star, StarCatalog
from starcodec.writers import JSONWriter

SHAPE_CHOICES = [shape.value for shape in Shape]


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


class Config:
    """Shared configuration for CLI commands."""

    def __init__(self) -> None:
        self.verbose = False
        self.debug = False


pass_config = click.make_pass_decorator(Config, ensure=True)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.version_option(version=__version__, prog_name="star-codec")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool) -> None:
    """Encode and decode star catalogs as JSON."""
    ctx.ensure_object(Config)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug
    setup_logging(verbose=verbose, debug=debug)


def _build_descriptor(shape: str, keys: Optional[str], field: Optional[str]) -> ShapeDescriptor:
    """Build a shape descriptor from command-line options."""
    kind = Shape(shape)
    if field and kind != Shape.WRAPPED:
        raise click.BadParameter("--field is only valid with --shape wrapped")
    try:
        if kind == Shape.KEYED:
            key_list = [k.strip() for k in keys.split(",")] if keys else list(BRIGHTEST_STAR_KEYS)
            return ShapeDescriptor.keyed(key_list)
        if keys:
            raise click.BadParameter("--keys is only valid with --shape keyed")
        if kind == Shape.WRAPPED:
            return ShapeDescriptor.wrapped(field) if field else ShapeDescriptor.wrapped()
        return ShapeDescriptor.sequence()
    except ValueError as e:
        raise click.BadParameter(str(e))


def _stars_in(collection: Any) -> list[Star]:
    """Flatten any collection shape into its stars, in output order."""
    if isinstance(collection, StarCatalog):
        return list(collection.stars)
    if isinstance(collection, dict):
        return list(collection.values())
    return list(collection)


def _print_collection(collection: Any) -> None:
    """Print a collection one star per line, with slot keys for keyed shapes."""
    if isinstance(collection, dict):
        for key, star in collection.items():
            click.echo(f"  {key}: {star}")
        return
    for star in _stars_in(collection):
        click.echo(f"  {star}")


def _print_star(star: Star) -> None:
    """Print one star's details."""
    click.echo()
    click.echo(f"\tName: {star.name}")
    click.echo(f"\tDistance: {star.distance:.2f} ly")
    click.echo(f"\tConstellation: {star.constellation}")


@cli.command()
@click.option(
    "--shape",
    "-s",
    type=click.Choice(SHAPE_CHOICES + ["all"]),
    default="all",
    show_default=True,
    help="Collection shape to demonstrate",
)
@pass_config
def demo(config: Config, shape: str) -> None:
    """Round-trip the bright-star catalog through JSON.

    Encodes the catalog, decodes the text back, and prints each star.

    Example:
        star-codec demo --shape keyed
    """
    logger = logging.getLogger("demo")
    codec = StructuredRecordCodec()
    shapes = list(Shape) if shape == "all" else [Shape(shape)]

    for kind in shapes:
        logger.info(f"Running {kind.value} round trip")
        collection, descriptor = catalog_for(kind)

        try:
            text = codec.encode(collection, descriptor)
            decoded = codec.decode(text, descriptor)
        except CodecError as e:
            raise click.ClickException(str(e))

        click.echo(click.style(f"* Initial {kind.value} collection:", fg="cyan"))
        _print_collection(collection)

        click.echo(click.style(f"\n* {kind.value} collection marshalled to JSON:", fg="cyan"))
        click.echo(text)

        click.echo(click.style(f"\n* JSON unmarshalled back to {kind.value} collection:", fg="cyan"))
        _print_collection(decoded)

        click.echo(click.style("\n* Stars in the decoded collection:", fg="cyan"))
        for star in _stars_in(decoded):
            _print_star(star)
        click.echo()


@cli.command()
@click.option(
    "--shape",
    "-s",
    type=click.Choice(SHAPE_CHOICES),
    required=True,
    help="Collection shape to encode",
)
@click.option("--indent", type=int, default=None, help="Pretty-print with this indent")
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    help="Output directory (prints to stdout when omitted)",
)
@pass_config
def encode(config: Config, shape: str, indent: Optional[int], output: Optional[str]) -> None:
    """Encode the bright-star catalog as JSON.

    Example:
        star-codec encode --shape wrapped --indent 2 --output ./out/
    """
    logger = logging.getLogger("encode")
    codec = StructuredRecordCodec(CodecOptions(indent=indent))
    collection, descriptor = catalog_for(shape)

    if output:
        logger.info(f"Writing to: {output}")
        try:
            path = JSONWriter(output, codec=codec).write(collection, descriptor)
        except CodecError as e:
            raise click.ClickException(f"Error encoding catalog: {e}")
        except OSError as e:
            raise click.ClickException(f"Error writing output: {e}")
        click.echo(click.style("Output file:", fg="green"))
        click.echo(f"  {path}")
        return

    try:
        click.echo(codec.encode(collection, descriptor))
    except CodecError as e:
        raise click.ClickException(f"Error encoding catalog: {e}")


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--shape",
    "-s",
    type=click.Choice(SHAPE_CHOICES),
    required=True,
    help="Collection shape the file holds",
)
@click.option("--keys", "-k", help="Comma-separated slot keys (keyed shape only)")
@click.option("--field", "-f", help="Wrapper field name (wrapped shape only)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@pass_config
def decode(
    config: Config,
    file: str,
    shape: str,
    keys: Optional[str],
    field: Optional[str],
    as_json: bool,
) -> None:
    """Decode a JSON star collection and print its stars.

    The keyed shape defaults to the bright-star catalog keys.

    Example:
        star-codec decode keyed.json --shape keyed
    """
    logger = logging.getLogger("decode")
    descriptor = _build_descriptor(shape, keys, field)

    logger.info(f"Decoding {file} as {descriptor.kind.value}")
    codec = StructuredRecordCodec()
    try:
        collection = codec.decode(Path(file).read_bytes(), descriptor)
    except DecodeError as e:
        lines = [f"Error decoding {file}: {e.message}"]
        lines.extend(f"  ✗ {issue}" for issue in e.issues)
        raise click.ClickException("\n".join(lines))

    stars = _stars_in(collection)
    if as_json:
        output = {
            "shape": descriptor.kind.value,
            "count": len(stars),
            "stars": [star.model_dump() for star in stars],
        }
        click.echo(json.dumps(output, indent=2, ensure_ascii=False))
    else:
        click.echo(f"Decoded {len(stars)} star(s) from {file}:")
        for star in stars:
            _print_star(star)
        click.echo()


def app(args: Optional[list[str]] = None) -> int:
    """
    Main application entry point (for testing).

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success)
    """
    try:
        cli(args, standalone_mode=False)
        return 0
    except click.ClickException as e:
        e.show()
        return 1
    except click.exceptions.Abort:
        return 1
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1


def main() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()

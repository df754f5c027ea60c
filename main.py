#!/usr/bin/env python3
"""
Main CLI for the Font Resolver
==============================

This CLI lists Google Fonts families and resolves a family into font faces.
"""

import json
import logging
import sys
from pathlib import Path

import click

# Setup logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

try:
    from src.fontresolver.core.config import AppConfig
    from src.fontresolver.core.exceptions import FontResolverError
    from src.fontresolver.core.models import ResolveFontOptions
    from src.fontresolver.fetch import FontFetcher
    from src.fontresolver.providers.google import GoogleFontsProvider, create_google_provider
    from src.fontresolver.storage import FontStorage
except ImportError as e:
    logger.exception(f"Import failed: {e}")
    logger.exception(
        "Make sure you have all dependencies installed and the project is properly set up"
    )
    sys.exit(1)


def build_provider(config_path: Path | None) -> GoogleFontsProvider:
    """Create an initialized provider from environment and optional YAML config."""
    config = AppConfig.from_env_and_yaml(yaml_path=config_path)
    ctx = click.get_current_context(silent=True)
    if not (ctx and ctx.find_root().obj and ctx.find_root().obj.get("verbose")):
        logging.getLogger().setLevel(config.log_level)
    return create_google_provider(
        config=config.google,
        storage=FontStorage(config.storage),
        fetcher=FontFetcher(config.fetch),
    )


config_option = click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration YAML file (optional)",
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx, verbose):
    """Web font resolver CLI."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command(name="list-fonts")
@config_option
@click.option("--match", "-m", type=str, help="Only list families containing this text")
def list_fonts(config, match):
    """List the families known to Google Fonts."""
    provider = None
    try:
        provider = build_provider(config)
        for family in provider.list_fonts():
            if match and match.lower() not in family.lower():
                continue
            click.echo(family)
    except FontResolverError as e:
        logger.exception(f"Listing fonts failed: {e}")
        sys.exit(1)
    finally:
        if provider is not None:
            provider.close()


@cli.command(name="resolve")
@click.argument("family")
@config_option
@click.option(
    "--weight",
    "-w",
    "weights",
    multiple=True,
    default=("400",),
    show_default=True,
    help='Weight to request; repeatable. Use "100 900" for a variable range',
)
@click.option(
    "--style",
    "-s",
    "styles",
    multiple=True,
    type=click.Choice(["normal", "italic", "oblique"]),
    default=("normal",),
    show_default=True,
    help="Style to request; repeatable",
)
@click.option(
    "--subset",
    "subsets",
    multiple=True,
    default=("latin",),
    show_default=True,
    help="Subset to keep; repeatable",
)
@click.option("--json", "as_json", is_flag=True, help="Print faces as JSON")
def resolve(family, config, weights, styles, subsets, as_json):
    """Resolve FAMILY into prioritized font faces."""
    provider = None
    try:
        provider = build_provider(config)
        options = ResolveFontOptions(
            weights=list(weights), styles=list(styles), subsets=list(subsets)
        )
        result = provider.resolve_font(family, options)
    except FontResolverError as e:
        logger.exception(f"Resolving {family} failed: {e}")
        sys.exit(1)
    finally:
        if provider is not None:
            provider.close()

    if result is None:
        click.echo(f"Unknown family: {family}", err=True)
        sys.exit(2)

    if as_json:
        click.echo(
            json.dumps(
                [face.model_dump(mode="json", exclude_none=True) for face in result.fonts],
                indent=2,
            )
        )
        return

    if not result.fonts:
        click.echo("No font faces matched the requested options")
        return

    for face in result.fonts:
        urls = ", ".join(getattr(source, "url", None) or source.name for source in face.src)
        click.echo(f"[{face.priority}] {face.style or 'normal'} {face.weight}: {urls}")


if __name__ == "__main__":
    cli()

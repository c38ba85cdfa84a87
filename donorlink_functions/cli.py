import asyncio
import json
import logging
import sys
from collections.abc import Awaitable
from typing import Any

import click

from .config import StaticApiKeySource, get_places_config
from .data_models.enums import LocationType
from .exceptions import APIKeyValidationError, CallableError, InvalidAPIKeyError
from .handlers import PlaceDetailHandler, PlaceSearchHandler
from .utils import validate_api_key
from .version import __version__


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """DonorLink Functions CLI - run the place handlers against the live API."""
    logging.basicConfig(level=logging.INFO)


def _run_handler(call: Awaitable[dict[str, Any]]) -> None:
    try:
        result = asyncio.run(call)
    except CallableError as e:
        click.echo(f"{e.code.value}: {e.message}", err=True)
        sys.exit(1)
    click.echo(json.dumps(result, indent=2))


@cli.command()
@click.argument("text")
@click.option(
    "--location-type",
    type=click.Choice([member.value for member in LocationType]),
    default=None,
    help="Restrict results to one kind of place.",
)
@click.option("--region-code", default=None, help="Region code, e.g. US.")
@click.option("--city-context", default=None, help="City appended to the query.")
def search(
    text: str,
    location_type: str | None,
    region_code: str | None,
    city_context: str | None,
) -> None:
    """Search places and print suggestions with coordinates."""
    config = get_places_config()
    handler = PlaceSearchHandler(StaticApiKeySource(config.api_key), config)
    payload = {
        "input": text,
        "locationType": location_type,
        "regionCode": region_code,
        "cityContext": city_context,
    }
    _run_handler(handler.handle(payload))


@cli.command()
@click.argument("place_id")
def place(place_id: str) -> None:
    """Print coordinates and name for PLACE_ID."""
    config = get_places_config()
    handler = PlaceDetailHandler(StaticApiKeySource(config.api_key), config)
    _run_handler(handler.handle({"placeId": place_id}))


@cli.command("validate-key")
@click.pass_context
def validate_key(ctx: click.Context) -> None:
    """Check that the configured GOOGLE_PLACES_API_KEY is accepted."""
    config = get_places_config()
    if not config.api_key:
        click.echo("GOOGLE_PLACES_API_KEY is not set.", err=True)
        ctx.exit(1)
    try:
        asyncio.run(validate_api_key(config.api_key, config.base_url))
    except (InvalidAPIKeyError, APIKeyValidationError) as e:
        click.echo(str(e), err=True)
        click.echo(
            "Create a key with the Places API (New) enabled in the Google Cloud "
            "console.",
            err=True,
        )
        sys.stderr.flush()
        ctx.exit(1)
    click.echo("API key is valid.")


def main() -> None:
    """Main entry point for the CLI."""
    cli()

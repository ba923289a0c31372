"""Media commands: prefetch, cache-clear."""

import asyncio
import click

from . import cli
from .shared import console


@cli.command()
@click.argument("url")
@click.option("--type", "image_type", type=click.Choice(["flash", "show"]), default=None,
              help="Special display mode")
def prefetch(url, image_type):
    """Download URL into the media cache and print the image code."""
    async def _prefetch():
        from cqcode.prefetch import get_prefetcher, set_prefetcher

        prefetcher = get_prefetcher()
        try:
            return await prefetcher.prefetch_image(url, image_type)
        finally:
            await prefetcher.transport.aclose()
            set_prefetcher(None)

    click.echo(asyncio.run(_prefetch()))


@cli.command("cache-clear")
@click.confirmation_option(prompt="Delete all pre-downloaded media?")
def cache_clear():
    """Delete every file in the media cache."""
    from cqcode.cache import FileContentCache
    from cqcode.config import load_settings

    settings = load_settings()
    removed = FileContentCache(settings.cache_path).clear()
    console.print(f"[green]Removed {removed} cached file(s) from {settings.cache_path}[/green]")

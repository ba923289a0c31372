"""Builder commands: print ready-to-send CQ codes."""

import click

from cqcode import builders
from . import cli

_IMAGE_TYPES = click.Choice(["flash", "show"])


@cli.command()
@click.argument("file")
@click.option("--type", "image_type", type=_IMAGE_TYPES, default=None, help="Special display mode")
@click.option("--base64", "is_base64", is_flag=True, help="FILE is base64 image data")
def image(file, image_type, is_base64):
    """Image code for FILE (path, URL or base64 data)."""
    if is_base64:
        click.echo(builders.image_base64(file, image_type))
    else:
        click.echo(builders.image(file, image_type))


@cli.command()
@click.argument("qq")
def at(qq):
    """Mention user QQ ('all' mentions everyone)."""
    if qq == "all":
        click.echo(builders.at_all())
    else:
        click.echo(builders.at(qq))


@cli.command()
@click.argument("message_id")
def reply(message_id):
    """Reply to MESSAGE_ID."""
    click.echo(builders.reply(message_id))


@cli.command()
@click.argument("file")
def record(file):
    """Voice message code for FILE."""
    click.echo(builders.record(file))

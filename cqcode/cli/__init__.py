"""cqcode CLI — command line interface."""

import click
from cqcode import __version__
from .shared import console, setup_logging


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="cqcode")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, debug):
    """cqcode — CQ code inline markup tools"""
    setup_logging(debug)
    if ctx.invoked_subcommand is None:
        _show_help()


def _show_help():
    """Show all available commands grouped by category."""
    console.print(f"[bold]cqcode v{__version__}[/bold] — CQ code inline markup tools\n")

    groups = {
        "Markup": [
            ("parse", "List every CQ code found in text"),
            ("strip", "Remove CQ codes from text"),
            ("escape", "Escape text (--inside for field values)"),
            ("unescape", "Reverse escaping"),
        ],
        "Build": [
            ("image", "Image code for a file or URL"),
            ("at", "Mention a user (or 'all')"),
            ("reply", "Reply to a message ID"),
            ("record", "Voice message code"),
        ],
        "Media": [
            ("prefetch", "Download an image and print a local image code"),
            ("cache-clear", "Delete all pre-downloaded media"),
        ],
    }

    for category, commands in groups.items():
        console.print(f"  [bold cyan]{category}[/bold cyan]")
        for name, desc in commands:
            console.print(f"    [bold]cqcode {name:12s}[/bold] {desc}")
        console.print()

    console.print("[dim]Run 'cqcode <command> --help' for details on a specific command.[/dim]")


# Import all command modules (registers commands onto cli group)
from . import cmd_markup  # noqa: E402, F401
from . import cmd_build  # noqa: E402, F401
from . import cmd_media  # noqa: E402, F401


@cli.command(name="help", hidden=True)
def help_cmd():
    """Show all available commands."""
    _show_help()


def main():
    cli()

"""Markup commands: parse, strip, escape, unescape."""

import click
from rich.table import Table
from rich.text import Text

from cqcode.escape import escape, unescape
from cqcode.parser import iter_codes, strip_codes
from . import cli
from .shared import console


@cli.command()
@click.argument("text")
def parse(text):
    """List every CQ code found in TEXT."""
    found = list(iter_codes(text))
    if not found:
        console.print("[yellow]No CQ codes found.[/yellow]")
        return

    t = Table(title=f"{len(found)} CQ code(s)")
    t.add_column("Span", justify="right")
    t.add_column("Type", style="bold")
    t.add_column("Fields")
    for start, end, code in found:
        fields = ", ".join(f"{k}={v}" for k, v in code.items())
        t.add_row(f"{start}-{end}", Text(code.type), Text(fields))
    console.print(t)


@cli.command()
@click.argument("text")
def strip(text):
    """Print TEXT with all CQ codes removed."""
    click.echo(strip_codes(text))


@cli.command("escape")
@click.argument("text")
@click.option("--inside", is_flag=True, help="Escape for use inside a CQ code field")
def escape_cmd(text, inside):
    """Escape TEXT for CQ markup."""
    click.echo(escape(text, inside_code=inside))


@cli.command("unescape")
@click.argument("text")
def unescape_cmd(text):
    """Reverse CQ escaping in TEXT."""
    click.echo(unescape(text))

"""Terminal output shared by the fetch and render phases."""

import click


def click_echo(msg: str):
    click.echo(msg)


def click_warn(msg: str):
    click.echo(f"WARNING: {msg}", err=True)

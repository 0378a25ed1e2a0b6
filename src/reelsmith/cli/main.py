"""Reelsmith command-line interface.

Commands live in submodules under `reelsmith.cli.*` and register themselves
on the root group.
"""

from __future__ import annotations

import click

from reelsmith.app_version import get_app_version
from reelsmith.observability import init_observability


@click.group()
@click.version_option(version=get_app_version(), prog_name="reelsmith")
def cli() -> None:
    """Reelsmith - text to vertical short-form video."""
    init_observability()


def _register_commands() -> None:
    from reelsmith.cli import config, generate, history, serve, styles

    config.register(cli)
    generate.register(cli)
    history.register(cli)
    serve.register(cli)
    styles.register(cli)


_register_commands()


if __name__ == "__main__":
    cli()

#!/usr/bin/env python3
"""
Justitia Node Config CLI

Inspect the node settings file and compute content digests.

Usage:
    justitia-config show [--root DIR] [--file PATH] [--json]
    justitia-config get <path> [--root DIR] [--file PATH]
    justitia-config hash <data> [--algorithm NAME] [--hex]
"""

import json
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from justitia.config import MISSING, SettingsStore, assemble_node_config
from justitia.constants import HASH_ALG_NAME
from justitia.crypto import ContentHasher, HashAlgorithmSelector
from justitia.exceptions import ConfigurationError, HashError


def _store(root: Optional[str], file: Optional[str]) -> SettingsStore:
    return SettingsStore(file, root)


def _to_plain(value):
    """Convert frozen settings values back to JSON-serializable objects."""
    if hasattr(value, "items"):
        return {k: _to_plain(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_to_plain(v) for v in value]
    return value


@click.group()
@click.version_option(version="0.1.0", prog_name="justitia-config")
def cli():
    """Justitia node configuration tool"""
    pass


@cli.command("show")
@click.option("--root", "-r", type=click.Path(file_okay=False), help="Deployment root directory")
@click.option("--file", "-f", type=click.Path(dir_okay=False), help="Settings file (default: config/config.json)")
@click.option("--json", "as_json", is_flag=True, help="Print as JSON")
def show_cmd(root: Optional[str], file: Optional[str], as_json: bool):
    """Assemble and print the node configuration."""
    try:
        node_config = assemble_node_config(_store(root, file))
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    data = node_config.to_dict()
    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    table = Table(title="Node configuration")
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    for section, values in data.items():
        for key, value in values.items():
            table.add_row(f"{section}.{key}", "[dim]<unassigned>[/dim]" if value is None else str(value))
    Console().print(table)


@cli.command("get")
@click.argument("path")
@click.option("--root", "-r", type=click.Path(file_okay=False), help="Deployment root directory")
@click.option("--file", "-f", type=click.Path(dir_okay=False), help="Settings file (default: config/config.json)")
def get_cmd(path: str, root: Optional[str], file: Optional[str]):
    """Print the raw value at a dotted PATH."""
    try:
        value = _store(root, file).get(path)
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    if value is MISSING:
        raise click.ClickException(f"'{path}' not found")
    click.echo(json.dumps(_to_plain(value)))


@cli.command("hash")
@click.argument("data")
@click.option("--algorithm", "-a", default=None, help=f"Hash algorithm ({HASH_ALG_NAME}, default SHA256)")
@click.option("--hex", "is_hex", is_flag=True, help="DATA is hex-encoded bytes")
def hash_cmd(data: str, algorithm: Optional[str], is_hex: bool):
    """Print the digest of DATA."""
    if is_hex:
        try:
            content = bytes.fromhex(data[2:] if data.lower().startswith("0x") else data)
        except ValueError:
            raise click.BadParameter("not valid hex", param_hint="DATA")
    else:
        content = data.encode("utf-8")

    global_config = {HASH_ALG_NAME: algorithm} if algorithm else None
    hasher = ContentHasher(HashAlgorithmSelector(global_config))
    try:
        digest = hasher.digest(content)
    except HashError as e:
        raise click.ClickException(str(e))
    if digest is None:
        raise click.ClickException("Nothing to hash")
    click.echo("0x" + digest.hex())


def main():
    cli()


if __name__ == "__main__":
    main()

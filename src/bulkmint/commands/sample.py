from __future__ import annotations

from pathlib import Path

import click

from ..workloads.work import create_sample_addresses


@click.command("create-sample-addresses")
@click.option("--num-addresses", required=True, type=click.IntRange(min=1))
@click.option("--output-file", required=True, type=click.Path(dir_okay=False, path_type=Path))
def create_sample_addresses_cmd(num_addresses: int, output_file: Path) -> None:
    """Write random destination addresses, one per line."""
    create_sample_addresses(num_addresses, output_file)
    click.echo(f"Wrote {num_addresses} addresses to {output_file}")

"""
bulkmint CLI

Command-line interface for bulk NFT minting and burning on Aptos.

Commands:
  create-collection        - Create a test collection and enable minting
  submit nft-mint          - Mint one token per destination address
  submit nft-burn          - Burn tokens listed in a mint report
  create-sample-addresses  - Write random destination addresses
  whoami                   - Show configured account addresses
"""

from __future__ import annotations

import logging

import click

from .ledger.account import KeyFormatError, LocalAccount, load_config
from .ledger import account as _account


# ============ Constants ============

VERSION = "0.1.0"


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="bulkmint")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """bulkmint - bulk NFT minting and burning on Aptos."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    load_config()
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ============ Top-level Commands ============

from .commands.collection import create_collection
from .commands.sample import create_sample_addresses_cmd
from .commands.submit import submit

cli.add_command(create_collection)
cli.add_command(submit)
cli.add_command(create_sample_addresses_cmd)


# ============ Identity ============


@cli.command()
def whoami() -> None:
    """Show the addresses of the configured keys."""
    found = False
    for var, label in (("PRIVATE_KEY", "Sender"), ("ADMIN_PRIVATE_KEY", "Admin")):
        try:
            account = LocalAccount.from_private_key(_account.load_private_key(var))
        except ValueError:
            continue
        except KeyFormatError as exc:
            click.secho(f"  {label}: invalid {var}: {exc}", fg="red")
            continue
        found = True
        click.echo(f"  {label}:  {account.address}")

    if not found:
        click.secho(f"No keys configured. Set PRIVATE_KEY in {_account.BULKMINT_ENV}.", fg="yellow")
        raise SystemExit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()

"""
Create Collection - Provision a test collection and enable minting.

Prints the collection config address that `bulkmint submit nft-mint`
takes as --collection-address.
"""

from __future__ import annotations

from typing import Optional

import click
import httpx

from ..errors import BulkMintError
from ..ledger.types import AccountAddress
from ..workloads.builders import DEFAULT_MODULE_NAME
from ..workloads.collection import create_test_collection
from .common import ADDRESS, LedgerSettings, fail, ledger_options, resolve_account


@click.command("create-collection")
@click.option("--contract-address", required=True, type=ADDRESS, help="Launch contract address")
@click.option("--contract-module-name", default=DEFAULT_MODULE_NAME, show_default=True)
@click.option(
    "--admin-key",
    envvar="ADMIN_PRIVATE_KEY",
    default=None,
    help="Collection admin Ed25519 private key (default: ADMIN_PRIVATE_KEY)",
)
@ledger_options
def create_collection(
    contract_address: AccountAddress,
    contract_module_name: str,
    admin_key: Optional[str],
    node_url: str,
    chain_id: Optional[int],
    max_gas_amount: int,
    gas_unit_price: int,
    expiration_secs: int,
) -> None:
    """Create a test collection and enable minting on it."""
    settings = LedgerSettings(node_url, chain_id, max_gas_amount, gas_unit_price, expiration_secs)

    try:
        admin_account = resolve_account(admin_key, "ADMIN_PRIVATE_KEY")
        client = settings.client()
        admin_account.set_sequence_number(client.account_sequence_number(admin_account.address))
        txn_factory = settings.txn_factory(client)

        click.echo(click.style("  Admin:    ", dim=True) + str(admin_account.address), err=True)
        click.echo(click.style("  Contract: ", dim=True) + f"{contract_address}::{contract_module_name}", err=True)

        collection_address = create_test_collection(
            contract_address,
            contract_module_name,
            admin_account,
            client,
            txn_factory,
        )
    except (BulkMintError, httpx.HTTPError, ValueError) as exc:
        fail(exc)

    click.secho("  Collection ready to mint.", fg="green", err=True)
    click.echo(str(collection_address))

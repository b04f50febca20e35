"""
Submit - Run a mint or burn workload.

Every transaction is sent from the account configured as PRIVATE_KEY.
Report lines go to --output-file (stdout by default); progress and the
final summary go to stderr.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Optional

import click
import httpx

from ..errors import BulkMintError
from ..ledger.types import AccountAddress
from ..workloads.builders import (
    DEFAULT_BURN_ENTRY_FUN,
    DEFAULT_MINT_ENTRY_FUN,
    DEFAULT_MODULE_NAME,
    NftBurnSignedTransactionBuilder,
    NftMintSignedTransactionBuilder,
    SignedTransactionBuilder,
)
from ..workloads.submit import execute_submit
from ..workloads.work import create_account_address_pairs_work, create_account_addresses_work
from .common import ADDRESS, LedgerSettings, fail, ledger_options, resolve_account


class SubmitContext:
    def __init__(self, settings: LedgerSettings, output_file: str) -> None:
        self.settings = settings
        self.output_file = output_file

    def run(self, work: Iterable[Any], builder: SignedTransactionBuilder[Any]) -> None:
        items = list(work)
        client = self.settings.client()
        account = resolve_account(None, "PRIVATE_KEY")
        txn_factory = self.settings.txn_factory(client)

        click.echo(click.style("  Sender: ", dim=True) + str(account.address), err=True)
        click.echo(click.style("  Items:  ", dim=True) + str(len(items)), err=True)

        with click.open_file(self.output_file, "w", encoding="utf-8") as sink:
            summary = execute_submit(items, builder, client, account, txn_factory, sink)

        color = "green" if summary.succeeded == summary.total else "yellow"
        click.secho(
            f"  Done: {summary.succeeded}/{summary.total} succeeded, "
            f"{summary.failed} failed, {summary.missing} missing",
            fg=color,
            err=True,
        )


@click.group()
@ledger_options
@click.option("--output-file", default="-", show_default=True, help="Report file ('-' for stdout)")
@click.pass_context
def submit(
    ctx: click.Context,
    node_url: str,
    chain_id: Optional[int],
    max_gas_amount: int,
    gas_unit_price: int,
    expiration_secs: int,
    output_file: str,
) -> None:
    """Submit one transaction per destination and report each result."""
    settings = LedgerSettings(node_url, chain_id, max_gas_amount, gas_unit_price, expiration_secs)
    ctx.obj = SubmitContext(settings, output_file)


@submit.command("nft-mint")
@click.option("--contract-address", required=True, type=ADDRESS)
@click.option("--contract-module-name", default=DEFAULT_MODULE_NAME, show_default=True)
@click.option("--mint-entry-fun", default=DEFAULT_MINT_ENTRY_FUN, show_default=True)
@click.option("--collection-address", required=True, type=ADDRESS, help="Collection config address")
@click.option(
    "--destinations-file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Recipient addresses, one per line",
)
@click.pass_obj
def nft_mint(
    submit_ctx: SubmitContext,
    contract_address: AccountAddress,
    contract_module_name: str,
    mint_entry_fun: str,
    collection_address: AccountAddress,
    destinations_file: Path,
) -> None:
    """Mint one token to each recipient."""
    try:
        work = create_account_addresses_work(destinations_file, only_success=False)
        builder = NftMintSignedTransactionBuilder.new(
            contract_address,
            collection_address,
            contract_module_name=contract_module_name,
            mint_entry_fun=mint_entry_fun,
        )
        submit_ctx.run(work, builder)
    except (BulkMintError, httpx.HTTPError, ValueError) as exc:
        fail(exc)


@submit.command("nft-burn")
@click.option("--contract-address", required=True, type=ADDRESS)
@click.option("--contract-module-name", default=DEFAULT_MODULE_NAME, show_default=True)
@click.option("--burn-entry-fun", default=DEFAULT_BURN_ENTRY_FUN, show_default=True)
@click.option(
    "--destinations-file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Mint report; only 'success' lines are burned",
)
@click.option(
    "--admin-key",
    envvar="ADMIN_PRIVATE_KEY",
    default=None,
    help="Collection admin Ed25519 private key (default: ADMIN_PRIVATE_KEY)",
)
@click.pass_obj
def nft_burn(
    submit_ctx: SubmitContext,
    contract_address: AccountAddress,
    contract_module_name: str,
    burn_entry_fun: str,
    destinations_file: Path,
    admin_key: Optional[str],
) -> None:
    """Burn each (token, collection) pair, co-signed by the collection admin."""
    try:
        work = create_account_address_pairs_work(destinations_file, only_success=True)
        admin_account = resolve_account(admin_key, "ADMIN_PRIVATE_KEY")
        builder = NftBurnSignedTransactionBuilder.new(
            contract_address,
            admin_account,
            contract_module_name=contract_module_name,
            burn_entry_fun=burn_entry_fun,
        )
        submit_ctx.run(work, builder)
    except (BulkMintError, httpx.HTTPError, ValueError) as exc:
        fail(exc)

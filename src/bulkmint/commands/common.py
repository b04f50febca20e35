"""Shared CLI options and helpers."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Callable, NoReturn, Optional

import click
import httpx

from ..errors import BulkMintError
from ..ledger.account import LocalAccount, load_private_key
from ..ledger.rest import DEFAULT_NODE_URL, LedgerClient, RestClient
from ..ledger.txn import (
    DEFAULT_EXPIRATION_SECS,
    DEFAULT_GAS_UNIT_PRICE,
    DEFAULT_MAX_GAS_AMOUNT,
    TransactionFactory,
)
from ..ledger.types import AccountAddress, AddressError


class AddressParamType(click.ParamType):
    name = "address"

    def convert(self, value: Any, param: Optional[click.Parameter], ctx: Optional[click.Context]) -> AccountAddress:
        if isinstance(value, AccountAddress):
            return value
        try:
            return AccountAddress.from_str(value)
        except AddressError as exc:
            self.fail(str(exc), param, ctx)


ADDRESS = AddressParamType()


def ledger_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Node and transaction factory options, shared by every on-chain command."""
    options = [
        click.option(
            "--node-url",
            envvar="APTOS_NODE_URL",
            default=DEFAULT_NODE_URL,
            show_default=True,
            help="Fullnode REST URL",
        ),
        click.option(
            "--chain-id",
            envvar="CHAIN_ID",
            type=int,
            default=None,
            help="Chain id (default: read from the node)",
        ),
        click.option("--max-gas-amount", type=int, default=DEFAULT_MAX_GAS_AMOUNT, show_default=True),
        click.option("--gas-unit-price", type=int, default=DEFAULT_GAS_UNIT_PRICE, show_default=True),
        click.option(
            "--expiration-secs",
            type=int,
            default=DEFAULT_EXPIRATION_SECS,
            show_default=True,
            help="Transaction expiry, seconds from signing",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@dataclass(frozen=True)
class LedgerSettings:
    node_url: str
    chain_id: Optional[int]
    max_gas_amount: int
    gas_unit_price: int
    expiration_secs: int

    def client(self) -> LedgerClient:
        return RestClient(base_url=self.node_url)

    def txn_factory(self, client: LedgerClient) -> TransactionFactory:
        chain_id = self.chain_id if self.chain_id is not None else client.chain_id()
        return TransactionFactory(
            chain_id=chain_id,
            max_gas_amount=self.max_gas_amount,
            gas_unit_price=self.gas_unit_price,
            expiration_secs=self.expiration_secs,
        )


def resolve_account(private_key: Optional[str], var: str) -> LocalAccount:
    """Account for an explicit key, else for the key configured under ``var``."""
    return LocalAccount.from_private_key(private_key or load_private_key(var))


def fail(exc: Exception) -> NoReturn:
    click.secho(f"ERROR: {exc}", fg="red", err=True)
    if isinstance(exc, BulkMintError):
        sys.exit(exc.exit_code)
    if isinstance(exc, httpx.HTTPError):
        sys.exit(3)
    sys.exit(1)

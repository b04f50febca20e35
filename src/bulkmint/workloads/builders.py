"""
Signed transaction builders for NFT workloads.

A builder turns one work item into one signed transaction, and one
committed (or missing) transaction back into one tab-separated report line.
Builders hold only immutable configuration, so a single instance can serve
any number of work items concurrently.

Report lines always have four fields.  The status field is ``success``,
``missing`` (no committed transaction was observed), or the text of the
event lookup error; event-derived fields are empty unless it is ``success``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol, TypeVar

from ..ledger.account import LocalAccount
from ..ledger.rest import TransactionOutcome
from ..ledger.txn import TransactionFactory
from ..ledger.types import AccountAddress, EntryFunction, ModuleId, SignedTransaction, bcs_address
from ..utils import tsv_line
from .events import EventLookupError, get_burn_event, get_mint_token_addr
from .module import resolve_module_id, validate_identifier

DEFAULT_MODULE_NAME = "only_on_aptos"
DEFAULT_MINT_ENTRY_FUN = "mint_to_recipient"
DEFAULT_BURN_ENTRY_FUN = "burn_with_admin_worker"

STATUS_SUCCESS = "success"
STATUS_MISSING = "missing"

T_contra = TypeVar("T_contra", contravariant=True)

MintTarget = AccountAddress
# (token, collection)
BurnTarget = tuple[AccountAddress, AccountAddress]


class SignedTransactionBuilder(Protocol[T_contra]):
    def build(
        self, data: T_contra, account: LocalAccount, txn_factory: TransactionFactory
    ) -> SignedTransaction:
        ...

    def success_output(self, data: T_contra, txn_out: Optional[TransactionOutcome]) -> str:
        ...


@dataclass(frozen=True)
class NftMintSignedTransactionBuilder:
    """Mints one token of a collection to each recipient address."""

    contract_module: ModuleId
    mint_entry_fun: str
    collection_owner_address: AccountAddress

    def __post_init__(self) -> None:
        validate_identifier(self.mint_entry_fun)

    @classmethod
    def new(
        cls,
        contract_address: AccountAddress,
        collection_owner_address: AccountAddress,
        contract_module_name: str = DEFAULT_MODULE_NAME,
        mint_entry_fun: str = DEFAULT_MINT_ENTRY_FUN,
    ) -> "NftMintSignedTransactionBuilder":
        return cls(
            contract_module=resolve_module_id(contract_address, contract_module_name),
            mint_entry_fun=mint_entry_fun,
            collection_owner_address=collection_owner_address,
        )

    def payload(self, data: MintTarget) -> EntryFunction:
        return EntryFunction(
            self.contract_module,
            self.mint_entry_fun,
            (
                bcs_address(self.collection_owner_address),  # collection_config_object
                bcs_address(data),  # recipient
            ),
        )

    def build(
        self, data: MintTarget, account: LocalAccount, txn_factory: TransactionFactory
    ) -> SignedTransaction:
        return account.sign_with_transaction_builder(txn_factory, self.payload(data))

    def success_output(self, data: MintTarget, txn_out: Optional[TransactionOutcome]) -> str:
        if txn_out is None:
            status, token = STATUS_MISSING, ""
        else:
            try:
                token = str(get_mint_token_addr(txn_out.events))
                status = STATUS_SUCCESS
            except EventLookupError as exc:
                status, token = str(exc), ""
        return tsv_line(token, self.collection_owner_address, data, status)


@dataclass(frozen=True)
class NftBurnSignedTransactionBuilder:
    """
    Burns tokens as a multi-agent transaction.

    The token owner is the primary signer passed to ``build``; the
    collection admin co-signs every transaction.  The admin account is
    shared, not copied: its sequence number belongs to whoever submits
    transactions for it, and co-signing never touches it.
    """

    admin_account: LocalAccount = field(repr=False, compare=False)
    contract_module: ModuleId
    burn_entry_fun: str

    def __post_init__(self) -> None:
        validate_identifier(self.burn_entry_fun)

    @classmethod
    def new(
        cls,
        contract_address: AccountAddress,
        admin_account: LocalAccount,
        contract_module_name: str = DEFAULT_MODULE_NAME,
        burn_entry_fun: str = DEFAULT_BURN_ENTRY_FUN,
    ) -> "NftBurnSignedTransactionBuilder":
        return cls(
            admin_account=admin_account,
            contract_module=resolve_module_id(contract_address, contract_module_name),
            burn_entry_fun=burn_entry_fun,
        )

    def payload(self, data: BurnTarget) -> EntryFunction:
        token, collection = data
        return EntryFunction(
            self.contract_module,
            self.burn_entry_fun,
            (
                bcs_address(collection),  # collection_config_object
                bcs_address(token),  # token
            ),
        )

    def build(
        self, data: BurnTarget, account: LocalAccount, txn_factory: TransactionFactory
    ) -> SignedTransaction:
        return account.sign_multi_agent_with_transaction_builder(
            [self.admin_account], txn_factory, self.payload(data)
        )

    def success_output(self, data: BurnTarget, txn_out: Optional[TransactionOutcome]) -> str:
        token, collection = data
        if txn_out is None:
            status, refund = STATUS_MISSING, ""
        else:
            try:
                burned = get_burn_event(txn_out.events)
                # the owner signed as primary and gets the storage refund
                refund = str(txn_out.sender or burned.previous_owner)
                status = STATUS_SUCCESS
            except EventLookupError as exc:
                status, refund = str(exc), ""
        return tsv_line(refund, token, collection, status)

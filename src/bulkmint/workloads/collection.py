"""
Collection bootstrap - Create a test collection and open it for minting.

Flow:
1. create_collection with a unique name, fixed metadata and URI weights
2. Wait for commit, read the CreateCollectionConfig event
3. set_minting_status(collection_config, true)

Each step requires the previous one; nothing is rolled back on failure.
"""

from __future__ import annotations

import logging

from ..errors import BulkMintError
from ..ledger.account import LocalAccount
from ..ledger.rest import LedgerClient, TransactionOutcome
from ..ledger.txn import TransactionFactory
from ..ledger.types import (
    AccountAddress,
    EntryFunction,
    ModuleId,
    bcs_address,
    bcs_bool,
    bcs_option_u64,
    bcs_string,
    bcs_string_vector,
    bcs_u64_vector,
)
from ..utils import rand_string
from .events import CreateCollectionConfig, search_single_event_data
from .module import resolve_module_id

logger = logging.getLogger(__name__)

COLLECTION_NAME_PREFIX = "Test Collection "
COLLECTION_NAME_SUFFIX_LENGTH = 10
MAX_SUPPLY = 1_000_000


class TransactionRejectedError(BulkMintError):
    exit_code = 4

    def __init__(self, function: str, outcome: TransactionOutcome) -> None:
        super().__init__(f"{function} transaction {outcome.hash} failed: {outcome.vm_status}")
        self.function = function
        self.outcome = outcome


def create_collection_payload(contract_module: ModuleId, collection_name: str) -> EntryFunction:
    return EntryFunction(
        contract_module,
        "create_collection",
        (
            bcs_string(collection_name),  # collection_name
            bcs_string("collection description"),  # collection_description
            bcs_string("htpps://some.collection.uri.test"),  # collection_uri
            bcs_string("test token #"),  # token_name_prefix
            bcs_string("test token description"),  # token_description
            bcs_string_vector(["htpps://some.uri1.test", "htpps://some.uri2.test"]),  # token_uris
            bcs_u64_vector([10, 1]),  # token_uris_weights
            bcs_bool(True),  # mutable_collection_metadata
            bcs_bool(True),  # mutable_token_metadata
            bcs_bool(True),  # tokens_burnable_by_collection_owner
            bcs_bool(False),  # tokens_transferrable_by_collection_owner
            bcs_option_u64(MAX_SUPPLY),  # max_supply
            bcs_option_u64(None),  # royalty_numerator
            bcs_option_u64(None),  # royalty_denominator
        ),
    )


def set_minting_status_payload(
    contract_module: ModuleId, collection_config: AccountAddress, ready_to_mint: bool = True
) -> EntryFunction:
    return EntryFunction(
        contract_module,
        "set_minting_status",
        (bcs_address(collection_config), bcs_bool(ready_to_mint)),
    )


def _submit(
    function: str,
    payload: EntryFunction,
    admin_account: LocalAccount,
    client: LedgerClient,
    txn_factory: TransactionFactory,
) -> TransactionOutcome:
    signed = admin_account.sign_with_transaction_builder(txn_factory, payload)
    outcome = client.submit_and_wait_bcs(signed)
    if not outcome.success:
        raise TransactionRejectedError(function, outcome)
    logger.info("%s txn: %s (%s)", function, outcome.hash, outcome.vm_status)
    return outcome


def create_test_collection(
    contract_address: AccountAddress,
    contract_module_name: str,
    admin_account: LocalAccount,
    client: LedgerClient,
    txn_factory: TransactionFactory,
) -> AccountAddress:
    """
    Create a collection and enable minting on it.

    Args:
        contract_address: Address the launch contract is published at
        contract_module_name: Module exposing create_collection
        admin_account: Collection admin; signs both transactions
        client: Ledger client that submits and waits for commit
        txn_factory: Gas / expiry parameters

    Returns:
        Address of the collection config object, which mint and burn
        calls take as their collection argument

    Raises:
        TransactionRejectedError: A transaction committed but aborted
        EventNotFoundError: create_collection emitted no config event
        AmbiguousEventError: create_collection emitted several config events
    """
    contract_module = resolve_module_id(contract_address, contract_module_name)
    collection_name = COLLECTION_NAME_PREFIX + rand_string(COLLECTION_NAME_SUFFIX_LENGTH)

    outcome = _submit(
        "create_collection",
        create_collection_payload(contract_module, collection_name),
        admin_account,
        client,
        txn_factory,
    )
    created = search_single_event_data(
        outcome.events,
        f"{contract_module}::CreateCollectionConfig",
        CreateCollectionConfig.from_event_data,
    )
    logger.info(
        "Created %r: collection %s, config %s",
        collection_name,
        created.collection,
        created.collection_config,
    )

    _submit(
        "set_minting_status",
        set_minting_status_payload(contract_module, created.collection_config),
        admin_account,
        client,
        txn_factory,
    )
    logger.info("collection_owner_address: %s", created.collection_config)

    return created.collection_config

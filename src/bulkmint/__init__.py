__all__ = [
    # Errors
    "BulkMintError",
    "ConfigurationError",
    # Ledger types
    "AccountAddress",
    "AddressError",
    "EntryFunction",
    "ModuleId",
    "RawTransaction",
    "SignedTransaction",
    # Accounts
    "KeyFormatError",
    "LocalAccount",
    "generate_account",
    "load_private_key",
    # Transactions
    "TransactionFactory",
    # REST
    "Event",
    "LedgerClient",
    "LedgerError",
    "RestClient",
    "TransactionOutcome",
    "TransactionTimeoutError",
    # Module resolution
    "InvalidIdentifierError",
    "resolve_module_id",
    # Events
    "AmbiguousEventError",
    "CreateCollectionConfig",
    "EventDecodeError",
    "EventLookupError",
    "EventNotFoundError",
    "search_single_event_data",
    # Builders
    "NftBurnSignedTransactionBuilder",
    "NftMintSignedTransactionBuilder",
    "SignedTransactionBuilder",
    # Collection bootstrap
    "TransactionRejectedError",
    "create_test_collection",
    # Work items and submission
    "WorkFileError",
    "create_account_address_pairs_work",
    "create_account_addresses_work",
    "create_sample_addresses",
    "execute_submit",
]

from .errors import BulkMintError, ConfigurationError
from .ledger.account import KeyFormatError, LocalAccount, generate_account, load_private_key
from .ledger.rest import (
    Event,
    LedgerClient,
    LedgerError,
    RestClient,
    TransactionOutcome,
    TransactionTimeoutError,
)
from .ledger.txn import TransactionFactory
from .ledger.types import (
    AccountAddress,
    AddressError,
    EntryFunction,
    ModuleId,
    RawTransaction,
    SignedTransaction,
)
from .workloads.builders import (
    NftBurnSignedTransactionBuilder,
    NftMintSignedTransactionBuilder,
    SignedTransactionBuilder,
)
from .workloads.collection import TransactionRejectedError, create_test_collection
from .workloads.events import (
    AmbiguousEventError,
    CreateCollectionConfig,
    EventDecodeError,
    EventLookupError,
    EventNotFoundError,
    search_single_event_data,
)
from .workloads.module import InvalidIdentifierError, resolve_module_id
from .workloads.submit import execute_submit
from .workloads.work import (
    WorkFileError,
    create_account_address_pairs_work,
    create_account_addresses_work,
    create_sample_addresses,
)

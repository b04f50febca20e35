"""
REST Client for an Aptos fullnode.

Lightweight alternative to a full SDK client: uses httpx for HTTP and
submits BCS-encoded signed transactions directly.  Supports ledger info,
sequence number lookup, submission and finality polling.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

import httpx

from ..errors import BulkMintError
from .types import AccountAddress, AddressError, SignedTransaction

logger = logging.getLogger(__name__)

# Default REST endpoint (Aptos testnet)
DEFAULT_NODE_URL = "https://fullnode.testnet.aptoslabs.com/v1"

BCS_SIGNED_TRANSACTION = "application/x.aptos.signed_transaction+bcs"


def get_node_url() -> str:
    """Get the node REST URL from environment or default."""
    return os.environ.get("APTOS_NODE_URL", DEFAULT_NODE_URL)


class LedgerError(BulkMintError):
    exit_code = 3

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class TransactionTimeoutError(LedgerError):
    def __init__(self, txn_hash: str, timeout: float) -> None:
        super().__init__(f"Transaction {txn_hash} not committed within {timeout}s")
        self.txn_hash = txn_hash


# ---------------------------------------------------------------------------
# Outcome model
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Event:
    type: str
    data: Any
    sequence_number: int = 0

    @classmethod
    def from_json(cls, payload: dict[str, Any]) -> "Event":
        return cls(
            type=str(payload.get("type", "")),
            data=payload.get("data"),
            sequence_number=int(payload.get("sequence_number", 0)),
        )


@dataclass(frozen=True)
class TransactionOutcome:
    """A committed transaction as reported by the node."""

    hash: str
    success: bool
    vm_status: str
    sender: Optional[AccountAddress]
    events: tuple[Event, ...] = ()
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_json(cls, payload: dict[str, Any]) -> "TransactionOutcome":
        sender = None
        if payload.get("sender"):
            try:
                sender = AccountAddress.from_str(payload["sender"])
            except AddressError:
                logger.warning("Unparseable sender %r in transaction %s", payload["sender"], payload.get("hash"))
        return cls(
            hash=str(payload.get("hash", "")),
            success=bool(payload.get("success", False)),
            vm_status=str(payload.get("vm_status", "")),
            sender=sender,
            events=tuple(Event.from_json(e) for e in payload.get("events", [])),
            raw=payload,
        )


class LedgerClient(Protocol):
    def chain_id(self) -> int:
        ...

    def account_sequence_number(self, address: AccountAddress) -> int:
        ...

    def submit_and_wait_bcs(self, signed_txn: SignedTransaction) -> TransactionOutcome:
        ...


# ---------------------------------------------------------------------------
# httpx client
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RestClient:
    base_url: str = field(default_factory=get_node_url)
    timeout: float = 30.0
    poll_interval: float = 1.0
    wait_timeout: float = 60.0
    transport: Optional[httpx.BaseTransport] = field(default=None, repr=False, compare=False)

    def _http(self) -> httpx.Client:
        return httpx.Client(timeout=self.timeout, transport=self.transport)

    def _url(self, path: str = "") -> str:
        base = self.base_url.rstrip("/")
        return f"{base}/{path}" if path else base

    @staticmethod
    def _check(response: httpx.Response, what: str) -> None:
        if response.status_code >= 400:
            raise LedgerError(
                f"{what} failed: HTTP {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

    @staticmethod
    def _field(response: httpx.Response, key: str, what: str) -> Any:
        """Read ``key`` from a JSON object body; anything else is a LedgerError."""
        try:
            return response.json()[key]
        except (ValueError, KeyError, TypeError) as exc:
            raise LedgerError(
                f"{what} returned an unexpected body (no {key!r})",
                status_code=response.status_code,
                body=response.text,
            ) from exc

    def chain_id(self) -> int:
        with self._http() as client:
            response = client.get(self._url())
        self._check(response, "Ledger info")
        return int(self._field(response, "chain_id", "Ledger info"))

    def account_sequence_number(self, address: AccountAddress) -> int:
        """
        Get the next sequence number for an account.

        Accounts that do not exist on chain yet start at 0.
        """
        with self._http() as client:
            response = client.get(self._url(f"accounts/{address}"))
        if response.status_code == 404:
            return 0
        self._check(response, f"Account lookup for {address}")
        return int(self._field(response, "sequence_number", f"Account lookup for {address}"))

    def submit_bcs_transaction(self, signed_txn: SignedTransaction) -> str:
        """
        Submit a signed transaction.

        Returns:
            Transaction hash (0x-prefixed hex)
        """
        with self._http() as client:
            response = client.post(
                self._url("transactions"),
                content=signed_txn.to_bcs(),
                headers={"Content-Type": BCS_SIGNED_TRANSACTION},
            )
        self._check(response, "Transaction submission")
        return self._field(response, "hash", "Transaction submission")

    def transaction_by_hash(self, txn_hash: str) -> Optional[dict[str, Any]]:
        with self._http() as client:
            response = client.get(self._url(f"transactions/by_hash/{txn_hash}"))
        if response.status_code == 404:
            return None
        self._check(response, f"Transaction lookup for {txn_hash}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise LedgerError(
                f"Transaction lookup for {txn_hash} returned a non-JSON body",
                status_code=response.status_code,
                body=response.text,
            ) from exc
        if not isinstance(payload, dict):
            raise LedgerError(
                f"Transaction lookup for {txn_hash} returned an unexpected body",
                status_code=response.status_code,
                body=response.text,
            )
        return payload

    def wait_for_transaction(self, txn_hash: str) -> TransactionOutcome:
        """
        Poll until the transaction is committed (successfully or not).

        Raises:
            TransactionTimeoutError: If still pending after ``wait_timeout``
        """
        start = time.monotonic()
        while time.monotonic() - start < self.wait_timeout:
            payload = self.transaction_by_hash(txn_hash)
            if payload is not None and payload.get("type") != "pending_transaction":
                return TransactionOutcome.from_json(payload)
            time.sleep(self.poll_interval)

        raise TransactionTimeoutError(txn_hash, self.wait_timeout)

    def submit_and_wait_bcs(self, signed_txn: SignedTransaction) -> TransactionOutcome:
        txn_hash = self.submit_bcs_transaction(signed_txn)
        logger.debug("Submitted %s from %s", txn_hash, signed_txn.sender)
        return self.wait_for_transaction(txn_hash)

"""
Sequential submission driver.

Runs a workload one item at a time from a single funded account: build,
submit, wait for commit, write the builder's report line.  There is no
concurrency, retry or fund distribution here.

A transaction that cannot be submitted or is not observed in time has no
outcome and is reported as ``missing``; the account's sequence number is
then re-read from the ledger once its line is written.  A failed re-read is
logged and leaves the local sequence number in place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, TextIO, TypeVar

import httpx

from ..ledger.account import LocalAccount
from ..ledger.rest import LedgerClient, LedgerError, TransactionOutcome
from ..ledger.txn import TransactionFactory
from .builders import STATUS_MISSING, STATUS_SUCCESS, SignedTransactionBuilder

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class SubmitSummary:
    total: int = 0
    succeeded: int = 0
    missing: int = 0

    @property
    def failed(self) -> int:
        return self.total - self.succeeded - self.missing


def _resync_sequence_number(client: LedgerClient, account: LocalAccount) -> None:
    # a failed lookup keeps the local value; the next missing item retries
    try:
        account.set_sequence_number(client.account_sequence_number(account.address))
    except (LedgerError, httpx.HTTPError) as exc:
        logger.warning("Sequence number resync for %s failed: %s", account.address, exc)


def execute_submit(
    work: Iterable[T],
    builder: SignedTransactionBuilder[T],
    client: LedgerClient,
    account: LocalAccount,
    txn_factory: TransactionFactory,
    sink: TextIO,
) -> SubmitSummary:
    """
    Submit one transaction per work item and report each result.

    Args:
        work: Work items, processed in order
        builder: Workload variant that builds and reports
        client: Ledger client
        account: Primary signer for every transaction
        txn_factory: Gas / expiry parameters
        sink: Receives one report line per work item

    Returns:
        Counts of processed, successful and missing items
    """
    account.set_sequence_number(client.account_sequence_number(account.address))
    summary = SubmitSummary()

    for item in work:
        signed = builder.build(item, account, txn_factory)
        txn_out: Optional[TransactionOutcome] = None
        try:
            txn_out = client.submit_and_wait_bcs(signed)
        except (LedgerError, httpx.HTTPError) as exc:
            logger.warning("No outcome for seq %d: %s", signed.raw_txn.sequence_number, exc)

        line = builder.success_output(item, txn_out)
        sink.write(line + "\n")

        status = line.rsplit("\t", 1)[-1]
        summary.total += 1
        if status == STATUS_SUCCESS:
            summary.succeeded += 1
        elif status == STATUS_MISSING:
            summary.missing += 1
        logger.debug("%s", line)

        if txn_out is None:
            _resync_sequence_number(client, account)

    return summary

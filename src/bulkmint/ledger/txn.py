"""
Transaction Factory - Gas and expiry parameters shared by every transaction.

A factory is immutable, so a single instance can be shared by every builder in a run.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

from .types import AccountAddress, EntryFunction, RawTransaction

DEFAULT_MAX_GAS_AMOUNT = 2_000_000
DEFAULT_GAS_UNIT_PRICE = 100
DEFAULT_EXPIRATION_SECS = 30


@dataclass(frozen=True)
class TransactionFactory:
    chain_id: int
    max_gas_amount: int = DEFAULT_MAX_GAS_AMOUNT
    gas_unit_price: int = DEFAULT_GAS_UNIT_PRICE
    expiration_secs: int = DEFAULT_EXPIRATION_SECS

    def raw_transaction(
        self,
        sender: AccountAddress,
        sequence_number: int,
        payload: EntryFunction,
        now: Optional[float] = None,
    ) -> RawTransaction:
        """
        Build an unsigned transaction for ``payload``.

        Args:
            sender: Primary signer address
            sequence_number: Sender's sequence number for this transaction
            payload: Entry function call
            now: Unix time used for expiry (default: current time)
        """
        current = time.time() if now is None else now
        return RawTransaction(
            sender=sender,
            sequence_number=sequence_number,
            payload=payload,
            max_gas_amount=self.max_gas_amount,
            gas_unit_price=self.gas_unit_price,
            expiration_timestamp_secs=int(current) + self.expiration_secs,
            chain_id=self.chain_id,
        )

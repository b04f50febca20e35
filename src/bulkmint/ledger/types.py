"""
Ledger Types - Addresses, entry functions and signed transactions.

Everything that goes over the wire is BCS (Binary Canonical Serialization),
declared here as `construct` layouts:

- ULEB128 length / variant prefixes (``VarInt``)
- little-endian fixed-width integers
- 1-byte booleans
- length-prefixed UTF-8 strings and byte vectors
- ``Option<T>`` as a vector of zero or one element

Argument blobs for an entry function are opaque to the chain client; their
order and layout must match the on-chain Move signature exactly.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Union

from construct import (
    Bytes,
    Const,
    Flag,
    GreedyBytes,
    Int8ul,
    Int64ul,
    PascalString,
    Prefixed,
    PrefixedArray,
    Struct,
    VarInt,
)

from ..errors import ConfigurationError


class AddressError(ConfigurationError):
    """Account address is not 1..64 hex digits."""


# ---------------------------------------------------------------------------
# BCS layouts
# ---------------------------------------------------------------------------

ADDRESS_LENGTH = 32

Address = Bytes(ADDRESS_LENGTH)
BcsString = PascalString(VarInt, "utf8")
BcsBytes = Prefixed(VarInt, GreedyBytes)

ModuleIdLayout = Struct(
    "address" / Address,
    "name" / BcsString,
)

# TransactionPayload::EntryFunction, no type arguments
TransactionPayloadLayout = Struct(
    Const(b"\x02"),
    "module" / ModuleIdLayout,
    "function" / BcsString,
    Const(b"\x00"),
    "args" / PrefixedArray(VarInt, BcsBytes),
)

RawTransactionLayout = Struct(
    "sender" / Address,
    "sequence_number" / Int64ul,
    "payload" / TransactionPayloadLayout,
    "max_gas_amount" / Int64ul,
    "gas_unit_price" / Int64ul,
    "expiration_timestamp_secs" / Int64ul,
    "chain_id" / Int8ul,
)

# RawTransactionWithData::MultiAgent
MultiAgentRawTransactionLayout = Struct(
    Const(b"\x00"),
    "raw_txn" / RawTransactionLayout,
    "secondary_signer_addresses" / PrefixedArray(VarInt, Address),
)

# AccountAuthenticator::Ed25519
AccountAuthenticatorLayout = Struct(
    Const(b"\x00"),
    "public_key" / BcsBytes,
    "signature" / BcsBytes,
)

# TransactionAuthenticator::Ed25519
Ed25519AuthenticatorLayout = Struct(
    Const(b"\x00"),
    "public_key" / BcsBytes,
    "signature" / BcsBytes,
)

# TransactionAuthenticator::MultiAgent
MultiAgentAuthenticatorLayout = Struct(
    Const(b"\x02"),
    "sender" / AccountAuthenticatorLayout,
    "secondary_signer_addresses" / PrefixedArray(VarInt, Address),
    "secondary_signers" / PrefixedArray(VarInt, AccountAuthenticatorLayout),
)

RAW_TRANSACTION_SALT = b"APTOS::RawTransaction"
RAW_TRANSACTION_WITH_DATA_SALT = b"APTOS::RawTransactionWithData"


def _salted(salt: bytes, data: bytes) -> bytes:
    return hashlib.sha3_256(salt).digest() + data


# ---------------------------------------------------------------------------
# Argument encoders
# ---------------------------------------------------------------------------

def bcs_address(address: "AccountAddress") -> bytes:
    return Address.build(address.value)


def bcs_string(value: str) -> bytes:
    return BcsString.build(value)


def bcs_bool(value: bool) -> bytes:
    return Flag.build(value)


def bcs_u64(value: int) -> bytes:
    return Int64ul.build(value)


def bcs_string_vector(values: Iterable[str]) -> bytes:
    return PrefixedArray(VarInt, BcsString).build(list(values))


def bcs_u64_vector(values: Iterable[int]) -> bytes:
    return PrefixedArray(VarInt, Int64ul).build(list(values))


def bcs_option_u64(value: Optional[int]) -> bytes:
    return PrefixedArray(VarInt, Int64ul).build([] if value is None else [value])


# ---------------------------------------------------------------------------
# Addresses and modules
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AccountAddress:
    value: bytes

    def __post_init__(self) -> None:
        if len(self.value) != ADDRESS_LENGTH:
            raise AddressError(
                f"Account address must be {ADDRESS_LENGTH} bytes, got {len(self.value)}"
            )

    @classmethod
    def from_str(cls, text: str) -> "AccountAddress":
        raw = text.strip()
        if raw[:2].lower() == "0x":
            raw = raw[2:]
        if not raw or len(raw) > ADDRESS_LENGTH * 2:
            raise AddressError(f"Invalid account address: {text!r}")
        try:
            return cls(bytes.fromhex(raw.zfill(ADDRESS_LENGTH * 2)))
        except ValueError as exc:
            raise AddressError(f"Invalid account address: {text!r}") from exc

    def is_special(self) -> bool:
        return self.value[:-1] == bytes(ADDRESS_LENGTH - 1) and self.value[-1] < 0x10

    def __str__(self) -> str:
        if self.is_special():
            return f"0x{self.value[-1]:x}"
        return "0x" + self.value.hex()

    def __repr__(self) -> str:
        return f"AccountAddress({self})"


@dataclass(frozen=True)
class ModuleId:
    address: AccountAddress
    name: str

    def __str__(self) -> str:
        return f"{self.address}::{self.name}"


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EntryFunction:
    module: ModuleId
    function: str
    args: tuple[bytes, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "module": {"address": self.module.address.value, "name": self.module.name},
            "function": self.function,
            "args": list(self.args),
        }


@dataclass(frozen=True)
class RawTransaction:
    sender: AccountAddress
    sequence_number: int
    payload: EntryFunction
    max_gas_amount: int
    gas_unit_price: int
    expiration_timestamp_secs: int
    chain_id: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "sender": self.sender.value,
            "sequence_number": self.sequence_number,
            "payload": self.payload.to_dict(),
            "max_gas_amount": self.max_gas_amount,
            "gas_unit_price": self.gas_unit_price,
            "expiration_timestamp_secs": self.expiration_timestamp_secs,
            "chain_id": self.chain_id,
        }

    def to_bcs(self) -> bytes:
        return RawTransactionLayout.build(self.to_dict())

    def signing_message(self) -> bytes:
        return _salted(RAW_TRANSACTION_SALT, self.to_bcs())


@dataclass(frozen=True)
class MultiAgentRawTransaction:
    raw_txn: RawTransaction
    secondary_signers: tuple[AccountAddress, ...]

    def to_bcs(self) -> bytes:
        return MultiAgentRawTransactionLayout.build(
            {
                "raw_txn": self.raw_txn.to_dict(),
                "secondary_signer_addresses": [a.value for a in self.secondary_signers],
            }
        )

    def signing_message(self) -> bytes:
        return _salted(RAW_TRANSACTION_WITH_DATA_SALT, self.to_bcs())


@dataclass(frozen=True)
class Ed25519Authenticator:
    public_key: bytes
    signature: bytes

    def to_dict(self) -> dict[str, Any]:
        return {"public_key": self.public_key, "signature": self.signature}

    def to_bcs(self) -> bytes:
        return Ed25519AuthenticatorLayout.build(self.to_dict())


@dataclass(frozen=True)
class MultiAgentAuthenticator:
    sender: Ed25519Authenticator
    secondary_signer_addresses: tuple[AccountAddress, ...]
    secondary_signers: tuple[Ed25519Authenticator, ...]

    def to_bcs(self) -> bytes:
        return MultiAgentAuthenticatorLayout.build(
            {
                "sender": self.sender.to_dict(),
                "secondary_signer_addresses": [a.value for a in self.secondary_signer_addresses],
                "secondary_signers": [s.to_dict() for s in self.secondary_signers],
            }
        )


Authenticator = Union[Ed25519Authenticator, MultiAgentAuthenticator]


@dataclass(frozen=True)
class SignedTransaction:
    raw_txn: RawTransaction
    authenticator: Authenticator = field(repr=False)

    @property
    def sender(self) -> AccountAddress:
        return self.raw_txn.sender

    @property
    def payload(self) -> EntryFunction:
        return self.raw_txn.payload

    def to_bcs(self) -> bytes:
        return self.raw_txn.to_bcs() + self.authenticator.to_bcs()


__all__ = [
    "AccountAddress",
    "AddressError",
    "Authenticator",
    "Ed25519Authenticator",
    "EntryFunction",
    "ModuleId",
    "MultiAgentAuthenticator",
    "MultiAgentRawTransaction",
    "RawTransaction",
    "RawTransactionLayout",
    "SignedTransaction",
    "bcs_address",
    "bcs_bool",
    "bcs_option_u64",
    "bcs_string",
    "bcs_string_vector",
    "bcs_u64",
    "bcs_u64_vector",
]

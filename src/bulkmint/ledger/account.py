"""
Ed25519 Signing Accounts for the bulk minting tools.

A LocalAccount pairs an Ed25519 key with the sequence number the next
transaction will use.  The sequence number is the only mutable state; it is
advanced by whoever submits transactions for the account (the primary
signer).  Accounts used purely as secondary signers are never mutated.

Keys are stored in ~/.bulkmint/.env (PRIVATE_KEY for the worker / coin
source account, ADMIN_PRIVATE_KEY for the collection admin).

Dependencies: PyNaCl for Ed25519, python-dotenv for the config file.
"""

from __future__ import annotations

import hashlib
import os
import threading
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv
from nacl.signing import SigningKey

from ..errors import ConfigurationError
from .txn import TransactionFactory
from .types import (
    AccountAddress,
    Ed25519Authenticator,
    EntryFunction,
    MultiAgentAuthenticator,
    MultiAgentRawTransaction,
    SignedTransaction,
)

# Default config directory
BULKMINT_DIR = Path.home() / ".bulkmint"
BULKMINT_ENV = BULKMINT_DIR / ".env"

ED25519_SCHEME = b"\x00"
AIP80_PREFIX = "ed25519-priv-"


class KeyFormatError(ConfigurationError):
    """Private key is not 32 bytes of hex."""


def parse_private_key(text: str) -> bytes:
    """
    Decode an Ed25519 private key.

    Accepts ``0x``-prefixed or bare hex, optionally wrapped in the AIP-80
    ``ed25519-priv-`` prefix used by the Aptos CLI.
    """
    raw = text.strip()
    if raw.startswith(AIP80_PREFIX):
        raw = raw[len(AIP80_PREFIX):]
    if raw[:2].lower() == "0x":
        raw = raw[2:]
    if len(raw) != 64:
        raise KeyFormatError("Ed25519 private key must be 32 bytes (64 hex chars)")
    try:
        return bytes.fromhex(raw)
    except ValueError as exc:
        raise KeyFormatError("Ed25519 private key is not valid hex") from exc


def derive_address(public_key: bytes) -> AccountAddress:
    """Authentication key of a single Ed25519 key, which is also its default address."""
    return AccountAddress(hashlib.sha3_256(public_key + ED25519_SCHEME).digest())


class LocalAccount:
    def __init__(
        self,
        signing_key: SigningKey,
        sequence_number: int = 0,
        address: Optional[AccountAddress] = None,
    ) -> None:
        self._signing_key = signing_key
        self._public_key = bytes(signing_key.verify_key)
        self._address = address or derive_address(self._public_key)
        self._sequence_number = sequence_number
        self._lock = threading.Lock()

    @classmethod
    def from_private_key(
        cls,
        private_key: str,
        sequence_number: int = 0,
        address: Optional[AccountAddress] = None,
    ) -> "LocalAccount":
        return cls(SigningKey(parse_private_key(private_key)), sequence_number, address)

    @classmethod
    def generate(cls) -> "LocalAccount":
        return cls(SigningKey.generate())

    @property
    def address(self) -> AccountAddress:
        return self._address

    def public_key(self) -> bytes:
        return self._public_key

    def private_key_hex(self) -> str:
        return "0x" + bytes(self._signing_key).hex()

    def sign(self, message: bytes) -> bytes:
        return self._signing_key.sign(message).signature

    @property
    def sequence_number(self) -> int:
        with self._lock:
            return self._sequence_number

    def set_sequence_number(self, sequence_number: int) -> None:
        with self._lock:
            self._sequence_number = sequence_number

    def increment_sequence_number(self) -> int:
        """Return the current sequence number and advance it by one."""
        with self._lock:
            current = self._sequence_number
            self._sequence_number += 1
            return current

    def sign_with_transaction_builder(
        self, txn_factory: TransactionFactory, payload: EntryFunction
    ) -> SignedTransaction:
        raw_txn = txn_factory.raw_transaction(
            self._address, self.increment_sequence_number(), payload
        )
        signature = self.sign(raw_txn.signing_message())
        return SignedTransaction(raw_txn, Ed25519Authenticator(self._public_key, signature))

    def sign_multi_agent_with_transaction_builder(
        self,
        secondary_signers: Sequence["LocalAccount"],
        txn_factory: TransactionFactory,
        payload: EntryFunction,
    ) -> SignedTransaction:
        """
        Sign a multi-agent transaction.

        Only this (primary) account consumes a sequence number; every
        signer signs the same RawTransactionWithData message.
        """
        raw_txn = txn_factory.raw_transaction(
            self._address, self.increment_sequence_number(), payload
        )
        secondary_addresses = tuple(s.address for s in secondary_signers)
        message = MultiAgentRawTransaction(raw_txn, secondary_addresses).signing_message()

        authenticator = MultiAgentAuthenticator(
            sender=Ed25519Authenticator(self._public_key, self.sign(message)),
            secondary_signer_addresses=secondary_addresses,
            secondary_signers=tuple(
                Ed25519Authenticator(s.public_key(), s.sign(message)) for s in secondary_signers
            ),
        )
        return SignedTransaction(raw_txn, authenticator)

    def __repr__(self) -> str:
        return f"LocalAccount({self._address}, seq={self.sequence_number})"


def generate_account() -> tuple[str, str]:
    """
    Generate a new Ed25519 keypair.

    Returns:
        Tuple of (private_key_hex, address)
    """
    account = LocalAccount.generate()
    return account.private_key_hex(), str(account.address)


def load_config(env_path: Optional[Path] = None) -> Path:
    """Load ~/.bulkmint/.env into the environment without overriding it."""
    env_path = env_path or BULKMINT_ENV
    if env_path.exists():
        load_dotenv(env_path, override=False)
    return env_path


def load_private_key(var: str = "PRIVATE_KEY", env_path: Optional[Path] = None) -> str:
    """
    Load a private key from the .env file or environment.

    Args:
        var: Environment variable holding the key
        env_path: Path to .env file (default: ~/.bulkmint/.env)

    Returns:
        Private key text as configured

    Raises:
        ValueError: If the variable is not set
    """
    env_path = load_config(env_path)

    private_key = os.environ.get(var)
    if not private_key:
        raise ValueError(f"{var} not found. Set {var} in {env_path} or the environment.")

    return private_key


"""
Ledger - On-chain interaction layer for bulk minting.

Provides BCS transaction types, Ed25519 signing accounts, the transaction
factory and a REST client for an Aptos fullnode.

Uses httpx + PyNaCl + construct instead of a full SDK.
"""

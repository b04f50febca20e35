from __future__ import annotations

import pytest

from bulkmint.ledger.account import LocalAccount
from bulkmint.ledger.txn import TransactionFactory


@pytest.fixture()
def txn_factory() -> TransactionFactory:
    return TransactionFactory(chain_id=4)


@pytest.fixture()
def worker() -> LocalAccount:
    return LocalAccount.generate()


@pytest.fixture()
def admin() -> LocalAccount:
    return LocalAccount.generate()

"""
Work-item files.

Destination files hold one item per line.  Only the leading tab-separated
fields are read, so the report of one run can feed the next: a mint
report (``token  collection  recipient  status``) is a valid burn input.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Union

from ..errors import ConfigurationError
from ..ledger.account import LocalAccount
from ..ledger.types import AccountAddress, AddressError
from .builders import STATUS_SUCCESS, BurnTarget, MintTarget

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class WorkFileError(ConfigurationError):
    pass


def _lines(path: PathLike, only_success: bool) -> Iterator[tuple[int, list[str]]]:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise WorkFileError(f"Cannot read work file {path}: {exc}") from exc

    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        fields = line.rstrip("\r").split("\t")
        if only_success and fields[-1].strip() != STATUS_SUCCESS:
            continue
        yield lineno, fields


def _parse(path: PathLike, lineno: int, value: str) -> AccountAddress:
    try:
        return AccountAddress.from_str(value)
    except AddressError as exc:
        raise WorkFileError(f"{path}:{lineno}: {exc}") from exc


def create_account_addresses_work(path: PathLike, only_success: bool = False) -> list[MintTarget]:
    work = [_parse(path, lineno, fields[0]) for lineno, fields in _lines(path, only_success)]
    logger.info("Loaded %d addresses from %s", len(work), path)
    return work


def create_account_address_pairs_work(path: PathLike, only_success: bool = True) -> list[BurnTarget]:
    work: list[BurnTarget] = []
    for lineno, fields in _lines(path, only_success):
        if len(fields) < 2:
            raise WorkFileError(f"{path}:{lineno}: expected two tab-separated addresses")
        work.append((_parse(path, lineno, fields[0]), _parse(path, lineno, fields[1])))
    logger.info("Loaded %d address pairs from %s", len(work), path)
    return work


def create_sample_addresses(num_addresses: int, output_file: PathLike) -> list[AccountAddress]:
    """Write ``num_addresses`` fresh random account addresses, one per line."""
    addresses = [LocalAccount.generate().address for _ in range(num_addresses)]
    Path(output_file).write_text(
        "".join(f"{address}\n" for address in addresses), encoding="utf-8"
    )
    return addresses

from __future__ import annotations

import re

from ..errors import ConfigurationError
from ..ledger.types import AccountAddress, ModuleId

# Move identifier: ASCII letter or underscore start, then letters, digits, underscores.
# A lone "_" is not a valid identifier.
_IDENTIFIER = re.compile(r"[A-Za-z][A-Za-z0-9_]*|_[A-Za-z0-9_]+")


class InvalidIdentifierError(ConfigurationError):
    """Name is not a valid Move identifier."""


def validate_identifier(name: str) -> str:
    if not _IDENTIFIER.fullmatch(name):
        raise InvalidIdentifierError(f"Invalid Move identifier: {name!r}")
    return name


def resolve_module_id(contract_address: AccountAddress, module_name: str) -> ModuleId:
    """Canonical module id for calls into ``contract_address::module_name``."""
    return ModuleId(contract_address, validate_identifier(module_name))

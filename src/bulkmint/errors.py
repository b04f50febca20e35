from __future__ import annotations


class BulkMintError(RuntimeError):
    exit_code: int = 1


class ConfigurationError(BulkMintError):
    exit_code = 2

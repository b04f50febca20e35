from __future__ import annotations

import secrets
import string

_ALPHANUMERIC = string.ascii_letters + string.digits


def rand_string(length: int) -> str:
    return "".join(secrets.choice(_ALPHANUMERIC) for _ in range(length))


def tsv_field(value: object) -> str:
    """Render a value as a single tab-separated field."""
    return " ".join(str(value).split())


def tsv_line(*fields: object) -> str:
    return "\t".join(tsv_field(f) for f in fields)

"""
Event lookup - Read dynamically created addresses back out of a transaction.

Events are the only channel through which a transaction reports the
addresses it created (collections, tokens).  A lookup expects exactly one
event of a given type and decodes its ``data`` object into a typed payload.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Sequence, TypeVar

from ..errors import BulkMintError
from ..ledger.rest import Event
from ..ledger.types import AccountAddress, AddressError

T = TypeVar("T")

MINT_EVENT_TYPE = "0x4::collection::Mint"
BURN_EVENT_TYPE = "0x4::collection::Burn"


class EventLookupError(BulkMintError):
    exit_code = 5


class EventNotFoundError(EventLookupError):
    pass


class AmbiguousEventError(EventLookupError):
    pass


class EventDecodeError(EventLookupError):
    pass


def normalize_type_tag(type_tag: str) -> str:
    """Render the leading address of ``addr::module::Name`` in standard form."""
    address, sep, rest = type_tag.partition("::")
    if not sep:
        return type_tag
    try:
        return f"{AccountAddress.from_str(address)}::{rest}"
    except AddressError:
        return type_tag


def _search_event(events: Sequence[Event], type_tag: str) -> list[Event]:
    wanted = normalize_type_tag(type_tag)
    return [e for e in events if normalize_type_tag(e.type) == wanted]


def search_single_event_data(
    events: Sequence[Event],
    type_tag: str,
    decoder: Callable[[Any], T],
) -> T:
    """
    Find exactly one event of ``type_tag`` and decode its data.

    Args:
        events: Events emitted by a committed transaction, in order
        type_tag: Fully qualified event type (``addr::module::Name``)
        decoder: Converts the event's ``data`` object into a payload

    Raises:
        EventNotFoundError: No event of that type
        AmbiguousEventError: More than one event of that type
        EventDecodeError: The event data does not have the expected shape
    """
    matching = _search_event(events, type_tag)
    if not matching:
        raise EventNotFoundError(f"Expected 1 event of type {type_tag}, found 0")
    if len(matching) > 1:
        raise AmbiguousEventError(
            f"Expected 1 event of type {type_tag}, found {len(matching)}"
        )
    return decoder(matching[0].data)


# ---------------------------------------------------------------------------
# Payload decoding
# ---------------------------------------------------------------------------

def _fields(data: Any, kind: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise EventDecodeError(f"{kind} event data is not an object")
    return data


def _address(data: dict[str, Any], key: str, kind: str) -> AccountAddress:
    value = data.get(key)
    # Object<T> fields render as {"inner": "0x..."}
    if isinstance(value, dict):
        value = value.get("inner")
    if not isinstance(value, str):
        raise EventDecodeError(f"{kind} event has no address field {key!r}")
    try:
        return AccountAddress.from_str(value)
    except AddressError as exc:
        raise EventDecodeError(f"{kind} event field {key!r}: {exc}") from exc


def _bool(data: dict[str, Any], key: str, kind: str) -> bool:
    value = data.get(key)
    if not isinstance(value, bool):
        raise EventDecodeError(f"{kind} event has no boolean field {key!r}")
    return value


@dataclass(frozen=True)
class CreateCollectionConfig:
    collection_config: AccountAddress
    collection: AccountAddress
    ready_to_mint: bool

    @classmethod
    def from_event_data(cls, data: Any) -> "CreateCollectionConfig":
        kind = "CreateCollectionConfig"
        fields = _fields(data, kind)
        return cls(
            collection_config=_address(fields, "collection_config", kind),
            collection=_address(fields, "collection", kind),
            ready_to_mint=_bool(fields, "ready_to_mint", kind),
        )


@dataclass(frozen=True)
class MintEvent:
    collection: AccountAddress
    token: AccountAddress

    @classmethod
    def from_event_data(cls, data: Any) -> "MintEvent":
        fields = _fields(data, "Mint")
        return cls(
            collection=_address(fields, "collection", "Mint"),
            token=_address(fields, "token", "Mint"),
        )


@dataclass(frozen=True)
class BurnEvent:
    collection: AccountAddress
    token: AccountAddress
    previous_owner: AccountAddress

    @classmethod
    def from_event_data(cls, data: Any) -> "BurnEvent":
        fields = _fields(data, "Burn")
        return cls(
            collection=_address(fields, "collection", "Burn"),
            token=_address(fields, "token", "Burn"),
            previous_owner=_address(fields, "previous_owner", "Burn"),
        )


def get_mint_token_addr(events: Sequence[Event]) -> AccountAddress:
    return search_single_event_data(events, MINT_EVENT_TYPE, MintEvent.from_event_data).token


def get_burn_event(events: Sequence[Event]) -> BurnEvent:
    return search_single_event_data(events, BURN_EVENT_TYPE, BurnEvent.from_event_data)

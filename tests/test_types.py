"""Unit tests for ledger types and BCS argument encoding."""

from __future__ import annotations

import hashlib

import pytest

from bulkmint.ledger.txn import TransactionFactory
from bulkmint.ledger.types import (
    AccountAddress,
    AddressError,
    EntryFunction,
    ModuleId,
    MultiAgentRawTransaction,
    RawTransactionLayout,
    bcs_address,
    bcs_bool,
    bcs_option_u64,
    bcs_string,
    bcs_string_vector,
    bcs_u64,
    bcs_u64_vector,
)

from ledger_fakes import CONTRACT, addr


# ============ Addresses ============


class TestAccountAddress:
    def test_short_and_long_forms_are_equal(self) -> None:
        assert AccountAddress.from_str("0x1") == AccountAddress.from_str("0x" + "0" * 63 + "1")

    def test_bare_hex_accepted(self) -> None:
        assert AccountAddress.from_str("c0ffee") == CONTRACT

    def test_special_addresses_render_short(self) -> None:
        assert str(AccountAddress.from_str("0x4")) == "0x4"
        assert str(AccountAddress.from_str("0x000f")) == "0xf"

    def test_other_addresses_render_long(self) -> None:
        text = str(AccountAddress.from_str("0x10"))
        assert text == "0x" + "0" * 62 + "10"
        assert len(text) == 66

    def test_str_round_trips(self) -> None:
        a = addr(0xABCDEF)
        assert AccountAddress.from_str(str(a)) == a

    @pytest.mark.parametrize("text", ["", "0x", "0xzz", "0x" + "1" * 65, "not an address"])
    def test_invalid_addresses(self, text: str) -> None:
        with pytest.raises(AddressError):
            AccountAddress.from_str(text)

    def test_wrong_length_bytes(self) -> None:
        with pytest.raises(AddressError):
            AccountAddress(b"\x01" * 31)

    def test_address_error_is_configuration_error(self) -> None:
        from bulkmint.errors import ConfigurationError

        assert issubclass(AddressError, ConfigurationError)

    def test_module_id_str(self) -> None:
        assert str(ModuleId(AccountAddress.from_str("0x1"), "coin")) == "0x1::coin"


# ============ Argument encoders ============


class TestArgumentEncoding:
    def test_address_is_raw_32_bytes(self) -> None:
        assert bcs_address(addr(1)) == b"\x00" * 31 + b"\x01"

    def test_bool(self) -> None:
        assert bcs_bool(True) == b"\x01"
        assert bcs_bool(False) == b"\x00"

    def test_u64_little_endian(self) -> None:
        assert bcs_u64(1) == b"\x01" + b"\x00" * 7
        assert bcs_u64(1_000_000) == (1_000_000).to_bytes(8, "little")

    def test_string_is_length_prefixed_utf8(self) -> None:
        assert bcs_string("abc") == b"\x03abc"
        assert bcs_string("é") == b"\x02\xc3\xa9"

    def test_long_string_uses_uleb128_length(self) -> None:
        encoded = bcs_string("x" * 200)
        assert encoded[:2] == b"\xc8\x01"
        assert len(encoded) == 202

    def test_string_vector(self) -> None:
        assert bcs_string_vector(["a", "bc"]) == b"\x02\x01a\x02bc"

    def test_u64_vector(self) -> None:
        assert bcs_u64_vector([10, 1]) == b"\x02" + bcs_u64(10) + bcs_u64(1)

    def test_option_none_is_empty_vector(self) -> None:
        assert bcs_option_u64(None) == b"\x00"

    def test_option_some_is_single_element_vector(self) -> None:
        assert bcs_option_u64(7) == b"\x01" + bcs_u64(7)


# ============ Transactions ============


class TestRawTransaction:
    def _raw(self, txn_factory: TransactionFactory):
        payload = EntryFunction(
            ModuleId(CONTRACT, "only_on_aptos"),
            "mint_to_recipient",
            (bcs_address(addr(2)), bcs_address(addr(3))),
        )
        return txn_factory.raw_transaction(addr(9), 5, payload, now=1_700_000_000)

    def test_expiration_from_factory(self, txn_factory: TransactionFactory) -> None:
        raw = self._raw(txn_factory)
        assert raw.expiration_timestamp_secs == 1_700_000_000 + txn_factory.expiration_secs
        assert raw.chain_id == 4

    def test_bcs_layout(self, txn_factory: TransactionFactory) -> None:
        raw = self._raw(txn_factory)
        parsed = RawTransactionLayout.parse(raw.to_bcs())

        assert parsed.sender == addr(9).value
        assert parsed.sequence_number == 5
        assert parsed.payload.module.address == CONTRACT.value
        assert parsed.payload.module.name == "only_on_aptos"
        assert parsed.payload.function == "mint_to_recipient"
        assert list(parsed.payload.args) == [addr(2).value, addr(3).value]
        assert parsed.max_gas_amount == txn_factory.max_gas_amount
        assert parsed.gas_unit_price == txn_factory.gas_unit_price
        assert parsed.chain_id == 4

    def test_entry_function_variant_tag(self, txn_factory: TransactionFactory) -> None:
        encoded = self._raw(txn_factory).to_bcs()
        # sender, sequence number, then TransactionPayload::EntryFunction
        assert encoded[40:41] == b"\x02"

    def test_signing_message_prefix(self, txn_factory: TransactionFactory) -> None:
        raw = self._raw(txn_factory)
        prefix = hashlib.sha3_256(b"APTOS::RawTransaction").digest()
        assert raw.signing_message() == prefix + raw.to_bcs()

    def test_multi_agent_signing_message(self, txn_factory: TransactionFactory) -> None:
        raw = self._raw(txn_factory)
        message = MultiAgentRawTransaction(raw, (addr(7),)).signing_message()
        prefix = hashlib.sha3_256(b"APTOS::RawTransactionWithData").digest()
        assert message == prefix + b"\x00" + raw.to_bcs() + b"\x01" + addr(7).value


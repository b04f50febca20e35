"""
CLI integration tests using Click's test runner.

Tests verify that the CLI commands work end-to-end via the Click
CliRunner, with the fullnode replaced by an in-memory ledger.
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from bulkmint.cli import cli
from bulkmint.ledger.account import generate_account
from bulkmint.ledger.rest import LedgerError
from bulkmint.workloads.events import BURN_EVENT_TYPE, MINT_EVENT_TYPE

from ledger_fakes import COLLECTION, CONTRACT, FakeLedgerClient, addr, event, outcome


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def bulkmint_home(tmp_path: Path) -> Path:
    """Create a temporary ~/.bulkmint directory."""
    home = tmp_path / ".bulkmint"
    home.mkdir()
    return home


@pytest.fixture()
def keys(bulkmint_home: Path):
    """Worker and admin keys saved to the temp bulkmint home."""
    worker_key, worker_address = generate_account()
    admin_key, admin_address = generate_account()
    (bulkmint_home / ".env").write_text(
        f"PRIVATE_KEY={worker_key}\nADMIN_PRIVATE_KEY={admin_key}\n", encoding="utf-8"
    )
    with patch("bulkmint.ledger.account.BULKMINT_ENV", bulkmint_home / ".env"):
        with patch.dict(os.environ, {}, clear=True):
            yield {"worker": worker_address, "admin": admin_address}


def _with_ledger(client: FakeLedgerClient):
    return patch("bulkmint.commands.common.LedgerSettings.client", return_value=client)


class TestVersionAndHelp:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("create-collection", "submit", "create-sample-addresses", "whoami"):
            assert name in result.output


class TestWhoami:
    """Test key identity display."""

    def test_whoami_with_keys(self, runner: CliRunner, keys: dict) -> None:
        result = runner.invoke(cli, ["whoami"])
        assert result.exit_code == 0
        assert keys["worker"] in result.output
        assert keys["admin"] in result.output

    def test_whoami_without_keys(self, runner: CliRunner, bulkmint_home: Path) -> None:
        with patch("bulkmint.ledger.account.BULKMINT_ENV", bulkmint_home / ".env"):
            with patch.dict(os.environ, {}, clear=True):
                result = runner.invoke(cli, ["whoami"])
        assert result.exit_code == 1
        assert "No keys configured" in result.output


class TestCreateSampleAddresses:
    def test_writes_file(self, runner: CliRunner, tmp_path: Path) -> None:
        out = tmp_path / "destinations.txt"
        result = runner.invoke(cli, ["create-sample-addresses", "--num-addresses", "3", "--output-file", str(out)])
        assert result.exit_code == 0
        assert len(out.read_text(encoding="utf-8").splitlines()) == 3

    def test_rejects_zero(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            cli, ["create-sample-addresses", "--num-addresses", "0", "--output-file", str(tmp_path / "x")]
        )
        assert result.exit_code == 2


class TestCreateCollection:
    def test_prints_collection_config(self, runner: CliRunner, keys: dict) -> None:
        config_event = event(
            f"{CONTRACT}::only_on_aptos::CreateCollectionConfig",
            {"collection_config": str(addr(0xC2)), "collection": str(COLLECTION), "ready_to_mint": False},
        )
        client = FakeLedgerClient(
            lambda s: outcome([config_event] if s.payload.function == "create_collection" else [])
        )

        with _with_ledger(client):
            result = runner.invoke(cli, ["create-collection", "--contract-address", str(CONTRACT)])

        assert result.exit_code == 0, result.output
        assert result.stdout.strip().splitlines()[-1] == str(addr(0xC2))
        assert [s.payload.function for s in client.submitted] == ["create_collection", "set_minting_status"]
        assert all(str(s.sender) == keys["admin"] for s in client.submitted)

    def test_missing_event_exit_code(self, runner: CliRunner, keys: dict) -> None:
        client = FakeLedgerClient(lambda s: outcome([]))

        with _with_ledger(client):
            result = runner.invoke(cli, ["create-collection", "--contract-address", str(CONTRACT)])

        assert result.exit_code == 5
        assert "found 0" in result.output

    def test_bad_contract_address(self, runner: CliRunner, keys: dict) -> None:
        result = runner.invoke(cli, ["create-collection", "--contract-address", "0xnope"])
        assert result.exit_code == 2


class TestSubmit:
    def test_nft_mint_report(self, runner: CliRunner, keys: dict, tmp_path: Path) -> None:
        destinations = tmp_path / "destinations.txt"
        destinations.write_text(f"{addr(0xA1)}\n{addr(0xA2)}\n", encoding="utf-8")
        report = tmp_path / "minted.tsv"

        def responder(signed):
            if signed.payload.args[1] == addr(0xA2).value:
                raise LedgerError("Transaction submission failed: HTTP 500", status_code=500)
            return outcome([event(MINT_EVENT_TYPE, {"collection": str(COLLECTION), "token": str(addr(0xFF))})])

        with _with_ledger(FakeLedgerClient(responder)):
            result = runner.invoke(
                cli,
                [
                    "submit",
                    "--output-file",
                    str(report),
                    "nft-mint",
                    "--contract-address",
                    str(CONTRACT),
                    "--collection-address",
                    str(COLLECTION),
                    "--destinations-file",
                    str(destinations),
                ],
            )

        assert result.exit_code == 0, result.output
        assert report.read_text(encoding="utf-8").splitlines() == [
            f"{addr(0xFF)}\t{COLLECTION}\t{addr(0xA1)}\tsuccess",
            f"\t{COLLECTION}\t{addr(0xA2)}\tmissing",
        ]
        assert "1/2 succeeded" in result.output

    def test_nft_burn_reads_mint_report(self, runner: CliRunner, keys: dict, tmp_path: Path) -> None:
        mint_report = tmp_path / "minted.tsv"
        mint_report.write_text(
            f"{addr(0xFF)}\t{COLLECTION}\t{addr(0xA1)}\tsuccess\n\t{COLLECTION}\t{addr(0xA2)}\tmissing\n",
            encoding="utf-8",
        )
        client = FakeLedgerClient(
            lambda s: outcome(
                [event(BURN_EVENT_TYPE, {"collection": str(COLLECTION), "token": str(addr(0xFF)), "previous_owner": str(s.sender)})],
                sender=s.sender,
            )
        )

        with _with_ledger(client):
            result = runner.invoke(
                cli,
                [
                    "submit",
                    "nft-burn",
                    "--contract-address",
                    str(CONTRACT),
                    "--destinations-file",
                    str(mint_report),
                ],
            )

        assert result.exit_code == 0, result.output
        assert f"{keys['worker']}\t{addr(0xFF)}\t{COLLECTION}\tsuccess" in result.stdout
        (signed,) = client.submitted
        assert [str(a) for a in signed.authenticator.secondary_signer_addresses] == [keys["admin"]]

    def test_missing_private_key(self, runner: CliRunner, bulkmint_home: Path, tmp_path: Path) -> None:
        destinations = tmp_path / "destinations.txt"
        destinations.write_text("0x1\n", encoding="utf-8")

        with patch("bulkmint.ledger.account.BULKMINT_ENV", bulkmint_home / ".env"):
            with patch.dict(os.environ, {}, clear=True):
                with _with_ledger(FakeLedgerClient(lambda s: outcome([]))):
                    result = runner.invoke(
                        cli,
                        [
                            "submit",
                            "nft-mint",
                            "--contract-address",
                            str(CONTRACT),
                            "--collection-address",
                            str(COLLECTION),
                            "--destinations-file",
                            str(destinations),
                        ],
                    )

        assert result.exit_code == 1
        assert "PRIVATE_KEY not found" in result.output

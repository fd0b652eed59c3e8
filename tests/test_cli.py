"""Fixture inspector CLI."""

from __future__ import annotations

import json

from click.testing import CliRunner

from token_fuzzer.addrgen import AddressGenerator
from token_fuzzer.cli import cli
from token_fuzzer.config import FixtureConfig
from token_fuzzer.env import Env, LedgerStore
from token_fuzzer.state_digest import compute_state_digest
from token_fuzzer.types import AddressType


def _run(*args: str):
    return CliRunner().invoke(cli, list(args))


def test_signers_json() -> None:
    result = _run("signers", "--seed", "1000", "--types", "account,contract")
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["generator"] == {"address_seed": 1000, "address_types": ["account", "contract"]}
    first, second = data["signers"]
    assert first["kind"] == "account" and first["address"].startswith("G")
    assert first["fingerprint"].endswith((1000).to_bytes(8, "big").hex())
    assert second["kind"] == "contract" and second["public_key"] is None


def test_setup_digest_matches_library() -> None:
    result = _run("setup", "--seed", "77", "--types", "account,account,contract", "--digest-only")
    assert result.exit_code == 0, result.output

    store = LedgerStore()
    generator = AddressGenerator(77, (AddressType.ACCOUNT, AddressType.ACCOUNT, AddressType.CONTRACT))
    generator.setup_account_storage(Env(store))
    assert result.output.strip() == compute_state_digest(store.items())


def test_setup_yaml_lists_entries() -> None:
    result = _run("setup", "--seed", "12", "--types", "account", "--format", "yaml")
    assert result.exit_code == 0, result.output
    assert "state_digest:" in result.output
    assert "trustline:" in result.output


def test_setup_writes_output_dir(tmp_path) -> None:
    result = _run("--output", str(tmp_path), "setup", "--seed", "12", "--types", "account")
    assert result.exit_code == 0, result.output
    data = json.loads((tmp_path / "setup.json").read_text())
    assert len(data["entries"]) == 2


def test_seed_above_bound_rejected() -> None:
    result = _run("signers", "--seed", str((1 << 64) - 2), "--types", "account,account")
    assert result.exit_code == 2


def test_unknown_type_rejected() -> None:
    result = _run("signers", "--seed", "3", "--types", "account,wallet")
    assert result.exit_code == 2


def test_reject_degenerate() -> None:
    result = _run("--reject-degenerate", "signers", "--seed", "0", "--types", "contract")
    assert result.exit_code == 1
    assert "DEGENERATE_SEED" in result.output

    result = _run("signers", "--seed", "0", "--types", "contract")
    assert result.exit_code == 0


def test_decode_hex() -> None:
    data = (1000).to_bytes(8, "big") + b"\x00" * 4 + b"\xff" * 4
    result = _run("decode", data.hex(), "--count", "2")
    assert result.exit_code == 0, result.output
    decoded = json.loads(result.output)
    assert decoded["generator"] == {"address_seed": 1000, "address_types": ["account", "contract"]}


def test_decode_rejects_non_hex() -> None:
    result = _run("decode", "zz")
    assert result.exit_code == 2


def test_config_from_env(monkeypatch) -> None:
    monkeypatch.setenv("TOKEN_FUZZ_VERBOSE", "yes")
    monkeypatch.setenv("TOKEN_FUZZ_REJECT_DEGENERATE", "0")
    monkeypatch.setenv("TOKEN_FUZZ_OUTPUT_DIR", "/tmp/fixtures")
    config = FixtureConfig.from_env()
    assert config.verbose is True
    assert config.reject_degenerate is False
    assert config.output_dir == "/tmp/fixtures"


def test_env_reject_degenerate(monkeypatch) -> None:
    monkeypatch.setenv("TOKEN_FUZZ_REJECT_DEGENERATE", "1")
    result = _run("signers", "--seed", "0", "--types", "account,contract")
    assert result.exit_code == 1


def test_decode_rejects_out_of_range_count() -> None:
    for count in ("0", str(1 << 65)):
        result = _run("decode", "00", "--count", count)
        assert result.exit_code == 2, result.output


def test_setup_writes_yaml_file(tmp_path) -> None:
    result = _run("--output", str(tmp_path), "setup", "--seed", "12", "--types", "account", "--format", "yaml")
    assert result.exit_code == 0, result.output
    assert "state_digest:" in (tmp_path / "setup.yaml").read_text()

"""JSON views of generators, signers and ledger entries."""

from __future__ import annotations

import pytest

from token_fuzzer.addrgen import AddressGenerator
from token_fuzzer.errors import ErrorCode, FixtureError
from token_fuzzer.fixtures_io import (
    entries_to_json,
    generator_from_json,
    generator_to_json,
    signer_to_json,
)
from token_fuzzer.types import AddressType


def test_generator_json_round_trip() -> None:
    generator = AddressGenerator(31, (AddressType.CONTRACT, AddressType.ACCOUNT))
    assert generator_from_json(generator_to_json(generator)) == generator


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"address_seed": 1},
        {"address_seed": "x", "address_types": []},
        {"address_seed": 1, "address_types": ["wallet"]},
    ],
)
def test_generator_from_json_rejects_bad_input(data) -> None:
    with pytest.raises(FixtureError) as exc:
        generator_from_json(data)
    assert exc.value.code == ErrorCode.INVALID_FORMAT


def test_signer_json_exposes_secret_seed(env) -> None:
    account, contract = AddressGenerator(1000, (AddressType.ACCOUNT, AddressType.CONTRACT)).derive_signers(env)
    out = signer_to_json(account)
    assert out["secret_seed"] == account.fingerprint.hex()
    assert out["public_key"] == account.public_key.hex()
    assert signer_to_json(contract)["secret_seed"] is None


def test_entries_json(env, store) -> None:
    AddressGenerator(1000, (AddressType.ACCOUNT,)).setup_account_storage(env)
    entries = entries_to_json(store.items())
    assert [e["key"]["type"] for e in entries] == ["account", "trustline"]
    account = entries[0]["entry"]["account"]
    assert account["thresholds"] == [1, 0, 0, 0]
    assert account["signers"][0]["weight"] == 100
    trustline = entries[1]["entry"]["trustline"]
    assert trustline["asset"] == {"code": "aaa", "issuer": (bytes(31) + b"\x01").hex()}
    assert trustline["flags"] == 5

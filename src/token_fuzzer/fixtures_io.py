"""Helpers to serialize/deserialize fixture data as plain JSON values."""

from __future__ import annotations

from typing import Any, Iterable, Tuple

from .addrgen import AddressGenerator
from .errors import ErrorCode, FixtureError
from .types import (
    AccountEntry,
    AddressType,
    AlphaNum4,
    DerivedSigner,
    LedgerEntry,
    LedgerKey,
    LedgerKeyAccount,
    TrustLineEntry,
)
from .xdr import encode_ledger_entry, encode_ledger_key


def _bytes_to_hex(v: bytes) -> str:
    return v.hex()


def generator_to_json(generator: AddressGenerator) -> dict[str, Any]:
    return {
        "address_seed": generator.address_seed,
        "address_types": [t.value for t in generator.address_types],
    }


def generator_from_json(data: dict[str, Any]) -> AddressGenerator:
    try:
        seed = int(data["address_seed"])
        types = tuple(AddressType(t) for t in data["address_types"])
    except (KeyError, TypeError, ValueError) as exc:
        raise FixtureError(ErrorCode.INVALID_FORMAT, f"bad address generator: {exc}") from exc
    return AddressGenerator(address_seed=seed, address_types=types)


def signer_to_json(signer: DerivedSigner) -> dict[str, Any]:
    public_key = signer.public_key
    return {
        "address": signer.address.to_strkey(),
        "kind": "account" if signer.address.is_account else "contract",
        "fingerprint": _bytes_to_hex(signer.fingerprint),
        "public_key": _bytes_to_hex(public_key) if public_key is not None else None,
        "secret_seed": _bytes_to_hex(bytes(signer.key)) if signer.key is not None else None,
    }


def _asset_to_json(asset: AlphaNum4) -> dict[str, Any]:
    return {
        "code": asset.asset_code.rstrip(b"\x00").decode("ascii"),
        "issuer": _bytes_to_hex(asset.issuer.ed25519),
    }


def key_to_json(key: LedgerKey) -> dict[str, Any]:
    if isinstance(key, LedgerKeyAccount):
        return {"type": "account", "account_id": _bytes_to_hex(key.account_id.ed25519)}
    return {
        "type": "trustline",
        "account_id": _bytes_to_hex(key.account_id.ed25519),
        "asset": _asset_to_json(key.asset),
    }


def entry_to_json(entry: LedgerEntry) -> dict[str, Any]:
    data = entry.data
    out: dict[str, Any] = {"last_modified_ledger_seq": entry.last_modified_ledger_seq}
    if isinstance(data, AccountEntry):
        out["account"] = {
            "account_id": _bytes_to_hex(data.account_id.ed25519),
            "balance": data.balance,
            "seq_num": data.seq_num,
            "num_sub_entries": data.num_sub_entries,
            "flags": data.flags,
            "thresholds": list(data.thresholds.values),
            "signers": [
                {"key": _bytes_to_hex(s.key), "weight": s.weight} for s in data.signers
            ],
        }
    elif isinstance(data, TrustLineEntry):
        out["trustline"] = {
            "account_id": _bytes_to_hex(data.account_id.ed25519),
            "asset": _asset_to_json(data.asset),
            "balance": data.balance,
            "limit": data.limit,
            "flags": data.flags,
        }
    return out


def entries_to_json(entries: Iterable[Tuple[LedgerKey, LedgerEntry]]) -> list[dict[str, Any]]:
    return [
        {
            "key": key_to_json(key),
            "entry": entry_to_json(entry),
            "key_xdr": _bytes_to_hex(encode_ledger_key(key)),
            "entry_xdr": _bytes_to_hex(encode_ledger_entry(entry)),
        }
        for key, entry in entries
    ]

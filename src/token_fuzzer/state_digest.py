"""Canonical digests of generated fixtures."""
from __future__ import annotations

from typing import Iterable, Tuple

from blake3 import blake3

from .types import DerivedSigner, LedgerEntry, LedgerKey
from .xdr import encode_ledger_entry, encode_ledger_key, encode_sc_address


def _u32_be(value: int) -> bytes:
    return int(value).to_bytes(4, "big", signed=False)


def compute_state_digest(entries: Iterable[Tuple[LedgerKey, LedgerEntry]]) -> str:
    """BLAKE3-256 over ledger entries sorted by their encoded key.

    Each entry contributes ``len(key) || key || len(entry) || entry``.
    """
    encoded = sorted(
        (encode_ledger_key(key), encode_ledger_entry(entry)) for key, entry in entries
    )
    buf = bytearray()
    for key_xdr, entry_xdr in encoded:
        buf += _u32_be(len(key_xdr))
        buf += key_xdr
        buf += _u32_be(len(entry_xdr))
        buf += entry_xdr
    return blake3(buf).hexdigest()


def compute_signers_digest(signers: Iterable[DerivedSigner]) -> str:
    """BLAKE3-256 over signers in derivation order."""
    buf = bytearray()
    for signer in signers:
        buf += signer.fingerprint
        buf += encode_sc_address(signer.address.sc_address)
        buf += signer.public_key or b""
    return blake3(buf).hexdigest()

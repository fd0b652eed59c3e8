"""XDR encoding for the ledger types used by the fixtures (minimal subset)."""

from __future__ import annotations

from dataclasses import dataclass, field

from .config import MAX_HOME_DOMAIN_SIZE
from .errors import ErrorCode, FixtureError
from .types import (
    AccountEntry,
    AccountId,
    AlphaNum4,
    AssetType,
    LedgerEntry,
    LedgerEntryType,
    LedgerKey,
    LedgerKeyAccount,
    LedgerKeyTrustLine,
    PublicKeyType,
    ScAddress,
    Signer,
    SignerKeyType,
    TrustLineEntry,
)


@dataclass
class Writer:
    buf: bytearray = field(default_factory=bytearray)

    def write_u32(self, v: int) -> None:
        self.buf.extend(int(v).to_bytes(4, "big", signed=False))

    def write_i32(self, v: int) -> None:
        self.buf.extend(int(v).to_bytes(4, "big", signed=True))

    def write_i64(self, v: int) -> None:
        self.buf.extend(int(v).to_bytes(8, "big", signed=True))

    def write_bool(self, v: bool) -> None:
        self.write_u32(1 if v else 0)

    def write_fixed(self, b: bytes, size: int) -> None:
        _expect_len("opaque", b, size)
        self.buf.extend(b)
        self._pad(size)

    def write_var(self, b: bytes, max_size: int) -> None:
        if len(b) > max_size:
            raise FixtureError(ErrorCode.INVALID_FORMAT, f"opaque exceeds {max_size} bytes")
        self.write_u32(len(b))
        self.buf.extend(b)
        self._pad(len(b))

    def _pad(self, size: int) -> None:
        self.buf.extend(b"\x00" * (-size % 4))

    def getvalue(self) -> bytes:
        return bytes(self.buf)


def _expect_len(name: str, value: bytes, size: int) -> None:
    if len(value) != size:
        raise FixtureError(ErrorCode.INVALID_FORMAT, f"{name} must be {size} bytes")


def _write_account_id(w: Writer, account_id: AccountId) -> None:
    w.write_i32(PublicKeyType.ED25519)
    w.write_fixed(account_id.ed25519, 32)


def _write_asset(w: Writer, asset: AlphaNum4) -> None:
    w.write_i32(AssetType.CREDIT_ALPHANUM4)
    w.write_fixed(asset.asset_code, 4)
    _write_account_id(w, asset.issuer)


def _write_signer(w: Writer, signer: Signer) -> None:
    w.write_i32(SignerKeyType.ED25519)
    w.write_fixed(signer.key, 32)
    w.write_u32(signer.weight)


def _write_account_entry(w: Writer, entry: AccountEntry) -> None:
    _write_account_id(w, entry.account_id)
    w.write_i64(entry.balance)
    w.write_i64(entry.seq_num)
    w.write_u32(entry.num_sub_entries)
    w.write_bool(entry.inflation_dest is not None)
    if entry.inflation_dest is not None:
        _write_account_id(w, entry.inflation_dest)
    w.write_u32(entry.flags)
    w.write_var(entry.home_domain, MAX_HOME_DOMAIN_SIZE)
    w.write_fixed(entry.thresholds.to_bytes(), 4)
    w.write_u32(len(entry.signers))
    for signer in entry.signers:
        _write_signer(w, signer)
    w.write_i32(0)  # ext v0


def _write_trustline_entry(w: Writer, entry: TrustLineEntry) -> None:
    _write_account_id(w, entry.account_id)
    _write_asset(w, entry.asset)
    w.write_i64(entry.balance)
    w.write_i64(entry.limit)
    w.write_u32(entry.flags)
    w.write_i32(0)  # ext v0


def encode_sc_address(address: ScAddress) -> bytes:
    w = Writer()
    w.write_i32(address.kind)
    if address.account_id is not None:
        _write_account_id(w, address.account_id)
    else:
        w.write_fixed(address.value, 32)
    return w.getvalue()


def encode_ledger_key(key: LedgerKey) -> bytes:
    w = Writer()
    if isinstance(key, LedgerKeyAccount):
        w.write_i32(LedgerEntryType.ACCOUNT)
        _write_account_id(w, key.account_id)
    elif isinstance(key, LedgerKeyTrustLine):
        w.write_i32(LedgerEntryType.TRUSTLINE)
        _write_account_id(w, key.account_id)
        _write_asset(w, key.asset)
    else:
        raise FixtureError(ErrorCode.INVALID_TYPE, f"unsupported ledger key {type(key).__name__}")
    return w.getvalue()


def encode_ledger_entry(entry: LedgerEntry) -> bytes:
    w = Writer()
    w.write_u32(entry.last_modified_ledger_seq)
    data = entry.data
    if isinstance(data, AccountEntry):
        w.write_i32(LedgerEntryType.ACCOUNT)
        _write_account_entry(w, data)
    elif isinstance(data, TrustLineEntry):
        w.write_i32(LedgerEntryType.TRUSTLINE)
        _write_trustline_entry(w, data)
    else:
        raise FixtureError(ErrorCode.INVALID_TYPE, f"unsupported ledger entry {type(data).__name__}")
    w.write_i32(0)  # ext v0
    return w.getvalue()

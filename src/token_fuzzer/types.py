"""Core types for the token fuzz fixture generator.

Ledger types mirror the subset of the ledger XDR schema needed to make a
generated account look like a real, authorized token holder: accounts,
trust lines and the keys they are stored under.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum, IntFlag
from typing import Optional, Tuple, Union

from nacl.signing import SigningKey

from .errors import ErrorCode, FixtureError


class AddressType(Enum):
    ACCOUNT = "account"
    CONTRACT = "contract"


class PublicKeyType(IntEnum):
    ED25519 = 0


class SignerKeyType(IntEnum):
    ED25519 = 0


class ScAddressType(IntEnum):
    ACCOUNT = 0
    CONTRACT = 1


class AssetType(IntEnum):
    NATIVE = 0
    CREDIT_ALPHANUM4 = 1
    CREDIT_ALPHANUM12 = 2


class LedgerEntryType(IntEnum):
    ACCOUNT = 0
    TRUSTLINE = 1


class TrustLineFlags(IntFlag):
    AUTHORIZED = 0x1
    AUTHORIZED_TO_MAINTAIN_LIABILITIES = 0x2
    TRUSTLINE_CLAWBACK_ENABLED = 0x4


# --- Addresses ---


@dataclass(frozen=True)
class AccountId:
    ed25519: bytes


@dataclass(frozen=True)
class ScAddress:
    kind: ScAddressType
    # Ed25519 public key for accounts, contract hash for contracts
    value: bytes

    @classmethod
    def account(cls, public_key: bytes) -> "ScAddress":
        return cls(ScAddressType.ACCOUNT, bytes(public_key))

    @classmethod
    def contract(cls, contract_id: bytes) -> "ScAddress":
        return cls(ScAddressType.CONTRACT, bytes(contract_id))

    @property
    def account_id(self) -> Optional[AccountId]:
        if self.kind == ScAddressType.ACCOUNT:
            return AccountId(self.value)
        return None


@dataclass(frozen=True)
class Address:
    """Identity handle usable as a transaction actor."""
    sc_address: ScAddress

    @property
    def is_account(self) -> bool:
        return self.sc_address.kind == ScAddressType.ACCOUNT

    def to_strkey(self) -> str:
        from .strkey import encode_sc_address

        return encode_sc_address(self.sc_address)

    @classmethod
    def from_strkey(cls, text: str) -> "Address":
        from .strkey import decode_sc_address

        return cls(decode_sc_address(text))

    def __str__(self) -> str:
        return self.to_strkey()


# --- Derived identities ---


@dataclass(frozen=True)
class DerivedSigner:
    address: Address
    key: Optional[SigningKey]
    fingerprint: bytes

    @property
    def public_key(self) -> Optional[bytes]:
        if self.key is None:
            return None
        return self.key.verify_key.encode()

    def sign(self, message: bytes) -> bytes:
        """Detached Ed25519 signature over ``message``."""
        if self.key is None:
            raise FixtureError(ErrorCode.NOT_KEY_BACKED, f"{self.address} has no signing key")
        return self.key.sign(message).signature


# --- Ledger entries ---


@dataclass(frozen=True)
class Signer:
    key: bytes
    weight: int


@dataclass(frozen=True)
class Thresholds:
    values: Tuple[int, int, int, int]

    @property
    def low(self) -> int:
        # Slot 0 gates single-signer authorization
        return self.values[0]

    def to_bytes(self) -> bytes:
        return bytes(self.values)


@dataclass(frozen=True)
class AlphaNum4:
    asset_code: bytes
    issuer: AccountId


@dataclass(frozen=True)
class AccountEntry:
    account_id: AccountId
    balance: int
    seq_num: int
    num_sub_entries: int
    thresholds: Thresholds
    signers: Tuple[Signer, ...]
    inflation_dest: Optional[AccountId] = None
    flags: int = 0
    home_domain: bytes = b""


@dataclass(frozen=True)
class TrustLineEntry:
    account_id: AccountId
    asset: AlphaNum4
    balance: int
    limit: int
    flags: int


@dataclass(frozen=True)
class LedgerEntry:
    last_modified_ledger_seq: int
    data: Union[AccountEntry, TrustLineEntry]

    @property
    def entry_type(self) -> LedgerEntryType:
        if isinstance(self.data, AccountEntry):
            return LedgerEntryType.ACCOUNT
        return LedgerEntryType.TRUSTLINE


@dataclass(frozen=True)
class LedgerKeyAccount:
    account_id: AccountId


@dataclass(frozen=True)
class LedgerKeyTrustLine:
    account_id: AccountId
    asset: AlphaNum4


LedgerKey = Union[LedgerKeyAccount, LedgerKeyTrustLine]

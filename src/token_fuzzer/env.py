"""Explicit test environment: address derivation plus a ledger store."""

from __future__ import annotations

from typing import Dict, Iterator, Optional, Protocol, Tuple

from .errors import ErrorCode, FixtureError
from .types import (
    AccountEntry,
    Address,
    LedgerEntry,
    LedgerKey,
    LedgerKeyAccount,
    LedgerKeyTrustLine,
    ScAddress,
    TrustLineEntry,
)


class LedgerStorage(Protocol):
    def put(self, key: LedgerKey, entry: LedgerEntry) -> None:
        ...


def ledger_key(entry: LedgerEntry) -> LedgerKey:
    """The key an entry is stored under."""
    data = entry.data
    if isinstance(data, AccountEntry):
        return LedgerKeyAccount(account_id=data.account_id)
    if isinstance(data, TrustLineEntry):
        return LedgerKeyTrustLine(account_id=data.account_id, asset=data.asset)
    raise FixtureError(ErrorCode.INVALID_TYPE, f"unsupported ledger entry {type(data).__name__}")


class LedgerStore:
    """In-memory ledger entry map.

    ``put`` rejects an entry whose own key does not match the key it is
    stored under, so a store never holds an entry it cannot find again.
    """

    def __init__(self) -> None:
        self._entries: Dict[LedgerKey, LedgerEntry] = {}

    def put(self, key: LedgerKey, entry: LedgerEntry) -> None:
        if ledger_key(entry) != key:
            raise FixtureError(ErrorCode.INVALID_FORMAT, "ledger key does not match entry")
        self._entries[key] = entry

    def get(self, key: LedgerKey) -> Optional[LedgerEntry]:
        return self._entries.get(key)

    def items(self) -> Iterator[Tuple[LedgerKey, LedgerEntry]]:
        return iter(self._entries.items())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class Env:
    """Environment handed explicitly to derivation and fixture setup."""

    def __init__(self, storage: Optional[LedgerStorage] = None):
        self.storage = storage if storage is not None else LedgerStore()

    def account_address(self, public_key: bytes) -> Address:
        return Address(ScAddress.account(public_key))

    def contract_address(self, contract_id: bytes) -> Address:
        return Address(ScAddress.contract(contract_id))

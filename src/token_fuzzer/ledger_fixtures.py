"""Minimal ledger state backing key-backed test identities.

Each account signer gets an account entry it can authorize alone and an
authorized trust line for the default asset. Contract signers get nothing.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Tuple, Union

from nacl.signing import SigningKey, VerifyKey

from .config import (
    DEFAULT_ACCOUNT_BALANCE,
    DEFAULT_ASSET_CODE,
    DEFAULT_ISSUER,
    DEFAULT_NUM_SUB_ENTRIES,
    DEFAULT_SEQ_NUM,
    DEFAULT_SIGNER_WEIGHT,
    DEFAULT_THRESHOLDS,
    DEFAULT_TRUSTLINE_BALANCE,
    DEFAULT_TRUSTLINE_LIMIT,
    LAST_MODIFIED_LEDGER_SEQ,
    MAX_SIGNER_WEIGHT,
    MAX_SIGNERS,
)
from .env import LedgerStorage, ledger_key
from .errors import ErrorCode, FixtureError, err
from .types import (
    AccountEntry,
    AccountId,
    AlphaNum4,
    DerivedSigner,
    LedgerEntry,
    LedgerKey,
    Signer,
    Thresholds,
    TrustLineEntry,
    TrustLineFlags,
)

logger = logging.getLogger(__name__)

SignerKey = Union[SigningKey, VerifyKey, bytes]

DEFAULT_TRUSTLINE_FLAGS = int(
    TrustLineFlags.AUTHORIZED | TrustLineFlags.TRUSTLINE_CLAWBACK_ENABLED
)


def default_asset() -> AlphaNum4:
    return AlphaNum4(asset_code=DEFAULT_ASSET_CODE, issuer=AccountId(DEFAULT_ISSUER))


def _public_key_bytes(key: SignerKey) -> bytes:
    if isinstance(key, SigningKey):
        return key.verify_key.encode()
    if isinstance(key, VerifyKey):
        return key.encode()
    return bytes(key)


def _account_signers(signers: Sequence[Tuple[SignerKey, int]]) -> Tuple[Signer, ...]:
    if not signers or len(signers) > MAX_SIGNERS:
        raise err(ErrorCode.INVALID_FORMAT, f"account needs 1..{MAX_SIGNERS} signers")
    out: List[Signer] = []
    seen = set()
    for key, weight in signers:
        public_key = _public_key_bytes(key)
        if len(public_key) != 32:
            raise err(ErrorCode.INVALID_FORMAT, "signer key must be 32 bytes")
        if not 0 < weight <= MAX_SIGNER_WEIGHT:
            raise err(ErrorCode.INVALID_FORMAT, f"signer weight {weight} out of range")
        if public_key in seen:
            raise err(ErrorCode.INVALID_FORMAT, "duplicate signer key")
        seen.add(public_key)
        out.append(Signer(key=public_key, weight=weight))
    return tuple(out)


def _commit(store: LedgerStorage, entry: LedgerEntry) -> LedgerKey:
    key = ledger_key(entry)
    try:
        store.put(key, entry)
    except Exception as exc:
        raise err(ErrorCode.STORE_COMMIT_FAILED, f"put {type(key).__name__} failed: {exc}") from exc
    return key


def create_default_account(
    store: LedgerStorage,
    account_id: AccountId,
    signers: Sequence[Tuple[SignerKey, int]],
) -> LedgerEntry:
    account = AccountEntry(
        account_id=account_id,
        balance=DEFAULT_ACCOUNT_BALANCE,
        seq_num=DEFAULT_SEQ_NUM,
        num_sub_entries=DEFAULT_NUM_SUB_ENTRIES,
        thresholds=Thresholds(DEFAULT_THRESHOLDS),
        signers=_account_signers(signers),
    )
    entry = LedgerEntry(last_modified_ledger_seq=LAST_MODIFIED_LEDGER_SEQ, data=account)
    _commit(store, entry)
    return entry


def create_default_trustline(store: LedgerStorage, account_id: AccountId) -> LedgerEntry:
    trustline = TrustLineEntry(
        account_id=account_id,
        asset=default_asset(),
        balance=DEFAULT_TRUSTLINE_BALANCE,
        limit=DEFAULT_TRUSTLINE_LIMIT,
        flags=DEFAULT_TRUSTLINE_FLAGS,
    )
    entry = LedgerEntry(last_modified_ledger_seq=LAST_MODIFIED_LEDGER_SEQ, data=trustline)
    _commit(store, entry)
    return entry


def install(signers: Iterable[DerivedSigner], store: LedgerStorage) -> List[LedgerKey]:
    """Commit account + trust line entries for every key-backed signer.

    Returns the committed keys in commit order. A failed commit raises
    ``FixtureError(STORE_COMMIT_FAILED)`` and nothing is rolled back: the
    store may hold an account without its trust line and must be discarded.
    """
    committed: List[LedgerKey] = []
    for signer in signers:
        if signer.key is None:
            continue
        account_id = signer.address.sc_address.account_id
        if account_id is None:
            raise FixtureError(
                ErrorCode.INVALID_ADDRESS, f"key-backed signer {signer.address} is not an account"
            )
        account = create_default_account(store, account_id, [(signer.key, DEFAULT_SIGNER_WEIGHT)])
        trustline = create_default_trustline(store, account_id)
        committed.extend((ledger_key(account), ledger_key(trustline)))
        logger.debug("installed account and trust line for %s", signer.address)
    return committed


def signer_weight(account: AccountEntry, public_key: bytes) -> int:
    for signer in account.signers:
        if signer.key == public_key:
            return signer.weight
    return 0


def is_authorized(account: AccountEntry, public_key: bytes) -> bool:
    """True if a signature from ``public_key`` alone clears the low threshold."""
    return signer_weight(account, public_key) > account.thresholds.low

"""Deterministic signer derivation for token fuzzing.

Every fuzz iteration carries an ``AddressGenerator``: a seed plus one
``AddressType`` per slot. Slot ``i`` is derived from the sub-seed
``seed + i`` only, so a scenario that rebuilds its environment (for example
after advancing ledger time) gets back exactly the same identities and keys.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

from nacl.signing import SigningKey

from .config import DEGENERATE_SUB_SEEDS, FINGERPRINT_SIZE, SEED_SIZE, U64_MAX
from .env import Env
from .errors import ContractViolation, ErrorCode, FixtureError
from .ledger_fixtures import install
from .types import Address, AddressType, DerivedSigner

logger = logging.getLogger(__name__)


def max_seed(count: int) -> int:
    """Largest seed for which ``count`` sub-seeds stay within u64."""
    return U64_MAX - count


def sub_seed(seed: int, index: int) -> int:
    value = seed + index
    if seed < 0 or index < 0 or value > U64_MAX:
        raise ContractViolation(f"address seed overflow: {seed} + {index}")
    return value


def fingerprint_for(value: int) -> bytes:
    """24 zero bytes followed by the big-endian sub-seed."""
    return bytes(FINGERPRINT_SIZE - SEED_SIZE) + value.to_bytes(SEED_SIZE, "big")


@dataclass(frozen=True)
class AddressGenerator:
    address_seed: int
    address_types: Tuple[AddressType, ...]

    def __post_init__(self) -> None:
        # Accept any sequence, keep the instance hashable
        object.__setattr__(self, "address_types", tuple(self.address_types))

    def check_seed_bound(self) -> None:
        bound = max_seed(len(self.address_types))
        if self.address_seed < 0 or self.address_seed > bound:
            raise ContractViolation(
                f"address seed {self.address_seed} outside [0, {bound}]"
            )

    def degenerate_slots(self) -> List[int]:
        """Contract slots whose sub-seed is known to yield an unusable address."""
        return [
            i
            for i, kind in enumerate(self.address_types)
            if kind == AddressType.CONTRACT
            and self.address_seed + i in DEGENERATE_SUB_SEEDS
        ]

    def check_degenerate(self) -> None:
        slots = self.degenerate_slots()
        if slots:
            raise FixtureError(
                ErrorCode.DEGENERATE_SEED,
                f"contract slots {slots} land on sub-seed 0 or 1",
            )

    def derive_signers(self, env: Env) -> List[DerivedSigner]:
        return derive(self, env)

    def generate_signers(self, env: Env) -> List[Address]:
        return [signer.address for signer in derive(self, env)]

    def setup_account_storage(self, env: Env) -> List[DerivedSigner]:
        """Derive all signers and commit ledger state for the account ones."""
        signers = derive(self, env)
        install(signers, env.storage)
        return signers


def derive(generator: AddressGenerator, env: Env) -> List[DerivedSigner]:
    generator.check_seed_bound()

    signers: List[DerivedSigner] = []
    for i, kind in enumerate(generator.address_types):
        fingerprint = fingerprint_for(sub_seed(generator.address_seed, i))

        if kind == AddressType.ACCOUNT:
            key = SigningKey(fingerprint)
            address = env.account_address(key.verify_key.encode())
            signers.append(DerivedSigner(address=address, key=key, fingerprint=fingerprint))
        elif kind == AddressType.CONTRACT:
            address = env.contract_address(fingerprint)
            signers.append(DerivedSigner(address=address, key=None, fingerprint=fingerprint))
        else:
            raise FixtureError(ErrorCode.INVALID_TYPE, f"unknown address type {kind!r}")

    logger.debug(
        "derived %d signers from seed %d", len(signers), generator.address_seed
    )
    return signers

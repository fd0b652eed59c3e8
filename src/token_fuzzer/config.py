"""Fuzz fixture configuration constants.

Keep the asset constants aligned with what the token test environment binds
when it registers its default asset contract.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

# Batch size used by the fuzz input source
NUMBER_OF_ADDRESSES = 4
# Largest batch the byte decoder will build
MAX_ADDRESS_SLOTS = 64

# Integer bounds
U64_MAX = (1 << 64) - 1
I64_MAX = (1 << 63) - 1

# Derivation layout
SEED_SIZE = 8
FINGERPRINT_SIZE = 32

# Sub-seeds that produce unusable contract addresses
DEGENERATE_SUB_SEEDS = frozenset({0, 1})

# Account defaults
DEFAULT_ACCOUNT_BALANCE = 10_000_000
DEFAULT_SEQ_NUM = 0
DEFAULT_NUM_SUB_ENTRIES = 0
DEFAULT_SIGNER_WEIGHT = 100
DEFAULT_THRESHOLDS = (1, 0, 0, 0)
MAX_SIGNERS = 20
MAX_SIGNER_WEIGHT = 255
MAX_HOME_DOMAIN_SIZE = 32

# Trust line defaults
DEFAULT_ASSET_CODE = b"aaa\x00"
# Deterministically generated by the environment when it registers the
# default asset; changes if the setup phase uses the environment differently.
DEFAULT_ISSUER = bytes(31) + b"\x01"
DEFAULT_TRUSTLINE_BALANCE = 0
DEFAULT_TRUSTLINE_LIMIT = I64_MAX

LAST_MODIFIED_LEDGER_SEQ = 0


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("true", "1", "yes")


@dataclass
class FixtureConfig:
    """Runtime switches for the fixture tools."""
    verbose: bool = False
    reject_degenerate: bool = False
    output_dir: Optional[str] = None

    @classmethod
    def from_env(cls) -> "FixtureConfig":
        """Load configuration from environment variables."""
        config = cls()
        config.verbose = _env_flag("TOKEN_FUZZ_VERBOSE")
        config.reject_degenerate = _env_flag("TOKEN_FUZZ_REJECT_DEGENERATE")
        config.output_dir = os.environ.get("TOKEN_FUZZ_OUTPUT_DIR") or None
        return config

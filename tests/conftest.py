"""Pytest hooks to collect fixture vectors and dump them with ``--output``."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from token_fuzzer.addrgen import AddressGenerator
from token_fuzzer.env import Env, LedgerStore
from token_fuzzer.fixtures_io import entries_to_json, generator_to_json, signer_to_json
from token_fuzzer.state_digest import compute_signers_digest, compute_state_digest

_VECTOR_CASES: dict[str, list[dict[str, Any]]] = {}


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--output",
        action="store",
        default=None,
        help="Output directory for generated fixture vectors",
    )


@pytest.fixture
def store() -> LedgerStore:
    return LedgerStore()


@pytest.fixture
def env(store: LedgerStore) -> Env:
    return Env(store)


@pytest.fixture
def vector_test_group() -> Callable[[str, dict[str, Any]], None]:
    """Collect pre-built vectors under a specific fixture path."""

    def _vector_test_group(rel_path: str, vector: dict[str, Any]) -> None:
        _VECTOR_CASES.setdefault(rel_path, []).append(vector)

    return _vector_test_group


@pytest.fixture
def addrgen_vector(vector_test_group) -> Callable[[str, AddressGenerator], None]:
    """Run full setup for a generator and collect the result as a vector."""

    def _addrgen_vector(name: str, generator: AddressGenerator) -> None:
        store = LedgerStore()
        signers = generator.setup_account_storage(Env(store))
        vector_test_group(
            "addrgen.json",
            {
                "name": name,
                "input": generator_to_json(generator),
                "expected": {
                    "signers": [signer_to_json(s) for s in signers],
                    "signers_digest": compute_signers_digest(signers),
                    "entries": entries_to_json(store.items()),
                    "state_digest": compute_state_digest(store.items()),
                },
            },
        )

    return _addrgen_vector


def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    output_dir = session.config.getoption("--output")
    if not output_dir:
        return

    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    for rel_path, vectors in _VECTOR_CASES.items():
        if not vectors:
            continue
        target = out / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps({"test_vectors": vectors}, indent=2))

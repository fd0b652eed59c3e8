"""Re-derive fixture vectors in a fresh process and compare digests."""

from __future__ import annotations

import json
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT / "src"))

from token_fuzzer.env import Env, LedgerStore  # noqa: E402
from token_fuzzer.fixtures_io import generator_from_json  # noqa: E402
from token_fuzzer.state_digest import compute_signers_digest, compute_state_digest  # noqa: E402


def _check_addrgen_vectors(path: Path) -> list[str]:
    failures: list[str] = []
    data = json.loads(path.read_text())

    for vec in data.get("test_vectors", []):
        generator = generator_from_json(vec["input"])
        store = LedgerStore()
        signers = generator.setup_account_storage(Env(store))

        expected = vec["expected"]
        if compute_signers_digest(signers) != expected["signers_digest"]:
            failures.append(f"{vec['name']}: signers_mismatch")
            continue
        if compute_state_digest(store.items()) != expected["state_digest"]:
            failures.append(f"{vec['name']}: state_mismatch")

    return failures


def main() -> None:
    fixtures = ROOT / "fixtures"

    failures: list[str] = []

    addrgen = fixtures / "addrgen.json"
    if addrgen.exists():
        failures.extend(_check_addrgen_vectors(addrgen))

    if failures:
        for f in failures:
            print("FAIL", f)
        raise SystemExit(1)

    print("All fixtures passed")


if __name__ == "__main__":
    main()

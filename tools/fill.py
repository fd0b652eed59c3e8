"""Write addrgen vectors through pytest, then re-derive them in a new process.

Derivation must give the same signers and ledger state after a restart, so
the consume step runs in its own interpreter rather than inside pytest.
"""

from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
OUT = ROOT / "fixtures"
VECTOR_TESTS = ROOT / "tests" / "test_addrgen.py"


def _fill(env: dict[str, str]) -> int:
    cmd = [sys.executable, "-m", "pytest", str(VECTOR_TESTS), "-q", "--output", str(OUT)]
    print("Running:", " ".join(cmd))
    return subprocess.call(cmd, env=env, cwd=str(ROOT))


def _vector_count() -> int:
    path = OUT / "addrgen.json"
    if not path.exists():
        return 0
    return len(json.loads(path.read_text()).get("test_vectors", []))


def main() -> int:
    env = dict(os.environ)
    env["PYTHONPATH"] = str(ROOT / "src")

    code = _fill(env)
    if code != 0:
        return code

    count = _vector_count()
    if count == 0:
        print("No addrgen vectors written to", OUT)
        return 1
    print(f"Wrote {count} addrgen vectors, re-deriving")
    return subprocess.call([sys.executable, str(ROOT / "tools" / "consume.py")], env=env, cwd=str(ROOT))


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations

"""Fail-fast grep to keep the recap engine pure.

The season_recap package must produce byte-identical reports for identical
snapshots, so it may not read the host clock, draw random numbers, or do
file/network I/O. Snapshots are loaded by the app layer, never by the engine.

Run:
  python -m tools.check_engine_purity

Exit code:
  0 - clean
  1 - forbidden pattern found
"""

import os
import re
import sys
from pathlib import Path
from typing import Iterator, List, Optional, Tuple


FORBIDDEN_PATTERNS = [
    # clock
    r"\bdate\.today\s*\(",
    r"\bdatetime\.now\s*\(",
    r"\bdatetime\.utcnow\s*\(",
    r"\btime\.time\s*\(",
    r"\btime\.monotonic\s*\(",
    # randomness
    r"^\s*import\s+random\b",
    r"^\s*from\s+random\s+import\b",
    r"\buuid\.uuid4\s*\(",
    # I/O
    r"\bopen\s*\(",
    r"^\s*import\s+(sqlite3|socket|requests|httpx)\b",
]

EXCLUDE_DIRS = {
    "__pycache__",
}

ENGINE_PACKAGE = "season_recap"


def iter_py_files(root: Path) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        dn = Path(dirpath)
        dirnames[:] = [d for d in dirnames if d not in EXCLUDE_DIRS]
        for fn in sorted(filenames):
            if fn.endswith(".py"):
                yield dn / fn


def find_violations(package_dir: Path) -> List[Tuple[Path, int, str, str]]:
    compiled = [re.compile(p) for p in FORBIDDEN_PATTERNS]
    hits = []
    for fp in iter_py_files(package_dir):
        text = fp.read_text(encoding="utf-8")
        for i, line in enumerate(text.splitlines(), start=1):
            for rx in compiled:
                if rx.search(line):
                    hits.append((fp.relative_to(package_dir), i, line.strip(), rx.pattern))
    return hits


def main(root: Optional[Path] = None) -> int:
    root = root or Path(__file__).resolve().parents[1]
    hits = find_violations(root / ENGINE_PACKAGE)

    if not hits:
        print("[OK] season_recap is free of clock, randomness and I/O.")
        return 0

    print("[FAIL] Forbidden usage found in season_recap:\n")
    for rel, ln, line, pat in hits:
        print(f"- {rel}:{ln}: {line}")
        print(f"  matched: {pat}")
    print("\nFix: pass data in through the FactSnapshot; keep I/O in app/.")
    return 1


if __name__ == "__main__":
    sys.exit(main())

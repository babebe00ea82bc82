from __future__ import annotations

from pathlib import Path

from tools.check_engine_purity import find_violations, main

REPO_ROOT = Path(__file__).resolve().parents[1]


def test_engine_package_is_pure(capsys):
    assert main(REPO_ROOT) == 0
    assert "[OK]" in capsys.readouterr().out


def test_flags_randomness_and_clock(tmp_path):
    pkg = tmp_path / "season_recap"
    pkg.mkdir()
    (pkg / "__init__.py").write_text("")
    (pkg / "bad.py").write_text("import random\n\nstamp = datetime.now()\n")

    hits = find_violations(pkg)
    assert [(str(rel), ln) for rel, ln, _line, _pat in hits] == [("bad.py", 1), ("bad.py", 3)]
    assert main(tmp_path) == 1


def test_skips_pycache(tmp_path):
    cache = tmp_path / "__pycache__"
    cache.mkdir()
    (cache / "stale.py").write_text("open('x')\n")
    assert find_violations(tmp_path) == []

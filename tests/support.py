import os
import stat
import sys
import tempfile
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Logs "<tool> <args> @ <cwd>" and fails when the args match $FAKE_FAIL.
FAKE_TOOL = """#!/bin/sh
echo "{name} $* @ $(pwd -P)" >> "$FAKE_LOG"
case "$*" in
  $FAKE_FAIL) exit ${{FAKE_CODE:-101}} ;;
esac
exit 0
"""


def write_tool(directory: Path, name: str) -> Path:
    p = directory / name
    p.write_text(FAKE_TOOL.format(name=name), encoding="utf-8")
    p.chmod(p.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return p


class FakeWorkspace:
    """<root>/ws/kani/{scripts,proptest} with fake kani-fmt.sh and cargo in scripts/."""

    def __init__(self, with_proptest: bool = True, with_fmt: bool = True):
        self._td = tempfile.TemporaryDirectory(prefix="proptest_regression_")
        self.root = Path(self._td.name).resolve()
        self.kani = self.root / "ws" / "kani"
        self.script_dir = self.kani / "scripts"
        self.proptest_dir = self.kani / "proptest"
        self.script_dir.mkdir(parents=True)
        if with_proptest:
            self.proptest_dir.mkdir()
        if with_fmt:
            write_tool(self.script_dir, "kani-fmt.sh")
        write_tool(self.script_dir, "cargo")
        self.log = self.root / "calls.log"

    def env(self, fail: str = "", code: int = 101, **extra) -> dict:
        env = {
            "PATH": "/usr/bin:/bin",
            "FAKE_LOG": str(self.log),
            "FAKE_FAIL": fail,
            "FAKE_CODE": str(code),
        }
        env.update(extra)
        return env

    def calls(self) -> list:
        if not self.log.exists():
            return []
        out = []
        for line in self.log.read_text(encoding="utf-8").splitlines():
            cmd, _, cwd = line.rpartition(" @ ")
            out.append((cmd, cwd))
        return out

    def cleanup(self) -> None:
        self._td.cleanup()

from __future__ import annotations

import subprocess
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .errors import RegressionError
from .layout import require_dir, which
from .steps import Step


def _now_ms() -> int:
    return int(time.monotonic() * 1000)


@dataclass
class StepOutcome:
    name: str
    argv: Tuple[str, ...]
    cwd: str
    returncode: int
    duration_ms: int = 0
    error_kind: Optional[str] = None
    error: Optional[str] = None
    stage_returncodes: List[int] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "argv": list(self.argv),
            "cwd": self.cwd,
            "returncode": self.returncode,
            "ok": self.ok,
            "duration_ms": self.duration_ms,
            "error_kind": self.error_kind,
            "error": self.error,
            "stage_returncodes": list(self.stage_returncodes),
        }


def _shell_status(code: int) -> int:
    # Killed by signal N: report 128+N like a shell would.
    return 128 - code if code < 0 else code


def pipeline_status(codes: List[int]) -> int:
    """First non-zero stage status, or 0 when every stage succeeded."""
    for c in codes:
        if c != 0:
            return c
    return 0


def _spawn_pipeline(stages, cwd: Path, env: Dict[str, str]) -> List[int]:
    procs: List[subprocess.Popen] = []
    upstream = None
    try:
        for i, argv in enumerate(stages):
            last = i == len(stages) - 1
            p = subprocess.Popen(
                list(argv),
                cwd=str(cwd),
                env=env,
                stdin=upstream,
                stdout=None if last else subprocess.PIPE,
            )
            if upstream is not None:
                # Let the upstream stage see SIGPIPE if this one exits early.
                upstream.close()
            upstream = p.stdout
            procs.append(p)
    except OSError:
        if upstream is not None:
            upstream.close()
        for p in procs:
            p.wait()
        raise
    return [_shell_status(p.wait()) for p in procs]


def run_step(step: Step, env: Dict[str, str]) -> StepOutcome:
    """Run one step to completion; never raises for a failing command."""
    t0 = _now_ms()
    out = StepOutcome(name=step.name, argv=step.argv, cwd=str(step.cwd), returncode=0)
    try:
        require_dir(step.cwd)
        search_path = env.get("PATH", "")
        stages = [(which(argv[0], search_path),) + tuple(argv[1:]) for argv in step.stages]
    except RegressionError as e:
        out.returncode = e.returncode
        out.error_kind = e.error_kind
        out.error = str(e)
        out.duration_ms = _now_ms() - t0
        return out

    try:
        codes = _spawn_pipeline(stages, step.cwd, env)
    except OSError as e:
        out.returncode = 126
        out.error_kind = "spawn_failed"
        out.error = f"spawn failed: {e}"
        out.duration_ms = _now_ms() - t0
        return out

    out.stage_returncodes = codes
    out.returncode = pipeline_status(codes)
    if out.returncode != 0:
        out.error_kind = "step_failed"
        out.error = f"nonzero exit: {out.returncode}"
    out.duration_ms = _now_ms() - t0
    return out

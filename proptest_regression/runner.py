"""Sequential regression run with fail-fast / keep-going control flow."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from .config import RunConfig
from .layout import Layout
from .proc import StepOutcome, run_step
from .steps import Step

TAG = "[proptest-regression]"
BANNER = "All proptest regressions completed successfully."


def log(msg: str) -> None:
    print(f"{TAG} {msg}", file=sys.stderr, flush=True)


@dataclass
class RunResult:
    outcomes: List[StepOutcome] = field(default_factory=list)
    exit_code: int = 0
    completed: bool = False
    aborted_at: Optional[str] = None

    @property
    def failed(self) -> List[StepOutcome]:
        return [o for o in self.outcomes if not o.ok]


def print_banner(stream=None) -> None:
    stream = stream or sys.stdout
    print(file=stream)
    print(BANNER, file=stream)
    print(file=stream, flush=True)


def run_regression(
    config: RunConfig,
    layout: Layout,
    steps: Sequence[Step],
    out=None,
    step_fn: Callable[[Step, Dict[str, str]], StepOutcome] = run_step,
) -> RunResult:
    """Run steps in order, one at a time, each exactly once.

    Default mode stops at the first non-zero step and inherits its status.
    With continue_on_error every step runs, the banner always prints and the
    exit code is 0; failed steps stay in the outcomes.
    """
    keep_going = config.get("continue_on_error")
    env = layout.step_env()
    result = RunResult()

    for step in steps:
        log(f"{step.name}: {step.describe()} (cwd={step.cwd})")
        outcome = step_fn(step, env)
        result.outcomes.append(outcome)
        result.exit_code = outcome.returncode
        if outcome.ok:
            continue
        log(f"{step.name}: FAIL ({outcome.error})")
        if not keep_going:
            result.aborted_at = step.name
            return result

    if keep_going and result.failed:
        log(f"keep-going: {len(result.failed)} step(s) failed: "
            + ", ".join(o.name for o in result.failed))
    result.completed = True
    print_banner(out)
    # The banner is the last command of a completed run.
    result.exit_code = 0
    return result

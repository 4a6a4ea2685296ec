from __future__ import annotations

import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from .layout import Layout

FMT_HELPER = "kani-fmt.sh"


@dataclass(frozen=True)
class Step:
    name: str
    stages: Tuple[Tuple[str, ...], ...]
    cwd: Path

    @staticmethod
    def command(name: str, argv, cwd: Path) -> "Step":
        return Step(name=name, stages=(tuple(argv),), cwd=Path(cwd))

    @property
    def argv(self) -> Tuple[str, ...]:
        return self.stages[0]

    def describe(self) -> str:
        return " | ".join(shlex.join(s) for s in self.stages)


def regression_plan(layout: Layout) -> List[Step]:
    """Ordered steps of a proptest regression run.

    The first two run next to the runner, everything after the switch to the
    proptest directory runs there.
    """
    here = layout.script_dir
    proptest = layout.proptest_dir
    return [
        Step.command("format-check", [FMT_HELPER, "--check"], here),
        Step.command("workspace-build", ["cargo", "build", "--workspace"], here),
        Step.command("unit-tests", ["cargo", "test"], proptest),
        # proptest-derive is not ported; the kani pass only checks codegen for now.
        Step.command("kani-codegen", ["cargo", "kani", "--only-codegen"], proptest),
        Step.command(
            "docs",
            ["cargo", "doc", "--workspace", "--no-deps", "--exclude", "std"],
            proptest,
        ),
    ]

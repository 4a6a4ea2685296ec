from __future__ import annotations

import argparse
import os
import sys
import time
from pathlib import Path
from typing import Mapping, Optional, Sequence

from .config import RunConfig
from .errors import RegressionError
from .layout import Layout
from .report import JUNIT_NAME, build_report, write_junit, write_report
from .runner import log, run_regression
from .steps import regression_plan


def _default_run_id() -> str:
    return time.strftime("%Y%m%dT%H%M%SZ", time.gmtime())


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="proptest-regression",
        description="Format check, build, test, kani codegen and docs for the proptest port.",
    )
    ap.add_argument("--script-dir", default=None,
                    help="directory holding the runner and kani-fmt.sh; ../proptest is resolved from it")
    ap.add_argument("--keep-going", action="store_true",
                    help="do not stop at the first failing step (same as KANI_REGRESSION_KEEP_GOING=1)")
    ap.add_argument("--out", default=None, help="write regression_report.json and JUnit XML here")
    ap.add_argument("--run-id", default=None)
    ap.add_argument("--list", action="store_true", help="print the plan and exit")
    return ap


def main(argv: Optional[Sequence[str]] = None, script_dir=None,
         environ: Optional[Mapping[str, str]] = None) -> int:
    args = build_parser().parse_args(argv)
    environ = os.environ if environ is None else environ
    script_dir = args.script_dir or script_dir
    if script_dir is None:
        # The layout hangs off the runner's directory, never the caller's cwd.
        print("ERROR: --script-dir is required (directory holding kani-fmt.sh)", file=sys.stderr)
        return 2

    try:
        config = RunConfig.from_env(environ, keep_going=args.keep_going)
        layout = Layout.resolve(script_dir, environ)
    except RegressionError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return e.returncode

    steps = regression_plan(layout)
    if args.list:
        for i, s in enumerate(steps, 1):
            print(f"{i}. {s.name}: {s.describe()}  [cwd={s.cwd}]")
        return 0

    result = run_regression(config, layout, steps)

    if args.out:
        out_dir = Path(args.out)
        report = build_report(config, layout, steps, result, args.run_id or _default_run_id())
        try:
            path = write_report(out_dir, report)
            write_junit(out_dir / JUNIT_NAME, "proptest-regression", result.outcomes)
        except OSError as e:
            print(f"ERROR: writing run evidence to {out_dir} failed: {e}", file=sys.stderr)
            return result.exit_code or 1
        log(f"wrote {path}")

    return result.exit_code


if __name__ == "__main__":
    raise SystemExit(main())

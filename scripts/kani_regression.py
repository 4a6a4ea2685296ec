#!/usr/bin/env python3
"""Co-located proptest regression runner.

Resolves its own directory so that kani-fmt.sh next to it is found by name
and ../proptest is found regardless of the caller's cwd.

Fail-fast by default; set KANI_REGRESSION_KEEP_GOING=1 to run every step.
"""

from __future__ import annotations

import os
import sys

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
# Allow invocation as `python3 scripts/kani_regression.py` without an install.
REPO_ROOT = os.path.dirname(SCRIPT_DIR)
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from proptest_regression.cli import main  # noqa: E402

if __name__ == "__main__":
    raise SystemExit(main(script_dir=SCRIPT_DIR))

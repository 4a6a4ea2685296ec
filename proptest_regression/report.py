from __future__ import annotations

import json
import time
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Dict, List, Sequence

from jsonschema import Draft202012Validator

from .config import RunConfig
from .layout import Layout
from .proc import StepOutcome
from .runner import RunResult
from .steps import Step

REPORT_FORMAT = "PROPTEST-REGRESSION-REPORT-1"
REPORT_NAME = "regression_report.json"
JUNIT_NAME = "regression_report.junit.xml"
SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "regression_report.schema.v1.json"


def now_rfc3339() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


def load_schema() -> Dict[str, Any]:
    sch = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
    Draft202012Validator.check_schema(sch)
    return sch


def build_report(config: RunConfig, layout: Layout, steps: Sequence[Step],
                 result: RunResult, run_id: str) -> Dict[str, Any]:
    """Per-step evidence for one run; steps never reached are 'not_run'."""
    ran = {o.name: o for o in result.outcomes}
    entries: List[Dict[str, Any]] = []
    for step in steps:
        o = ran.get(step.name)
        if o is None:
            entries.append({
                "name": step.name,
                "argv": list(step.argv),
                "cwd": str(step.cwd),
                "status": "not_run",
                "returncode": None,
                "ok": None,
            })
            continue
        ent = o.to_dict()
        ent["status"] = "passed" if o.ok else "failed"
        entries.append(ent)

    return {
        "format": REPORT_FORMAT,
        "run_id": run_id,
        "created_at": now_rfc3339(),
        "ok": result.completed and not result.failed,
        "completed": result.completed,
        "exit_code": result.exit_code,
        "aborted_at": result.aborted_at,
        "config": config.to_dict(),
        "layout": layout.to_dict(),
        "steps": entries,
    }


def validate_report(report: Dict[str, Any]) -> None:
    # Raises jsonschema.ValidationError on the first violation.
    Draft202012Validator(load_schema()).validate(report)


def write_report(out_dir: Path, report: Dict[str, Any]) -> Path:
    validate_report(report)
    path = Path(out_dir) / REPORT_NAME
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(report, sort_keys=True, indent=2) + "\n", encoding="utf-8")
    tmp.replace(path)
    return path


def write_junit(path: Path, suite_name: str, outcomes: Sequence[StepOutcome]) -> None:
    ts = ET.Element("testsuite", name=suite_name)
    failures = 0
    for o in outcomes:
        tc = ET.SubElement(ts, "testcase", name=o.name, time=f"{o.duration_ms / 1000:.3f}")
        if not o.ok:
            failures += 1
            f = ET.SubElement(tc, "failure", message=o.error_kind or "failed")
            f.text = str({"argv": list(o.argv), "cwd": o.cwd, "returncode": o.returncode, "error": o.error})
    ts.set("tests", str(len(outcomes)))
    ts.set("failures", str(failures))
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    ET.ElementTree(ts).write(path, encoding="utf-8", xml_declaration=True)

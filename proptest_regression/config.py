from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

from .errors import UndefinedVariableError

KEEP_GOING_ENV = "KANI_REGRESSION_KEEP_GOING"


def require_env(environ: Mapping[str, str], name: str) -> str:
    """Return environ[name], failing hard when it is unset.

    Applies to variables the runner itself reads; the keep-going override
    does not relax it.
    """
    try:
        return environ[name]
    except KeyError:
        raise UndefinedVariableError(f"{name}: unbound variable") from None


@dataclass(frozen=True)
class RunConfig:
    continue_on_error: bool = False

    @staticmethod
    def from_env(environ: Mapping[str, str], keep_going: bool = False) -> "RunConfig":
        # Any non-empty value enables keep-going, including "0" and "false".
        flag = bool(environ.get(KEEP_GOING_ENV, ""))
        return RunConfig(continue_on_error=flag or keep_going)

    def get(self, key: str) -> Any:
        if key not in {f.name for f in fields(self)}:
            raise UndefinedVariableError(f"unknown configuration key: {key}")
        return getattr(self, key)

    def to_dict(self) -> dict:
        return {"continue_on_error": self.continue_on_error}

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional

from .config import require_env
from .errors import MissingDirectoryError, MissingToolError


@dataclass(frozen=True)
class Layout:
    """Directory layout of one run, resolved once from the runner's location.

    script_dir/            runner + co-located kani-fmt.sh
    script_dir/../proptest the project under test
    script_dir/../../..    project root
    """

    script_dir: Path
    project_root: Path
    proptest_dir: Path
    search_path: str
    environ: Mapping[str, str] = field(hash=False, compare=False)

    @staticmethod
    def resolve(script_dir, environ: Mapping[str, str]) -> "Layout":
        sd = Path(script_dir).resolve()
        path = require_env(environ, "PATH")
        search_path = str(sd) + (os.pathsep + path if path else "")
        return Layout(
            script_dir=sd,
            project_root=Path(os.path.normpath(sd / ".." / ".." / "..")),
            proptest_dir=Path(os.path.normpath(sd / ".." / "proptest")),
            search_path=search_path,
            environ=dict(environ),
        )

    def step_env(self) -> Dict[str, str]:
        env = dict(self.environ)
        env["PATH"] = self.search_path
        return env

    def to_dict(self) -> dict:
        return {
            "script_dir": str(self.script_dir),
            "project_root": str(self.project_root),
            "proptest_dir": str(self.proptest_dir),
        }


def which(name: str, search_path: str) -> str:
    found: Optional[str] = shutil.which(name, path=search_path)
    if found is None:
        raise MissingToolError(f"{name}: command not found (or not executable)")
    return found


def require_dir(path: Path) -> Path:
    if not Path(path).is_dir():
        raise MissingDirectoryError(f"{path}: no such directory")
    return Path(path)

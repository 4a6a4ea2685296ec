from __future__ import annotations


class RegressionError(Exception):
    """Base class for runner-level failures (not step failures)."""

    # Reported in the run report and mapped onto a shell-compatible status.
    error_kind = "regression_error"
    returncode = 1


class UndefinedVariableError(RegressionError):
    """A configuration key or environment variable the runner needs is unset."""

    error_kind = "undefined_variable"
    returncode = 2


class MissingToolError(RegressionError):
    error_kind = "missing_tool"
    # Same status a shell reports for "command not found".
    returncode = 127


class MissingDirectoryError(RegressionError):
    error_kind = "missing_directory"
    returncode = 1

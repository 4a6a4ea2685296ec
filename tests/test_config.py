import unittest

import support  # noqa: F401

from proptest_regression.config import KEEP_GOING_ENV, RunConfig, require_env
from proptest_regression.errors import UndefinedVariableError


class RunConfigTests(unittest.TestCase):
    def test_default_is_fail_fast(self):
        self.assertFalse(RunConfig.from_env({}).continue_on_error)

    def test_empty_value_does_not_enable_keep_going(self):
        self.assertFalse(RunConfig.from_env({KEEP_GOING_ENV: ""}).continue_on_error)

    def test_any_non_empty_value_enables_keep_going(self):
        for v in ("1", "0", "false", "yes"):
            self.assertTrue(RunConfig.from_env({KEEP_GOING_ENV: v}).continue_on_error, v)

    def test_cli_flag_enables_keep_going(self):
        self.assertTrue(RunConfig.from_env({}, keep_going=True).continue_on_error)

    def test_known_key_lookup(self):
        self.assertTrue(RunConfig(continue_on_error=True).get("continue_on_error"))

    def test_unknown_key_is_fatal_in_both_modes(self):
        for cfg in (RunConfig(False), RunConfig(True)):
            with self.assertRaises(UndefinedVariableError):
                cfg.get("keep_going")

    def test_require_env(self):
        self.assertEqual(require_env({"PATH": "/bin"}, "PATH"), "/bin")
        with self.assertRaises(UndefinedVariableError):
            require_env({}, "PATH")


if __name__ == "__main__":
    unittest.main()

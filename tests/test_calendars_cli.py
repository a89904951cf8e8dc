"""CLI tests for the calendars entry point and bin/ wrapper."""
from __future__ import annotations

import io
import json
import tempfile
import unittest
from unittest.mock import patch

from calendars.__main__ import app
from core.cli_errors import ExitCode
from tests.fixtures import bin_path, run_bin, write_script, write_yaml


def invoke(*argv):
    out, err = io.StringIO(), io.StringIO()
    code = app.run(list(argv), stdout=out, stderr=err)
    return code, out.getvalue(), err.getvalue()


class TestExecCommand(unittest.TestCase):
    def test_exec_prints_result(self):
        code, out, err = invoke("exec", "create", "event", "Standup", "from", "2025-03-03T09:00", "to", "2025-03-03T09:15")
        self.assertEqual(code, 0)
        self.assertEqual(out, "Single timed event created: Standup\n")
        self.assertEqual(err, "")

    def test_exec_passes_option_like_words_through(self):
        code, out, _ = invoke("exec", "create", "calendar", "--name", "Work", "--timezone", "UTC")
        self.assertEqual(code, 0)
        self.assertEqual(out, "Calendar created: Work with timezone UTC\n")

    def test_exec_failure_goes_to_stderr(self):
        code, out, err = invoke("exec", "use", "calendar", "--name", "Nope")
        self.assertEqual(code, ExitCode.NOT_FOUND)
        self.assertEqual(out, "")
        self.assertEqual(err, "Error: Calendar Nope not found.\n")

    def test_exec_json_output(self):
        code, out, _ = invoke("--output", "json", "exec", "show", "status", "on", "2025-03-03T09:00")
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out), {
            "command": "show status on 2025-03-03T09:00",
            "result": ["Status at 2025-03-03T09:00: Available"],
        })

    def test_default_calendar_from_config(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        cfg = write_yaml({"default_calendar": "Home"}, dir=tmp.name)
        code, out, _ = invoke("--config", cfg, "exec", "use", "calendar", "--name", "Home")
        self.assertEqual(code, 0)
        self.assertEqual(out, "Using calendar: Home\n")

    def test_bad_config_is_reported(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        cfg = write_script(["- not", "- a mapping"], dir=tmp.name, filename="bad.yaml")
        code, _, err = invoke("--config", str(cfg), "exec", "show", "status", "on", "2025-03-03T09:00")
        self.assertEqual(code, ExitCode.CONFIG_ERROR)
        self.assertTrue(err.startswith("Error: Top-level YAML"))

    def test_no_command_prints_help(self):
        code, out, _ = invoke()
        self.assertEqual(code, ExitCode.USAGE)
        self.assertIn("headless", out)


class TestHeadlessCommand(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def test_headless_script(self):
        path = write_script([
            "create calendar --name Work --timezone UTC",
            "use calendar --name Work",
            "create event Review on 2025-03-03",
            "print events on 2025-03-03",
            "exit",
        ], dir=self.tmp.name)
        code, out, _ = invoke("headless", str(path))
        self.assertEqual(code, 0)
        lines = out.splitlines()
        self.assertEqual(lines[0], "Processing command (1): create calendar --name Work --timezone UTC")
        self.assertIn(" - Review All Day Event  at ", lines)
        self.assertEqual(lines[-1], "Exiting Calendar App.")

    def test_headless_failure_exit_code(self):
        path = write_script(["create event X from 2025-03-03T09:00 to"], dir=self.tmp.name)
        code, out, _ = invoke("headless", str(path))
        self.assertEqual(code, ExitCode.USAGE)
        self.assertIn("Error at line 1: Missing parameter: end date-time", out)

    def test_headless_missing_file(self):
        code, out, _ = invoke("headless", f"{self.tmp.name}/absent.txt")
        self.assertEqual(code, ExitCode.ERROR)
        self.assertTrue(out.startswith("Headless mode terminated due to error: "))


class TestInteractiveCommand(unittest.TestCase):
    def test_interactive_reads_stdin(self):
        stdin = io.StringIO("create event A on 2025-03-03\nbogus\nexit\n")
        with patch("sys.stdin", stdin):
            code, out, _ = invoke("interactive")
        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines(), [
            "Single all day event created: A",
            "Error: Invalid command: bogus",
            "Exiting Calendar App.",
        ])


class TestBinWrapper(unittest.TestCase):
    def test_wrapper_exists(self):
        self.assertTrue(bin_path("calendars").exists())

    def test_wrapper_runs_exec(self):
        proc = run_bin("calendars", "exec", "show", "status", "on", "2025-03-03T09:00")
        self.assertEqual(proc.returncode, 0, msg=proc.stderr)
        self.assertEqual(proc.stdout.strip(), "Status at 2025-03-03T09:00: Available")

    def test_wrapper_help(self):
        proc = run_bin("calendars", "--help")
        self.assertEqual(proc.returncode, 0)
        self.assertIn("interactive", proc.stdout)


if __name__ == "__main__":
    unittest.main()

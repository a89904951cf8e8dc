"""Tests for the headless and interactive command loops."""
from __future__ import annotations

import io
import json
import tempfile
import unittest
from pathlib import Path

from calendars.pipeline import (
    ScriptProcessor,
    ScriptProducer,
    ScriptRequest,
    ScriptResult,
    run_interactive,
)
from core.cli_errors import ExitCode
from core.pipeline import ResultEnvelope, run_pipeline
from tests.fixtures import make_session, make_writer, write_script


class TestScriptProcessor(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.session = make_session()

    def _run(self, lines):
        path = write_script(lines, dir=self.tmp.name)
        env = ScriptProcessor().process(ScriptRequest(path=path, session=self.session))
        self.assertTrue(env.ok())
        return env.payload

    def test_runs_until_exit(self):
        result = self._run([
            "create event Standup from 2025-03-03T09:00 to 2025-03-03T09:15",
            "",
            "print events on 2025-03-03",
            "exit",
            "create event Never on 2025-03-04",
        ])
        self.assertEqual(result.lines, [
            "Processing command (1): create event Standup from 2025-03-03T09:00 to 2025-03-03T09:15",
            "Single timed event created: Standup",
            "Processing command (3): print events on 2025-03-03",
            "Events on 2025-03-03:\n - Standup (09:00 to 09:15) at ",
            "Processing command (4): exit",
            "Exiting Calendar App.",
        ])
        self.assertIsNone(result.failed_line)
        self.assertEqual(result.exit_code, ExitCode.SUCCESS)
        self.assertEqual(len(self.session.active), 1)

    def test_exit_is_case_insensitive(self):
        result = self._run(["EXIT"])
        self.assertEqual(result.lines[-1], "Exiting Calendar App.")

    def test_first_failure_aborts(self):
        result = self._run([
            "create event A on 2025-03-03",
            "",
            "use calendar --name Missing",
            "create event B on 2025-03-04",
        ])
        self.assertEqual(result.lines[-1], "Error at line 3: Calendar Missing not found.")
        self.assertEqual(result.failed_line, 3)
        self.assertEqual(result.exit_code, ExitCode.NOT_FOUND)
        self.assertEqual([e.name for e in self.session.active.events], ["A"])

    def test_date_overflow_keeps_earlier_lines(self):
        result = self._run([
            "create event A on 2025-03-03",
            "create event X on 9999-12-31 repeats U for 3 times",
        ])
        self.assertEqual(result.lines[:2], [
            "Processing command (1): create event A on 2025-03-03",
            "Single all day event created: A",
        ])
        self.assertEqual(result.lines[-1], "Error at line 2: Recurring event X runs past the last supported date.")
        self.assertEqual(result.exit_code, ExitCode.USAGE)

    def test_script_without_exit_runs_to_end(self):
        result = self._run(["create event A on 2025-03-03", "create event B on 2025-03-04"])
        self.assertEqual(len(result.lines), 4)
        self.assertEqual(result.exit_code, ExitCode.SUCCESS)

    def test_unreadable_file(self):
        missing = Path(self.tmp.name) / "nope.txt"
        env = ScriptProcessor().process(ScriptRequest(path=missing, session=self.session))
        result = env.payload
        self.assertEqual(len(result.lines), 1)
        self.assertTrue(result.lines[0].startswith("Headless mode terminated due to error: "))
        self.assertEqual(result.exit_code, ExitCode.ERROR)


class TestScriptProducer(unittest.TestCase):
    def test_text_output(self):
        writer, out, _ = make_writer()
        producer = ScriptProducer(writer)
        producer.produce(ResultEnvelope(status="success", payload=ScriptResult(lines=["one", "two"])))
        self.assertEqual(out.getvalue(), "one\ntwo\n")

    def test_json_output(self):
        writer, out, _ = make_writer("json")
        ScriptProducer(writer)._produce_success(ScriptResult(lines=["x"], failed_line=2, exit_code=1), None)
        data = json.loads(out.getvalue())
        self.assertEqual(data, {"lines": ["x"], "failed_line": 2, "exit_code": 1})

    def test_pipeline_returns_script_exit_code(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        path = write_script(["print events on not-a-date"], dir=tmp.name)
        writer, out, _ = make_writer()
        code = run_pipeline(ScriptRequest(path, make_session()), ScriptProcessor(), ScriptProducer(writer))
        self.assertEqual(code, ExitCode.USAGE)
        self.assertIn("Error at line 1: Invalid date 'not-a-date'", out.getvalue())


class TestInteractive(unittest.TestCase):
    def test_errors_do_not_stop_the_loop(self):
        session = make_session()
        writer, out, _ = make_writer()
        stdin = io.StringIO(
            "create event A on 2025-03-03\n"
            "\n"
            "frobnicate\n"
            "show status on 2025-03-03T12:00\n"
            "exit\n"
            "create event B on 2025-03-04\n"
        )
        code = run_interactive(session, stdin, writer)
        self.assertEqual(code, 0)
        self.assertEqual(out.getvalue().splitlines(), [
            "Single all day event created: A",
            "Error: Invalid command: frobnicate",
            "Status at 2025-03-03T12:00: Busy",
            "Exiting Calendar App.",
        ])
        self.assertEqual(len(session.active), 1)

    def test_series_past_last_date_is_reported(self):
        session = make_session()
        writer, out, _ = make_writer()
        stdin = io.StringIO(
            "create event X on 9999-12-31 repeats U for 3 times\n"
            "create event A on 2025-03-03\n"
        )
        run_interactive(session, stdin, writer)
        lines = out.getvalue().splitlines()
        self.assertEqual(lines[0], "Error: Recurring event X runs past the last supported date.")
        self.assertEqual(lines[1], "Single all day event created: A")
        self.assertEqual([e.name for e in session.active.events], ["A"])

    def test_eof_ends_loop(self):
        writer, out, _ = make_writer()
        run_interactive(make_session(), io.StringIO("use calendar --name Default\n"), writer)
        self.assertEqual(out.getvalue(), "Using calendar: Default\n")

    def test_prompt_is_written(self):
        writer, out, _ = make_writer()
        run_interactive(make_session(), io.StringIO(""), writer, prompt="> ")
        self.assertEqual(out.getvalue(), "> ")


if __name__ == "__main__":
    unittest.main()

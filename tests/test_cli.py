import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock

from wrapped import cli
from wrapped.models import PersonaResult

from fixtures import assistant_record, summary_record, text_block, tool_block, user_record, write_jsonl


def judged_persona() -> PersonaResult:
    return PersonaResult(
        persona="THE_EXPLORER",
        confidence=0.7,
        reasoning="Asks why a lot.",
        secondary_persona=None,
        roast="So many questions.",
        compliment="Curious mind.",
    )


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.claude_dir = self.root / "project" / ".claude"
        self.out_dir = self.root / "out"

        self._env = mock.patch.dict(os.environ, {"WRAPPED_YEAR": "2025"}, clear=True)
        self._env.start()
        self._path_check = mock.patch.object(
            cli, "validate_output_path", return_value=(True, str(self.out_dir), None)
        )
        self.path_check = self._path_check.start()

    def tearDown(self) -> None:
        self._path_check.stop()
        self._env.stop()
        self._tmp.cleanup()

    def write_session(self) -> None:
        write_jsonl(self.claude_dir / "projects" / "p" / "session.jsonl", [
            user_record("u1", "2025-04-02T10:00:00Z", "Please write a small parser for the config files"),
            assistant_record("a1", "2025-04-02T10:00:05Z", [
                text_block("You're absolutely right, let me write it."),
                tool_block("Write", {"file_path": "/p/parser.py", "content": "a\nb"}),
            ]),
            user_record("u2", "2025-04-03T10:00:00Z", "why does the parser skip blank lines here?"),
            summary_record("Config parser"),
        ])

    def run_cli(self, *argv) -> tuple:
        stdout, stderr = io.StringIO(), io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            code = cli.main(list(argv))
        return code, stdout.getvalue(), stderr.getvalue()


class GenTests(CliTestCase):
    def test_generates_report_files_without_judge(self) -> None:
        self.write_session()

        code, stdout, _ = self.run_cli("gen", "-d", str(self.claude_dir), "--no-judge")

        self.assertEqual(code, 0)
        self.assertTrue((self.out_dir / "index.html").exists())
        self.assertTrue((self.out_dir / "sample_prompts.txt").exists())
        data = json.loads((self.out_dir / "data.json").read_text(encoding="utf-8"))
        self.assertEqual(data["metrics"]["total_prompts"], 2)
        self.assertEqual(data["metrics"]["lines_written"], 2)
        self.assertEqual(data["summaries"], ["Config parser"])
        self.assertEqual(data["year_summary"], "Your year with Claude was one for the books.")
        self.assertEqual(data["year"], 2025)
        self.assertIn("You are", stdout)

    def test_sample_prompts_file(self) -> None:
        self.write_session()

        self.run_cli("gen", "-d", str(self.claude_dir), "--no-judge")
        samples = (self.out_dir / "sample_prompts.txt").read_text(encoding="utf-8")

        self.assertIn("Please write a small parser for the config files", samples)
        self.assertIn("why does the parser skip blank lines here?", samples)

    def test_no_entries_for_year_exits_1(self) -> None:
        self.write_session()

        code, _, stderr = self.run_cli("gen", "-d", str(self.claude_dir), "--no-judge", "--year", "2024")

        self.assertEqual(code, 1)
        self.assertIn("No conversations found for 2024", stderr)

    def test_missing_directory_exits_1(self) -> None:
        code, _, stderr = self.run_cli("gen", "-d", str(self.root / "nope"), "--no-judge")

        self.assertEqual(code, 1)
        self.assertIn("Could not find any .claude directories", stderr)

    def test_invalid_output_path_exits_1(self) -> None:
        self.write_session()
        self.path_check.return_value = (False, "/etc/x", "Cannot write to system directory: /etc")

        code, _, stderr = self.run_cli("gen", "-d", str(self.claude_dir), "--no-judge", "-o", "/etc/x")

        self.assertEqual(code, 1)
        self.assertIn("Invalid output path", stderr)
        self.assertFalse(self.out_dir.exists())

    def test_missing_api_key_falls_back(self) -> None:
        self.write_session()

        with mock.patch.object(cli, "evaluate_persona") as evaluate:
            code, _, stderr = self.run_cli("gen", "-d", str(self.claude_dir), "-y")

        self.assertEqual(code, 0)
        evaluate.assert_not_called()
        self.assertIn("ANTHROPIC_API_KEY not set", stderr)

    def test_judge_result_is_used(self) -> None:
        self.write_session()
        os.environ["ANTHROPIC_API_KEY"] = "test-key"

        with mock.patch.object(cli, "evaluate_persona", return_value=judged_persona()) as evaluate, \
                mock.patch.object(cli, "generate_summary", return_value="Big year.") as summarize:
            code, _, _ = self.run_cli("gen", "-d", str(self.claude_dir), "-y", "--model", "m-test")

        self.assertEqual(code, 0)
        self.assertEqual(evaluate.call_args.kwargs["model"], "m-test")
        self.assertEqual(summarize.call_args.args[3], ["Config parser"])
        data = json.loads((self.out_dir / "data.json").read_text(encoding="utf-8"))
        self.assertEqual(data["persona"], "THE_EXPLORER")
        self.assertEqual(data["persona_name"], "The Explorer")
        self.assertEqual(data["year_summary"], "Big year.")

    def test_judge_failure_falls_back(self) -> None:
        self.write_session()
        os.environ["ANTHROPIC_API_KEY"] = "test-key"

        with mock.patch.object(cli, "evaluate_persona", return_value=None), \
                mock.patch.object(cli, "generate_summary") as summarize:
            code, _, stderr = self.run_cli("gen", "-d", str(self.claude_dir), "-y")

        self.assertEqual(code, 0)
        summarize.assert_not_called()
        self.assertIn("LLM judge failed", stderr)
        data = json.loads((self.out_dir / "data.json").read_text(encoding="utf-8"))
        self.assertEqual(data["year_summary"], "Your year with Claude was one for the books.")

    def test_declining_confirmation_skips_judge(self) -> None:
        self.write_session()
        os.environ["ANTHROPIC_API_KEY"] = "test-key"

        with mock.patch.object(cli, "evaluate_persona") as evaluate, \
                mock.patch("builtins.input", return_value="n"):
            code, _, stderr = self.run_cli("gen", "-d", str(self.claude_dir))

        self.assertEqual(code, 0)
        evaluate.assert_not_called()
        self.assertIn("Using deterministic persona instead", stderr)


class OtherCommandTests(CliTestCase):
    def test_list_without_directories(self) -> None:
        with mock.patch.object(cli, "scan_for_claude_dirs", return_value=[]):
            code, _, stderr = self.run_cli("list")

        self.assertEqual(code, 1)
        self.assertIn("No .claude directories found", stderr)

    def test_list_shows_directories(self) -> None:
        self.write_session()
        found = [cli.describe_directory(self.claude_dir)]

        with mock.patch.object(cli, "scan_for_claude_dirs", return_value=found):
            code, stdout, _ = self.run_cli("list")

        self.assertEqual(code, 0)
        self.assertIn("1. project", stdout)
        self.assertIn("1 convos", stdout)

    def test_help(self) -> None:
        code, stdout, _ = self.run_cli("help")

        self.assertEqual(code, 0)
        self.assertIn("wrapped gen [options]", stdout)

    def test_no_command_prints_usage(self) -> None:
        code, stdout, _ = self.run_cli()

        self.assertEqual(code, 0)
        self.assertIn("usage: wrapped", stdout)


if __name__ == "__main__":
    unittest.main()

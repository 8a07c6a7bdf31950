import argparse
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from wrapped import config


def args(**overrides) -> argparse.Namespace:
    values = dict(
        year=None, output=None, model=None, no_judge=False, yes=False,
        global_only=False, history=False, open=False, dir=None,
    )
    values.update(overrides)
    return argparse.Namespace(**values)


class LoadConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            result = config.load_config()

        self.assertEqual(result.year, config.YEAR)
        self.assertEqual(result.output_dir, config.DEFAULT_OUTPUT_DIR)
        self.assertEqual(result.model, config.DEFAULT_MODEL)
        self.assertTrue(result.use_judge)

    def test_environment_overrides_defaults(self) -> None:
        with mock.patch.dict(os.environ, {"WRAPPED_YEAR": "2024", "WRAPPED_MODEL": "m1"}, clear=True):
            result = config.load_config(args())

        self.assertEqual(result.year, 2024)
        self.assertEqual(result.output_dir, "./output/wrapped-2024")
        self.assertEqual(result.model, "m1")

    def test_flags_override_environment(self) -> None:
        with mock.patch.dict(os.environ, {"WRAPPED_YEAR": "2024", "WRAPPED_MODEL": "m1"}, clear=True):
            result = config.load_config(args(
                year=2023, output="out", model="m2", no_judge=True, yes=True,
                global_only=True, history=True, open=True, dir=["a", "b"],
            ))

        self.assertEqual(result.year, 2023)
        self.assertEqual(result.output_dir, "out")
        self.assertEqual(result.model, "m2")
        self.assertFalse(result.use_judge)
        self.assertTrue(result.assume_yes)
        self.assertTrue(result.global_only)
        self.assertTrue(result.include_history)
        self.assertTrue(result.open_browser)
        self.assertEqual(result.directories, ["a", "b"])

    def test_check_environment(self) -> None:
        with mock.patch.dict(os.environ, {"ANTHROPIC_API_KEY": "k"}, clear=True):
            self.assertEqual(config.check_environment(), {"anthropic_key": True})
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertEqual(config.check_environment(), {"anthropic_key": False})


class ValidateOutputPathTests(unittest.TestCase):
    def test_path_inside_home_is_valid(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            home = Path(tmpdir).resolve()
            valid, resolved, error = config.validate_output_path(str(home / "out"), home=home)

        self.assertTrue(valid)
        self.assertEqual(resolved, str(home / "out"))
        self.assertIsNone(error)

    def test_traversal_is_rejected(self) -> None:
        valid, _, error = config.validate_output_path("out/../../elsewhere")

        self.assertFalse(valid)
        self.assertIn("..", error)

    def test_outside_home_and_cwd_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as home, tempfile.TemporaryDirectory() as other:
            with mock.patch("os.getcwd", return_value=str(Path(home).resolve())):
                valid, _, error = config.validate_output_path(other, home=Path(home).resolve())

        self.assertFalse(valid)
        self.assertIn("home directory", error)

    def test_system_directory_is_rejected(self) -> None:
        with mock.patch("os.getcwd", return_value="/"):
            valid, _, error = config.validate_output_path("/usr/wrapped", home=Path("/"))

        self.assertFalse(valid)
        self.assertIn("/usr", error)

    def test_root_may_write_inside_its_home(self) -> None:
        with mock.patch("os.getcwd", return_value="/"):
            valid, _, error = config.validate_output_path("/root/wrapped-out", home=Path("/root"))
            other_valid, _, _ = config.validate_output_path("/root/wrapped-out", home=Path("/home/dev"))

        self.assertTrue(valid, error)
        self.assertFalse(other_valid)


if __name__ == "__main__":
    unittest.main()

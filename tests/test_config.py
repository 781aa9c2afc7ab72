import os
import tempfile
import unittest
from pathlib import Path

from pydantic import ValidationError

from audio_catalog.config import ConfigError, Settings, find_config, load_settings


class TestSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = Settings()
        self.assertEqual(settings.processing.worker_concurrency, 4)
        self.assertEqual(settings.logging.level, "INFO")
        self.assertEqual(settings.logging.quiet_loggers, ["mutagen"])
        self.assertIsNone(settings.logging.warnings_log)
        self.assertEqual(settings.output.indent, 2)

    def test_load_yaml(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "audio-catalog.yaml"
            path.write_text(
                "processing:\n  worker_concurrency: 8\nlogging:\n  level: debug\noutput:\n  indent: null\n",
                encoding="utf-8",
            )
            settings = Settings.load(path)
        self.assertEqual(settings.processing.worker_concurrency, 8)
        self.assertEqual(settings.logging.level, "DEBUG")
        self.assertIsNone(settings.output.indent)
        self.assertTrue(settings.output.skip_unsupported)

    def test_empty_yaml_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "empty.yaml"
            path.write_text("", encoding="utf-8")
            self.assertEqual(Settings.load(path), Settings())

    def test_rejects_zero_workers(self) -> None:
        with self.assertRaises(ValidationError):
            Settings.model_validate({"processing": {"worker_concurrency": 0}})


class TestFindConfig(unittest.TestCase):
    def setUp(self) -> None:
        self._cwd = os.getcwd()
        self._tmp = tempfile.TemporaryDirectory()
        os.chdir(self._tmp.name)

    def tearDown(self) -> None:
        os.chdir(self._cwd)
        self._tmp.cleanup()

    def test_none_when_absent(self) -> None:
        self.assertIsNone(find_config(None))
        self.assertEqual(load_settings(None), Settings())

    def test_finds_file_in_cwd(self) -> None:
        Path("audio-catalog.yml").write_text("processing:\n  worker_concurrency: 2\n", encoding="utf-8")
        self.assertEqual(find_config(None).name, "audio-catalog.yml")
        self.assertEqual(load_settings(None).processing.worker_concurrency, 2)

    def test_missing_explicit_path(self) -> None:
        with self.assertRaises(ConfigError):
            find_config(Path("nope.yaml"))


if __name__ == "__main__":
    unittest.main()

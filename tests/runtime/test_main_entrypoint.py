import tempfile
import unittest
from dataclasses import replace
from pathlib import Path

import main
from app_config import AppConfig
from notifier import CommandNotifier, NullNotifier


class MainEntrypointTests(unittest.TestCase):
    def test_parse_args_reads_duration_flags(self) -> None:
        args = main.parse_args(["--ptime", "50m", "--rtime", "10m", "--log-level", "debug"])

        self.assertEqual("50m", args.ptime)
        self.assertEqual("10m", args.rtime)
        self.assertEqual("debug", args.log_level)
        self.assertIsNone(args.config)

    def test_missing_explicit_config_exits_with_failure(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            missing = Path(temp_dir) / "missing.toml"
            with self.assertLogs("runtime", level="ERROR"):
                self.assertEqual(1, main.main(["--config", str(missing)]))

    def test_invalid_duration_flag_exits_with_failure(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config_path.write_text("", encoding="utf-8")
            with self.assertLogs("runtime", level="ERROR"):
                self.assertEqual(
                    1,
                    main.main(["--config", str(config_path), "--ptime", "forever"]),
                )

    def test_non_finite_config_durations_exit_with_failure(self) -> None:
        for content in ("[timer]\nwork = inf\n", "[timer]\nrest = nan\n"):
            with self.subTest(content=content):
                with tempfile.TemporaryDirectory() as temp_dir:
                    config_path = Path(temp_dir) / "config.toml"
                    config_path.write_text(content, encoding="utf-8")
                    with self.assertLogs("runtime", level="ERROR"):
                        self.assertEqual(1, main.main(["--config", str(config_path)]))

    def test_unknown_trigger_signal_exits_with_failure(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config_path.write_text(
                '[triggers]\nstop_start_signal = "SIGNOPE"\n',
                encoding="utf-8",
            )
            with self.assertLogs("runtime", level="ERROR"):
                self.assertEqual(1, main.main(["--config", str(config_path)]))

    def test_build_notifier_respects_enabled_flag(self) -> None:
        app_config = AppConfig()
        self.assertIsInstance(main.build_notifier(app_config), CommandNotifier)

        disabled = replace(app_config, notifier=replace(app_config.notifier, enabled=False))
        self.assertIsInstance(main.build_notifier(disabled), NullNotifier)


if __name__ == "__main__":
    unittest.main()

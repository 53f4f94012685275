import tempfile
import textwrap
import unittest
from pathlib import Path
from unittest.mock import patch

from app_config import (
    AppConfig,
    AppConfigurationError,
    apply_overrides,
    load_app_config,
    parse_log_level,
    resolve_config_path,
)
from notifier import NotifierConfig


def _write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


class AppConfigLoadingTests(unittest.TestCase):
    def test_defaults_when_no_config_file_present(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with patch("app_config.Path.cwd", return_value=Path(temp_dir)):
                app_config = load_app_config(environ={})

        self.assertEqual(AppConfig(), app_config)
        self.assertEqual(25 * 60, app_config.timer.work_seconds)
        self.assertEqual(5 * 60, app_config.timer.rest_seconds)
        self.assertEqual(1.0, app_config.timer.tick_seconds)
        self.assertIsNone(app_config.source_file)

    def test_explicit_missing_config_file_is_an_error(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            missing = Path(temp_dir) / "nope.toml"
            with self.assertRaises(AppConfigurationError):
                load_app_config(str(missing), environ={})
            with self.assertRaises(AppConfigurationError):
                load_app_config(environ={"POMODORO_CONFIG_FILE": str(missing)})

    def test_load_app_config_parses_all_sections(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            config_path = root / "config.toml"
            _write_text(
                config_path,
                textwrap.dedent(
                    """
                    [timer]
                    work = "50m"
                    rest = 600
                    tick_seconds = "500ms"

                    [notifier]
                    enabled = false
                    command = ["bin/prompt", "--title", "{prompt}"]
                    prompt_template = "{ending} is over, {starting} next"

                    [triggers]
                    stop_start_signal = "SIGHUP"
                    pause_resume_signal = "usr2"

                    [logging]
                    level = "debug"
                    """
                ).strip(),
            )

            app_config = load_app_config(str(config_path), environ={})

            self.assertEqual(str(config_path), app_config.source_file)
            self.assertEqual(3000.0, app_config.timer.work_seconds)
            self.assertEqual(600.0, app_config.timer.rest_seconds)
            self.assertEqual(0.5, app_config.timer.tick_seconds)
            self.assertFalse(app_config.notifier.enabled)
            self.assertEqual(
                (str((root / "bin/prompt").resolve()), "--title", "{prompt}"),
                app_config.notifier.command,
            )
            self.assertEqual(
                "{ending} is over, {starting} next",
                app_config.notifier.prompt_template,
            )
            self.assertEqual("SIGHUP", app_config.triggers.stop_start_signal)
            self.assertEqual("usr2", app_config.triggers.pause_resume_signal)
            self.assertEqual("DEBUG", app_config.logging.level)

    def test_config_file_env_variable_is_used(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "pomodoro.toml"
            _write_text(config_path, '[timer]\nwork = "1m"\n')

            app_config = load_app_config(environ={"POMODORO_CONFIG_FILE": str(config_path)})

            self.assertEqual(60.0, app_config.timer.work_seconds)
            self.assertEqual(
                config_path,
                resolve_config_path(environ={"POMODORO_CONFIG_FILE": str(config_path)}),
            )

    def test_invalid_values_are_rejected_with_field_names(self) -> None:
        cases = {
            '[timer]\nwork = "soon"\n': "timer.work",
            "[timer]\ntick_seconds = 0\n": "timer.tick_seconds",
            "[timer]\nwork = inf\n": "timer.work",
            "[timer]\nrest = nan\n": "timer.rest",
            "[timer]\ntick_seconds = nan\n": "timer.tick_seconds",
            "[notifier]\ncommand = [1, 2]\n": "notifier.command",
            '[notifier]\nenabled = "maybe"\n': "notifier.enabled",
            '[logging]\nlevel = "chatty"\n': "logging.level",
            'timer = "25m"\n': "[timer]",
        }
        for content, field in cases.items():
            with self.subTest(field=field):
                with tempfile.TemporaryDirectory() as temp_dir:
                    config_path = Path(temp_dir) / "config.toml"
                    _write_text(config_path, content)

                    with self.assertRaises(AppConfigurationError) as context:
                        load_app_config(str(config_path), environ={})

                    self.assertIn(field, str(context.exception))

    def test_example_config_matches_builtin_defaults(self) -> None:
        example_path = Path(__file__).resolve().parents[2] / "config.example.toml"

        app_config = load_app_config(str(example_path), environ={})
        notifier_config = NotifierConfig.from_settings(app_config.notifier)
        defaults = NotifierConfig()

        self.assertEqual(defaults.command, notifier_config.command)
        self.assertEqual(defaults.prompt_template, notifier_config.prompt_template)
        self.assertEqual(defaults.prompt_input, notifier_config.prompt_input)
        self.assertEqual(AppConfig().timer, app_config.timer)

    def test_malformed_toml_is_reported(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(config_path, "[timer\nwork = ")

            with self.assertRaises(AppConfigurationError) as context:
                load_app_config(str(config_path), environ={})

            self.assertIn("Failed to parse config TOML", str(context.exception))

    def test_command_line_overrides_take_precedence(self) -> None:
        app_config = apply_overrides(
            AppConfig(),
            work="2s",
            rest="1",
            log_level="warning",
        )

        self.assertEqual(2.0, app_config.timer.work_seconds)
        self.assertEqual(1.0, app_config.timer.rest_seconds)
        self.assertEqual("WARNING", app_config.logging.level)

    def test_invalid_override_names_the_flag(self) -> None:
        with self.assertRaises(AppConfigurationError) as context:
            apply_overrides(AppConfig(), rest="later")
        self.assertIn("--rtime", str(context.exception))

    def test_parse_log_level_returns_logging_constant(self) -> None:
        self.assertEqual(10, parse_log_level("debug"))
        self.assertEqual(40, parse_log_level("ERROR"))


if __name__ == "__main__":
    unittest.main()

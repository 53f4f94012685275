import argparse
import logging
import signal
import sys
from typing import Callable, Optional, Sequence

from app_config import (
    AppConfig,
    AppConfigurationError,
    apply_overrides,
    load_app_config,
    parse_log_level,
)
from notifier import (
    CommandNotifier,
    NotifierConfig,
    NotifierConfigurationError,
    NullNotifier,
)
from pomodoro.contracts import NotifierLike
from runtime import RuntimeBootstrap, RuntimeEngine, RuntimeHooks
from triggers import (
    SignalTriggerSource,
    TriggerConfig,
    TriggerConfigurationError,
)


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("runtime")


def setup_shutdown_handlers(request_shutdown: Callable[[], None]) -> None:
    """Set up graceful shutdown on SIGTERM and SIGINT."""

    def signal_handler(signum: int, frame) -> None:
        request_shutdown()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)


def build_trigger_source(
    config: TriggerConfig,
    on_stop_start: Callable[[], None],
    on_pause_resume: Callable[[], None],
) -> SignalTriggerSource:
    return SignalTriggerSource(
        config,
        on_stop_start=on_stop_start,
        on_pause_resume=on_pause_resume,
        logger=logging.getLogger("triggers"),
    )


def build_notifier(app_config: AppConfig) -> NotifierLike:
    notifier_config = NotifierConfig.from_settings(app_config.notifier)
    if not notifier_config.enabled:
        return NullNotifier(logger=logging.getLogger("notifier"))
    return CommandNotifier(notifier_config, logger=logging.getLogger("notifier"))


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Work/rest interval timer controlled by signals: SIGUSR1 starts or "
            "stops, SIGUSR2 pauses or resumes."
        ),
    )
    parser.add_argument(
        "--config",
        default=None,
        help="path to config.toml (default: $POMODORO_CONFIG_FILE or ./config.toml)",
    )
    parser.add_argument(
        "--ptime",
        default=None,
        help="length of each work session, e.g. 25m (default: 25m)",
    )
    parser.add_argument(
        "--rtime",
        default=None,
        help="length of each rest session, e.g. 5m (default: 5m)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="logging level: DEBUG, INFO, WARNING, ERROR or CRITICAL",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the signal-controlled pomodoro timer."""
    args = parse_args(argv)
    logger = setup_logging(level=logging.INFO)

    try:
        app_config = load_app_config(args.config)
        app_config = apply_overrides(
            app_config,
            work=args.ptime,
            rest=args.rtime,
            log_level=args.log_level,
        )
    except AppConfigurationError as error:
        logger.error("App configuration error: %s", error)
        return 1

    logging.getLogger().setLevel(parse_log_level(app_config.logging.level))
    if app_config.source_file:
        logger.info("Loaded runtime config: %s", app_config.source_file)

    try:
        trigger_config = TriggerConfig.from_settings(app_config.triggers)
        notifier = build_notifier(app_config)
    except (TriggerConfigurationError, NotifierConfigurationError) as error:
        logger.error("Configuration error: %s", error)
        return 1

    engine = RuntimeEngine(
        RuntimeBootstrap(
            logger=logger,
            app_config=app_config,
            trigger_config=trigger_config,
            notifier=notifier,
            hooks=RuntimeHooks(
                setup_shutdown_handlers=setup_shutdown_handlers,
                build_trigger_source=build_trigger_source,
            ),
        )
    )
    return engine.run()


if __name__ == "__main__":
    sys.exit(main())

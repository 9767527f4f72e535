"""Entry point for the Task Lists desktop app."""

import argparse
import logging
import logging.handlers
import random
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QTimer

import config
from dispatcher import Action, Dispatcher
from errors import ConfigError
from storage import TomlKeyValueStore
from store import Store
from window import MainWindow

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="tasklists", description="Task list manager")
    parser.add_argument("--data", type=Path, help="TOML file holding the saved lists")
    parser.add_argument("--config", type=Path, default=config.CONFIG_TOML,
                        help="config file (default: %(default)s)")
    parser.add_argument("--log-level", choices=config.LOG_LEVELS, type=str.upper,
                        help="log level for the log file")
    return parser.parse_args(argv)


def setup_logging(level: str, log_path: Path) -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path, maxBytes=1024 * 1024, backupCount=3, encoding="utf-8"
        )
    except OSError as e:
        file_handler = None
        sys.stderr.write(f"tasklists: not logging to {log_path}: {e}\n")
    if file_handler is not None:
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    ))
    root_logger.addHandler(console_handler)


def resolve_config(args: argparse.Namespace) -> config.Config:
    try:
        cfg = config.load_config(args.config)
    except ConfigError as e:
        logger.warning("Ignoring config: %s", e)
        cfg = config.Config()
    if args.data:
        cfg.data_path = args.data.expanduser()
    if args.log_level:
        cfg.log_level = args.log_level
    return cfg


def build(cfg: config.Config, loading: bool = True) -> tuple[Store, Dispatcher, MainWindow]:
    store = Store.open(TomlKeyValueStore(cfg.data_path), cfg.storage_key, loading=loading)
    dispatcher = Dispatcher(store)
    for action in Action:
        dispatcher.on(action, lambda details, action=action: logger.debug("%s %s", action, details))
    window = MainWindow(store, dispatcher)
    return store, dispatcher, window


def main(argv=None):
    args = parse_args(argv)
    cfg = resolve_config(args)
    setup_logging(cfg.log_level, cfg.log_path)
    logger.info("Starting with data file %s", cfg.data_path)

    app = QApplication(sys.argv[:1])
    app.setApplicationName("Task Lists")
    app.setStyle("Fusion")

    store, _dispatcher, window = build(cfg)
    window.show()

    low, high = cfg.startup_delay
    QTimer.singleShot(int(random.uniform(low, high) * 1000), store.finish_loading)

    sys.exit(app.exec())


if __name__ == "__main__":
    main()

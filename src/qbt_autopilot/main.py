#!/usr/bin/env python3
"""Main entry point for the qBittorrent automation service."""

import logging
import signal
import sys
from datetime import datetime
from threading import Event

import uvicorn

from .api import create_app
from .api.app_state import AppState
from .automation import QbtAutomation
from .config import Config
from .constants import MessageCategory
from .events import EventBus
from .notifier import Notifier
from .utils import parse_bool


class PrettyFormatter(logging.Formatter):
    """Console formatter: dim timestamp, colored level marker, message.

    Bus messages echoed by ``log_message`` carry a ``category`` attribute
    and are marked with the category symbol instead of the level one.
    """

    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'

    LEVEL_STYLES = {
        'DEBUG': ('\033[36m', '·'),
        'INFO': ('\033[32m', '✔'),
        'WARNING': ('\033[33m', '⚠'),
        'ERROR': ('\033[31m', '✗'),
        'CRITICAL': ('\033[35m', '✗'),
    }

    CATEGORY_SYMBOLS = {
        MessageCategory.ADD: '＋',
        MessageCategory.REMOVE: '－',
        MessageCategory.INFO: 'ℹ',
        MessageCategory.ERROR: '✗',
    }

    def __init__(self, use_colors=True):
        super().__init__()
        self.use_colors = use_colors and sys.stdout.isatty()

    def format(self, record):
        color, symbol = self.LEVEL_STYLES.get(record.levelname, ('', '•'))
        category = getattr(record, 'category', None)
        if category is not None:
            symbol = self.CATEGORY_SYMBOLS.get(category, symbol)

        time_str = datetime.fromtimestamp(record.created).strftime('%H:%M:%S')
        message = record.getMessage()

        if not self.use_colors:
            formatted = f"{time_str} {symbol} {record.levelname:8} {message}"
        elif record.levelno >= logging.WARNING:
            formatted = f"{self.DIM}{time_str}{self.RESET} {color}{symbol} {record.levelname:8}{self.RESET} {message}"
        elif category is not None:
            # Bus messages stand out from component chatter
            formatted = f"{self.DIM}{time_str}{self.RESET} {color}{symbol}{self.RESET} {self.BOLD}{message}{self.RESET}"
        else:
            formatted = f"{self.DIM}{time_str}{self.RESET} {color}{symbol}{self.RESET} {message}"

        if record.exc_info:
            formatted += f"\n{self.formatException(record.exc_info)}"
        return formatted


def setup_logging(debug=False):
    """Install the pretty console handler on the root logger."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    level = logging.DEBUG if debug else logging.INFO
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(PrettyFormatter())
    console_handler.setLevel(level)
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    if not debug:
        # Request-level chatter from the Web API client
        for name in ('urllib3', 'qbittorrentapi'):
            logging.getLogger(name).setLevel(logging.WARNING)


logger = logging.getLogger(__name__)


def print_banner():
    """Print a startup banner."""
    banner = """
╔══════════════════════════════════════════════════════════╗
║            qBittorrent Autopilot v1.0                    ║
╚══════════════════════════════════════════════════════════╝"""
    print(banner)


def log_message(message, category, source):
    """Echo bus messages to the log."""
    level = logging.ERROR if category == MessageCategory.ERROR else logging.INFO
    logger.log(level, f"[{source}] {message}", extra={"category": category})


def build_automation(config: Config) -> QbtAutomation:
    """Wire the event bus, notifier and automation together."""
    events = EventBus()
    notifier = Notifier.from_config(config.notifications)
    events.on_message(log_message)
    events.on_message(notifier.send_message)
    events.on_download_complete(notifier.notify_download_complete)
    return QbtAutomation(config, events)


def main():
    """Main entry point."""
    setup_logging(debug=parse_bool("DEBUG", False))
    print_banner()

    config = Config.from_environment()
    automation = build_automation(config)

    # SIGUSR1 runs the seed check right away
    signal.signal(signal.SIGUSR1, lambda signum, frame: automation.check_seed_now())

    logger.info(f"qBittorrent: {config.connection.host}:{config.connection.port}")
    logger.info(
        f"Seeding limits: {config.seed.days}d / ratio {config.seed.ratio:.2f}"
        f"{' | public trackers removed on completion' if config.seed.remove_public_when_complete else ''}"
    )
    logger.info(f"Archive dir: {config.ingest.loaded_torrents_path}")
    if config.behavior.dry_run:
        logger.info("Mode: Dry run (nothing will be removed)")
    print("─" * 60)

    automation.setup()

    try:
        if config.web.enabled:
            app = create_app(AppState(automation))
            logger.info(f"Web API listening on {config.web.host}:{config.web.port}")
            uvicorn.run(app, host=config.web.host, port=config.web.port, log_level="warning")
        else:
            shutdown = Event()
            signal.signal(signal.SIGTERM, lambda signum, frame: shutdown.set())
            shutdown.wait()
    except KeyboardInterrupt:
        pass
    finally:
        logger.info("Shutdown requested - goodbye! 👋")
        automation.stop(timeout=5)


if __name__ == "__main__":
    main()

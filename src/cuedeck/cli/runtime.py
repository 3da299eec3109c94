"""Shared helpers for commands that run the console."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import click

from cuedeck.console import ConsoleApplication
from cuedeck.exceptions import format_error_for_display
from cuedeck.models import AppConfig

logger = logging.getLogger(__name__)

DEFAULT_LOG_DIR = Path.home() / ".cuedeck" / "logs"


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> Path:
    """
    Configure logging for the application.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode logging to ./cuedeck-debug.log
        log_file: Custom log file path (optional)
        log_level: Log level used with a custom log file

    Returns:
        Path of the log file
    """
    if debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    if log_file:
        level = getattr(logging, log_level.upper())

    if debug and not log_file:
        log_path = Path.cwd() / "cuedeck-debug.log"
    elif log_file:
        log_path = log_file
    else:
        DEFAULT_LOG_DIR.mkdir(parents=True, exist_ok=True)
        log_path = DEFAULT_LOG_DIR / "cuedeck.log"

    formatter = logging.Formatter(
        '%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Keeps last 5 files, max 10MB each
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")
    return log_path


def start_logging(options: dict) -> Path:
    """Configure logging from the options stored on the click context."""
    return setup_logging(
        options.get('verbose', 0),
        options.get('debug', False),
        options.get('log_file'),
        options.get('log_level', 'INFO'),
    )


def build_application(options: dict) -> ConsoleApplication:
    """Load configuration, apply command-line overrides and build the console."""
    config_obj = AppConfig.load_or_default(options.get('config_path'))

    overrides = {}
    if options.get('port'):
        overrides['serial_port'] = options['port']
    if options.get('universes'):
        overrides['universe_count'] = options['universes']
    if overrides:
        config_obj = config_obj.model_copy(update=overrides)

    return ConsoleApplication(config_obj)


def echo_error(error: Exception) -> None:
    """Print an error and its recovery hint without a traceback."""
    message, hint = format_error_for_display(error)
    click.echo(f"error: {message}", err=True)
    if hint:
        click.echo(f"  {hint}", err=True)

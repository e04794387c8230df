"""Logging for the exporter: colored console output, an optional log file and run progress."""

import logging
import logging.handlers
import time
from typing import Any, Dict, Optional

import colorlog

LOGGER_NAME = 'notion_jekyll_exporter'

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

LEVEL_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'red,bg_white',
}

# Config keys whose values are never written to the log.
SECRET_KEYS = {'api_token'}

REDACTED = '***REDACTED***'


def setup_logging(level: Optional[str] = 'INFO', log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger and return it.

    Handlers from an earlier call are closed and replaced.

    Args:
        level: Level name from ``logging.level`` (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path of a rotating log file

    Raises:
        ValueError: If the level name is unknown
    """
    level_name = (level or 'INFO').upper()
    if level_name not in LEVEL_COLORS:
        raise ValueError(f"Invalid log level '{level}'. Must be one of: {', '.join(LEVEL_COLORS)}")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level_name))
    # Records are handled here only; keeps dependency noise out of our output.
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(colorlog.ColoredFormatter(
        fmt='%(log_color)s' + LOG_FORMAT,
        datefmt=DATE_FORMAT,
        log_colors=LEVEL_COLORS
    ))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(file_handler)
        logger.info(f"Logging to file: {log_file}")

    return logger


class ProgressTracker:
    """
    Counts posts as they are exported and logs one summary line on exit.

    An exception leaving the ``with`` block is not suppressed; the summary then
    names the post the run stopped at.
    """

    def __init__(self, total: int, logger: Optional[logging.Logger] = None):
        self.total = total
        self.done = 0
        self.logger = logger or logging.getLogger(LOGGER_NAME)
        self._started = 0.0

    def __enter__(self) -> 'ProgressTracker':
        self._started = time.monotonic()
        return self

    def advance(self, filename: str) -> None:
        self.done += 1
        self.logger.debug(f"[{self.done}/{self.total}] {filename}")

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        elapsed = time.monotonic() - self._started
        if exc_type is None:
            self.logger.info(f"Exported {self.done}/{self.total} post(s) in {elapsed:.1f}s")
        else:
            self.logger.error(
                f"Stopped at post {self.done + 1} of {self.total} after {elapsed:.1f}s; "
                f"{self.done} post(s) were exported before the failure"
            )
        return False


def redact_secrets(config: Any) -> Any:
    """Return a copy of ``config`` with every value under a secret key masked."""
    if isinstance(config, dict):
        return {
            key: REDACTED if key in SECRET_KEYS and value else redact_secrets(value)
            for key, value in config.items()
        }
    if isinstance(config, list):
        return [redact_secrets(item) for item in config]
    return config


def log_section(title: str) -> None:
    logger = logging.getLogger(LOGGER_NAME)
    logger.info("=" * 60)
    logger.info(f"  {title.upper()}")
    logger.info("=" * 60)


def log_config(config: Dict[str, Any]) -> None:
    """Log the effective settings of this run, secrets masked."""
    logger = logging.getLogger(LOGGER_NAME)
    safe = redact_secrets(config)

    log_section("Configuration")

    notion = safe.get('notion', {})
    logger.info(f"Notion API: {notion.get('base_url')} (version {notion.get('api_version')})")
    logger.info(f"Database ID: {notion.get('database_id')}")
    logger.info(f"API Token: {notion.get('api_token') or 'Not Set'}")

    export_settings = safe.get('export', {})
    logger.info(f"Output Directory: {export_settings.get('output_directory')}")
    logger.info(f"Permalink Prefix: {export_settings.get('permalink_prefix')}")
    logger.info(f"Image Proxy: {export_settings.get('image_proxy_url')}")

    advanced = safe.get('advanced', {})
    logger.debug(
        f"Request timeout {advanced.get('request_timeout')}s, "
        f"max retries {advanced.get('max_retries')}, "
        f"rate limit {advanced.get('rate_limit')}s, "
        f"page size {advanced.get('page_size')}"
    )


__all__ = [
    'LOGGER_NAME',
    'setup_logging',
    'ProgressTracker',
    'redact_secrets',
    'log_section',
    'log_config'
]

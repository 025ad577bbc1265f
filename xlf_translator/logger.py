import json
import logging
import os
from pathlib import Path

LOG_DIR = Path(__file__).parent.parent / "logs"
LOG_FILE = LOG_DIR / "app.log"
DEFAULT_CONFIG_FILE = Path(__file__).parent.parent / "config" / "config.json"
DEFAULT_LOG_MODE = 'off'

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Cache for log mode to avoid repeated config reads
_log_mode_cache = None

# Names of loggers handed out by get_logger
_managed_loggers = set()


def _get_log_mode():
    """Get log mode from configuration."""
    global _log_mode_cache
    if _log_mode_cache is not None:
        return _log_mode_cache

    # Read directly: the config module logs through this one
    log_mode = os.environ.get('XLF_LOG_MODE')
    if not log_mode:
        config_file = Path(os.environ.get('XLF_CONFIG_FILE') or DEFAULT_CONFIG_FILE)
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                log_mode = json.load(f).get('log_mode', DEFAULT_LOG_MODE)
        except (OSError, ValueError, AttributeError):
            log_mode = DEFAULT_LOG_MODE
    _log_mode_cache = log_mode
    return log_mode


def _levels_for(log_mode: str):
    """Return (logger level, console level) for a log mode."""
    if log_mode == 'debug':
        return logging.DEBUG, logging.DEBUG
    if log_mode == 'off':
        # Higher than CRITICAL disables everything
        return logging.CRITICAL + 1, logging.CRITICAL + 1
    return logging.INFO, logging.INFO


def _configure(logger: logging.Logger, log_mode: str) -> None:
    """Bring a logger's level and handlers in line with the log mode."""
    logger_level, console_level = _levels_for(log_mode)
    logger.setLevel(logger_level)
    log_format = logging.Formatter(LOG_FORMAT)

    file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
    console_handlers = [
        h for h in logger.handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
    ]

    if log_mode == 'off':
        for handler in file_handlers:
            handler.close()
            logger.removeHandler(handler)
        for handler in console_handlers:
            handler.setLevel(console_level)
        return

    if not file_handlers:
        LOG_DIR.mkdir(exist_ok=True)
        f_handler = logging.FileHandler(LOG_FILE, encoding='utf-8')
        f_handler.setLevel(logging.DEBUG)
        f_handler.setFormatter(log_format)
        logger.addHandler(f_handler)

    if not console_handlers:
        c_handler = logging.StreamHandler()
        c_handler.setFormatter(log_format)
        logger.addHandler(c_handler)
        console_handlers = [c_handler]

    for handler in console_handlers:
        handler.setLevel(console_level)


def refresh_log_mode():
    """Clear the log mode cache and update all existing loggers (call this when config is updated)."""
    global _log_mode_cache
    _log_mode_cache = None

    log_mode = _get_log_mode()
    for name in _managed_loggers:
        _configure(logging.getLogger(name), log_mode)


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    _configure(logger, _get_log_mode())
    _managed_loggers.add(name)
    return logger

"""
Centralized logging for xliff12.

Every module asks for its logger through get_logger(__name__). Library use
stays silent: records propagate to the "xliff12" logger, which only carries
a NullHandler until an application calls setup_logging(). The CLI does that
once at startup, adding:
- Console (stderr, level from settings)
- File (only when settings.log_file is set, captures DEBUG)
"""
import logging
import os
import sys

from .settings_manager import get_settings

PACKAGE_LOGGER = "xliff12"
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s() | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """
    Returns the logger for a module. Names outside the package are nested
    under "xliff12" so that setup_logging() covers them too.

    Args:
        name: Usually __name__ of the calling module.
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def setup_logging() -> logging.Logger:
    """
    Attaches console and file handlers to the package logger.
    Safe to call more than once.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)

    # Avoid adding handlers multiple times
    if any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        return logger

    settings = get_settings()
    logger.setLevel(logging.DEBUG)
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(settings.log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if settings.log_file:
        log_dir = os.path.dirname(os.path.abspath(settings.log_file))
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def setup_exception_hook():
    """
    Installs a global exception hook to log uncaught exceptions before exit.
    Call this once at CLI startup.
    """
    crash_logger = get_logger("crash")

    def exception_hook(exc_type, exc_value, exc_tb):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_tb)
            return
        crash_logger.critical("Uncaught exception!", exc_info=(exc_type, exc_value, exc_tb))
        sys.__excepthook__(exc_type, exc_value, exc_tb)

    sys.excepthook = exception_hook

# -- Imports --
import logging
import os
import sys
from datetime import datetime


# Level can be set with e.g. ORBITAL_CLOUD_LOG_LEVEL=DEBUG
LOG_LEVEL_ENV = "ORBITAL_CLOUD_LOG_LEVEL"

_loggers = {}

_DEFAULT_FORMAT = "%(asctime)s | %(name)-28s | %(levelname)-8s | %(message)s"
_DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_DEFAULT_LEVEL = logging.INFO

_handlers_configured = False
_file_handler = None


def _configure_root_handler():
    """Attach one stdout handler to the root logger, on first get_logger() call"""
    global _handlers_configured

    if _handlers_configured:
        return

    env_level = os.environ.get(LOG_LEVEL_ENV, "").upper()
    level = logging.getLevelName(env_level) if env_level else _DEFAULT_LEVEL
    if not isinstance(level, int):
        level = _DEFAULT_LEVEL

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter(_DEFAULT_FORMAT, datefmt=_DEFAULT_DATE_FORMAT)
    )

    # Streamlit reruns re-import modules; don't stack handlers
    if not root_logger.handlers:
        root_logger.addHandler(console_handler)

    _handlers_configured = True


def get_logger(name):
    """
    Logger for a module, sharing the package-wide format and level

    :param name: module name, usually __name__
    :return: logging.Logger
    """
    if name not in _loggers:
        _configure_root_handler()
        _loggers[name] = logging.getLogger(name)

    return _loggers[name]


def set_log_level(level):
    """Set the level of the root logger and all of its handlers"""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers:
        handler.setLevel(level)


def enable_file_logging(filename=None, level=logging.DEBUG):
    """
    Also write log records to a file

    :param filename: log file path; a timestamped name when None
    :param level: level for the file handler
    :return: path of the log file
    """
    global _file_handler

    if filename is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"orbital_cloud_{timestamp}.log"

    disable_file_logging()

    _file_handler = logging.FileHandler(filename, encoding='utf-8')
    _file_handler.setLevel(level)
    _file_handler.setFormatter(
        logging.Formatter(_DEFAULT_FORMAT, datefmt=_DEFAULT_DATE_FORMAT)
    )

    root_logger = logging.getLogger()
    root_logger.addHandler(_file_handler)

    if root_logger.level > level:
        root_logger.setLevel(level)

    return filename


def disable_file_logging():
    global _file_handler

    if _file_handler is not None:
        root_logger = logging.getLogger()
        root_logger.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None


def silence_logger(name):
    """Only let WARNING and above through for a (third-party) logger"""
    logging.getLogger(name).setLevel(logging.WARNING)


def _configure_third_party():
    silence_logger("scipy")
    # Streamlit's file watcher is chatty at DEBUG
    silence_logger("watchdog")


_configure_third_party()

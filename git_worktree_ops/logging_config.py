"""Logging setup for git-worktree-ops"""
import logging
import sys
from pathlib import Path

PACKAGE_PREFIX = 'git_worktree_ops.'

DETAILED_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
SHORT_FORMAT = '[%(name)s] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

LEVEL_COLORS = {
    logging.DEBUG: '\033[36m',
    logging.INFO: '\033[32m',
    logging.WARNING: '\033[33m',
    logging.ERROR: '\033[31m',
    logging.CRITICAL: '\033[35m',
}
RESET = '\033[0m'


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name when stderr is a terminal."""

    def format(self, record):
        color = LEVEL_COLORS.get(record.levelno)
        if color is None or not sys.stderr.isatty():
            return super().format(record)
        original = record.levelname
        record.levelname = f"{color}{original}{RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def get_log_file() -> Path:
    """Location of the debug log file."""
    return Path.home() / '.git-worktree-ops' / 'git-worktree-ops.log'


def _file_handler() -> logging.Handler:
    log_file = get_log_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, mode='w')
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(fmt=DETAILED_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """
    Configure the root logger.

    WARNING by default, INFO with ``verbose``, DEBUG with ``debug``. Debug
    mode also uses the detailed format and writes everything to
    :func:`get_log_file`, overwritten on each run.
    """
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    if debug:
        console_handler.setFormatter(ColoredFormatter(fmt=DETAILED_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(_file_handler())
    else:
        console_handler.setFormatter(ColoredFormatter(fmt=SHORT_FORMAT))
    root_logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, named without the package prefix (``git.switcher``)."""
    if name.startswith(PACKAGE_PREFIX):
        name = name[len(PACKAGE_PREFIX):]
    if name.startswith('services.'):
        name = name[len('services.'):]
    return logging.getLogger(name)

"""Logging setup for Taskpal.

Log records go to a file in the data directory so they never interleave
with the conversation on the console. ``--verbose`` adds a console handler.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from .config import ConfigModel


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(config: ConfigModel, verbose: bool = False) -> None:
    """Configure the ``taskpal`` logger. Call once at startup."""
    logger = logging.getLogger("taskpal")
    logger.setLevel(logging.DEBUG if verbose else getattr(logging, config.log_level, logging.INFO))
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    log_path = config.get_log_path()
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError as e:
        # Still log to the console in verbose mode; otherwise stay quiet.
        logger.addHandler(logging.NullHandler())
        file_handler = None
        if verbose:
            Console(stderr=True).print(f"[yellow]Cannot open log file {log_path}: {e}[/yellow]")

    if file_handler is not None:
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    if verbose:
        console_handler = RichHandler(console=Console(stderr=True), show_path=False)
        console_handler.setLevel(logging.DEBUG)
        logger.addHandler(console_handler)

    logging.captureWarnings(True)

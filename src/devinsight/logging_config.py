"""
Logging configuration for DevInsight.

The CLI calls :func:`setup_logging` once from its callback: ``-v`` turns on
DEBUG (generation summaries, storage wiring), ``-q`` keeps only errors, and
the default WARNING level shows collaborator gaps such as a debt analyzer or
knowledge source that could not be reached. Records go to stderr so that
``--json`` output on stdout stays parseable.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Route the devinsight logger through a stderr RichHandler.

    Messages are rendered without Rich markup, so ids and paths print verbatim.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Suppress all but ERROR level logging
        log_file: Optional file path to write logs to

    Returns:
        Configured logger instance for devinsight
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    console = Console(stderr=True)

    handlers: list[logging.Handler] = [
        RichHandler(
            console=console,
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=handlers)

    logger = logging.getLogger("devinsight")
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the ``devinsight`` namespace.

    Args:
        name: Module name (e.g., 'devinsight.code.engine')
              If None, returns the root devinsight logger

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger("devinsight")

    if not name.startswith("devinsight"):
        name = f"devinsight.{name}"

    return logging.getLogger(name)

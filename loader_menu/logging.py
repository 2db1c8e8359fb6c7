from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from loguru import Logger

from loguru import logger

DEFAULT_LOG_DIR = Path(
    os.environ.get(
        "LOADER_MENU_LOG_DIR",
        Path.home() / ".local" / "state" / "loader-menu" / "logs",
    )
)

# Note: TRACE level already exists in loguru at level 5 (below DEBUG which is 10)


def _should_log_keypress(record) -> bool:
    """Filter keypress logs - only show in TRACE mode."""
    tags = record["extra"].get("tags", [])

    if "key" in tags:
        return record["level"].no <= logger.level("TRACE").no

    return True


def _should_log_redraw(record) -> bool:
    """Filter redraw and cache hit logs - these fire on every keypress."""
    message = record["message"].lower()

    if "redraw" in message or "cached" in message:
        return record["level"].no <= logger.level("TRACE").no

    return True


def _combined_filter(record) -> bool:
    """Combined filter for all log suppression rules."""
    return _should_log_keypress(record) and _should_log_redraw(record)


def setup_logging(
    *,
    debug: bool = False,
    trace: bool = False,
    log_dir: Path | None = None,
) -> Logger:
    """
    Setup logging for the menu engine.

    The console belongs to the menu while it is running, so the stderr
    sink stays at WARNING unless debugging was requested.

    Log Files:
    - menu.log: INFO+ events (7 day retention)
    - debug.log: DEBUG+ (or TRACE+) events when --debug/--trace is enabled

    Args:
        debug: Enable DEBUG level logging
        trace: Enable TRACE level logging (every keypress and redraw)
        log_dir: Custom log directory (defaults to ~/.local/state/loader-menu/logs)
    """
    logger.remove()
    logger.configure(extra={"tags": [], "source": "APP"})

    if trace:
        console_level = "TRACE"
    elif debug:
        console_level = "DEBUG"
    else:
        console_level = "WARNING"

    # SINK 1: Console (stderr)
    logger.add(
        sys.stderr,
        level=console_level,
        backtrace=False,
        diagnose=False,
        filter=_combined_filter,
        colorize=True,
        format=(
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{extra[source]: <10}</cyan> | "
            "{message}"
        ),
    )

    log_dir = log_dir or DEFAULT_LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    # SINK 2: Session log - important events only (INFO+)
    logger.add(
        log_dir / "menu.log",
        level="INFO",
        rotation="5 MB",
        retention="7 days",
        compression="zip",
        backtrace=False,
        diagnose=False,
        filter=_combined_filter,
        format=(
            "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
            "{level: <8} | "
            "{extra[source]: <10} | "
            "{message}"
        ),
    )

    # SINK 3: Debug log - detailed diagnostics, keypresses included at TRACE
    if debug or trace:
        logger.add(
            log_dir / "debug.log",
            level="TRACE" if trace else "DEBUG",
            rotation="10 MB",
            retention="3 days",
            compression="zip",
            backtrace=True,
            diagnose=True,
            format=(
                "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
                "{level: <8} | "
                "{extra[source]: <10} | "
                "{extra[tags]} | "
                "{message}"
            ),
        )

    return logger


def get_logger(
    *,
    tags: Iterable[str] | None = None,
    source: str | None = None,
) -> Logger:
    """
    Get a logger with bound context.

    Args:
        tags: Tags for filtering (e.g., ["menu", "key"])
        source: Source component (e.g., "menu", "autoboot")

    Returns:
        Logger with bound context
    """
    extras: dict[str, object] = {}
    if tags is not None:
        extras["tags"] = list(tags)
    if source is not None:
        extras["source"] = source
    return logger.bind(**extras)


class LoggerFactory:
    """Factory for domain-specific loggers with source and tags pre-bound."""

    @staticmethod
    def for_menu() -> Logger:
        """Logger for menu drawing, dispatch and navigation."""
        return logger.bind(source="menu", tags=["ui", "menu"])

    @staticmethod
    def for_keys() -> Logger:
        """Logger for individual keypresses (TRACE only)."""
        return logger.bind(source="menu", tags=["menu", "key"])

    @staticmethod
    def for_autoboot() -> Logger:
        """Logger for the autoboot countdown."""
        return logger.bind(source="autoboot", tags=["autoboot"])

    @staticmethod
    def for_boot() -> Logger:
        """Logger for boot control and environment changes."""
        return logger.bind(source="boot", tags=["boot", "system"])

    @staticmethod
    def for_system() -> Logger:
        """Logger for startup, shutdown and command line handling."""
        return logger.bind(source="system", tags=["system"])

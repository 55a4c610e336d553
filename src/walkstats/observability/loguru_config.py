"""Loguru configuration with timing helpers.

This module provides centralized loguru configuration with:
- Colored console output
- Structured JSON log files per component, when a log directory is given
- Context managers and decorators for timing operations

Components: windows, aggregator, labels, chart.
"""

from __future__ import annotations

import functools
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Generator

__all__ = [
    "COMPONENTS",
    "configure_loguru",
    "get_logger",
    "log_timing",
    "timing_context",
]

COMPONENTS = ("windows", "aggregator", "labels", "chart")

F = TypeVar("F", bound=Callable[..., Any])


def configure_loguru(
    *,
    log_dir: Path | None = None,
    level: str = "INFO",
    rotation: str = "100 MB",
    retention: str = "10 days",
    compression: str = "zip",
    enable_console: bool = True,
    enable_timing_logs: bool = True,
) -> None:
    """Configure loguru sinks.

    Parameters
    ----------
    log_dir
        Directory for JSON log files (default: console only)
    level
        Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    rotation
        Log rotation policy (e.g., "100 MB", "1 day")
    retention
        Log retention policy (e.g., "10 days", "1 week")
    compression
        Compression for rotated logs (zip, gz, bz2, xz)
    enable_console
        Enable console output
    enable_timing_logs
        Enable separate timing log file (needs log_dir)

    Example
    -------
    >>> configure_loguru(log_dir=Path("logs"), level="DEBUG")
    """
    logger.remove()
    logger.configure(extra={"component": "walkstats"})

    if enable_console:
        logger.add(
            sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{extra[component]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>",
            level=level,
            colorize=True,
            backtrace=True,
            diagnose=False,
        )

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_dir / "walkstats.jsonl",
            format="{message}",
            level=level,
            rotation=rotation,
            retention=retention,
            compression=compression,
            serialize=True,
            backtrace=True,
            diagnose=False,
        )

        if enable_timing_logs:
            logger.add(
                log_dir / "timing.jsonl",
                format="{message}",
                level="DEBUG",
                rotation=rotation,
                retention=retention,
                compression=compression,
                serialize=True,
                filter=lambda record: record["extra"].get("timing", False),
            )

        for component in COMPONENTS:
            logger.add(
                log_dir / f"{component}.jsonl",
                format="{message}",
                level=level,
                rotation=rotation,
                retention=retention,
                compression=compression,
                serialize=True,
                filter=lambda record, comp=component: record["extra"].get("component") == comp,
            )

    logger.bind(component="walkstats").debug(
        "Loguru configured", log_dir=str(log_dir) if log_dir else None, level=level
    )


def get_logger(component: str = "walkstats") -> Any:
    """Get logger instance bound to a component.

    Parameters
    ----------
    component
        Component name (windows, aggregator, labels, chart)

    Returns
    -------
    Logger
        Loguru logger bound to component
    """
    return logger.bind(component=component)


@contextmanager
def timing_context(
    operation: str,
    *,
    component: str = "walkstats",
    **metadata: Any,
) -> Generator[dict[str, Any], None, None]:
    """Time an operation and log START/END records.

    Yields
    ------
    dict
        Context dictionary; keys added inside the block are logged with END

    Example
    -------
    >>> with timing_context("build_chart_series", component="chart") as ctx:
    ...     series = build()
    ...     ctx["buckets"] = len(series.buckets)
    """
    start_ns = time.perf_counter_ns()
    context: dict[str, Any] = {"operation": operation, "component": component, **metadata}
    bound = logger.bind(component=component, timing=True, operation=operation)

    bound.debug(f"START: {operation}", phase="start", **metadata)

    try:
        yield context
    finally:
        duration_ns = time.perf_counter_ns() - start_ns
        bound.debug(
            f"END: {operation}",
            phase="end",
            duration_ms=duration_ns / 1_000_000,
            duration_ns=duration_ns,
            **{k: v for k, v in context.items() if k not in ("operation", "component")},
        )


def log_timing(component: str = "walkstats") -> Callable[[F], F]:
    """Decorator wrapping a function call in timing_context."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            operation = f"{func.__module__}.{func.__name__}"
            with timing_context(operation, component=component):
                return func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator

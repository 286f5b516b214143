"""Timing helpers for search and ranking.

Elapsed times are reported through loguru. A threshold of ``None`` means
"use ``SEARCH_TIMING_THRESHOLD_MS`` from the active settings", so slow-search
reporting can be tuned per deployment without touching call sites.
"""

import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable

from loguru import logger

from ..config.settings import get_settings


def _resolve_threshold(threshold_ms: float | None) -> float:
    if threshold_ms is None:
        return get_settings().SEARCH_TIMING_THRESHOLD_MS
    return threshold_ms


def _report(operation: str, elapsed_ms: float, log_level: str) -> None:
    # Anything slower than a second is worth seeing at INFO
    if elapsed_ms > 1000 and log_level.upper() == "DEBUG":
        logger.info(f"{operation} took {elapsed_ms / 1000:.2f}s")
        return
    logger.log(log_level.upper(), f"{operation} took {elapsed_ms:.2f}ms")


@contextmanager
def timer(operation: str, log_level: str = "DEBUG", threshold_ms: float | None = 0):
    """Time the enclosed block and log it when it reaches ``threshold_ms``.

    Args:
        operation: Label used in the log line
        log_level: loguru level name
        threshold_ms: Minimum elapsed time worth logging; None reads the settings

    Example:
        >>> with timer(f"Search over {len(snapshot)} records", threshold_ms=None):
        ...     ranked = rank_by_similarity(query, candidates, top=10)
    """
    threshold = _resolve_threshold(threshold_ms)
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        if elapsed_ms >= threshold:
            _report(operation, elapsed_ms, log_level)


def timed(operation: str | None = None, threshold_ms: float | None = None):
    """Decorator form of ``timer``.

    Args:
        operation: Label used in the log line (defaults to the qualified function name)
        threshold_ms: Minimum elapsed time worth logging; None reads the settings

    Example:
        >>> @timed("find_closest")
        ... def find_closest(query, corpus, corpus_vectors=None, top_k=3): ...
    """
    def decorator(func: Callable) -> Callable:
        op_name = operation or f"{func.__module__}.{func.__name__}"

        @wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            with timer(op_name, threshold_ms=threshold_ms):
                return func(*args, **kwargs)

        return wrapper
    return decorator

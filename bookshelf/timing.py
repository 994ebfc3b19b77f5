import functools
import time
from typing import Any, Callable

from .logger import get_logger

logger = get_logger(__name__)


def format_duration(seconds: float) -> str:
    """Render a duration with an automatically chosen unit (μs, ms or s)."""
    if seconds < 0.001:
        return f"{seconds * 1_000_000:.3f} μs"
    if seconds < 1.0:
        return f"{seconds * 1000:.3f} ms"
    return f"{seconds:.3f} s"


def timeit(threshold: float = 1.0):
    """
    Decorator that logs how long the wrapped call took.

    Calls slower than ``threshold`` seconds are logged at WARNING, the rest
    at INFO. The duration is logged even when the call raises.

    Args:
        threshold: Time in seconds above which a call counts as slow.
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                execution_time = time.perf_counter() - start_time
                level = "warning" if execution_time >= threshold else "info"
                getattr(logger, level)(f"{func.__name__}() → {format_duration(execution_time)}")

        return wrapper

    return decorator

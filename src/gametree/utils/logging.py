from __future__ import annotations
import logging
from functools import wraps
from typing import Any, Callable


def log_calls(
    logger_name: str | None = None, level: int = logging.DEBUG
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator to log method calls (name and arguments) and any exception they raise."""

    def _decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        name = logger_name or func.__module__
        logger = logging.getLogger(name)

        @wraps(func)
        def _wrapper(*args: Any, **kwargs: Any) -> Any:
            # Skip ``self`` and tree payloads
            shown = [repr(a) for a in args[1:] if not hasattr(a, "children")]
            shown.extend(f"{k}={v!r}" for k, v in kwargs.items() if not hasattr(v, "children"))
            logger.log(level, "%s(%s)", func.__qualname__, ", ".join(shown))
            try:
                return func(*args, **kwargs)
            except Exception:
                logger.exception("%s failed", func.__qualname__)
                raise

        return _wrapper

    return _decorator


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging for CLI runs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

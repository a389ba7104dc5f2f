from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable, Mapping, Optional, Sequence, TypeVar, cast

F = TypeVar("F", bound=Callable[..., Any])

_MAX_ITEMS = 5
_MAX_LENGTH = 200


def _summarize(value: Any) -> str:
    # Landmark trees are deep and shared; their symbol identifies them.
    symbol = getattr(value, "symbol", None)
    kind = getattr(value, "kind", None)
    if isinstance(symbol, str) and kind is not None:
        return f"<{getattr(kind, 'value', kind)} {symbol}>"

    if isinstance(value, Mapping):
        parts = [f"{key!r}: {_summarize(item)}" for key, item in list(value.items())[:_MAX_ITEMS]]
        if len(value) > _MAX_ITEMS:
            parts.append(f"... ({len(value)} items)")
        return "{" + ", ".join(parts) + "}"

    if isinstance(value, (list, tuple)):
        parts = [_summarize(item) for item in value[:_MAX_ITEMS]]
        if len(value) > _MAX_ITEMS:
            parts.append(f"... ({len(value)} items)")
        return "[" + ", ".join(parts) + "]"

    rendered = repr(value)
    if len(rendered) > _MAX_LENGTH:
        return rendered[:_MAX_LENGTH] + "... (truncated)"
    return rendered


def _describe_call(args: Sequence[Any], kwargs: Mapping[str, Any]) -> str:
    rendered = [_summarize(arg) for arg in args]
    rendered.extend(f"{key}={_summarize(value)}" for key, value in kwargs.items())
    return ", ".join(rendered)


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Log entry and exit of the decorated function at DEBUG level.

    Arguments and results are summarised: landmarks by kind and symbol,
    containers by their first few items.
    """

    def decorator(func: F) -> F:
        label = name or func.__qualname__

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)
            logger.debug("Entering %s(%s)", label, _describe_call(args, kwargs))
            result = func(*args, **kwargs)
            if log_result:
                logger.debug("Exiting %s -> %s", label, _summarize(result))
            else:
                logger.debug("Exiting %s", label)
            return result

        return cast(F, wrapper)

    return decorator


__all__ = ["debug_log_call"]

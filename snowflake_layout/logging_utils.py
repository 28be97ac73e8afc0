from __future__ import annotations

import inspect
import logging
import reprlib
from functools import wraps
from typing import Any, Callable, Iterable, MutableMapping, Optional, Sequence, Set, TypeVar, cast

import numpy as np

from .geometry import Line, Point

F = TypeVar("F", bound=Callable[..., Any])

_repr = reprlib.Repr()
_repr.maxother = 160
_repr.maxdict = 10
_repr.maxlist = 10
_repr.maxtuple = 10
_repr.maxset = 10


def _format_point(point: Point) -> str:
    return f"({point.x:.6g}, {point.y:.6g})"


def _safe_repr(value: Any, *, max_items: int = 5, max_length: int = 400) -> str:
    if isinstance(value, Point):
        return _format_point(value)
    if isinstance(value, Line):
        return f"{_format_point(value.point1)}->{_format_point(value.point2)}"

    if isinstance(value, np.ndarray):
        summary = f"ndarray(shape={tuple(value.shape)}, dtype={value.dtype})"
        if value.size == 0:
            return summary
        if value.size <= max_items:
            return f"{summary}, values={_repr.repr(value.tolist())}"
        return f"{summary}, min={float(value.min()):.6g}, max={float(value.max()):.6g}"

    if isinstance(value, dict):
        items = []
        for idx, (key, val) in enumerate(value.items()):
            if idx >= max_items:
                items.append("...")
                break
            items.append(f"{_safe_repr(key)}: {_safe_repr(val)}")
        return "{" + ", ".join(items) + "}"

    if isinstance(value, (list, tuple)):
        open_br, close_br = ("(", ")") if isinstance(value, tuple) else ("[", "]")
        items = []
        for idx, item in enumerate(value):
            if idx >= max_items:
                items.append("...")
                break
            items.append(_safe_repr(item))
        return f"{open_br}{', '.join(items)}{close_br}"

    try:
        rendered = _repr.repr(value)
    except Exception as exc:  # pragma: no cover - broken __repr__ on host objects
        rendered = f"<repr-error {exc!r}>"
    if len(rendered) > max_length:
        return rendered[:max_length] + "... (truncated)"
    return rendered


def _format_arguments(args: Sequence[Any], kwargs: MutableMapping[str, Any]) -> str:
    parts = []
    if args:
        parts.append("args=[" + ", ".join(_safe_repr(arg) for arg in args) + "]")
    if kwargs:
        parts.append(
            "kwargs={"
            + ", ".join(f"{key}={_safe_repr(value)}" for key, value in kwargs.items())
            + "}"
        )
    if not parts:
        return "no-args"
    return ", ".join(parts)


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Return a decorator that emits DEBUG logs for every call of the wrapped function."""

    def decorator(func: F) -> F:
        if getattr(func, "_debug_logging_wrapped", False):
            return func

        qualname = name or getattr(func, "__qualname__", getattr(func, "__name__", "<callable>"))

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)
            logger.debug("Entering %s (%s)", qualname, _format_arguments(args, kwargs))
            try:
                result = func(*args, **kwargs)
            except Exception:
                logger.exception("Exception in %s", qualname)
                raise
            if log_result:
                logger.debug("Exiting %s -> %s", qualname, _safe_repr(result))
            else:
                logger.debug("Exiting %s", qualname)
            return result

        setattr(wrapper, "_debug_logging_wrapped", True)
        return cast(F, wrapper)

    return decorator


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *,
    logger: Optional[logging.Logger] = None,
    skip: Optional[Iterable[str]] = None,
) -> None:
    """Wrap the public module-level functions of ``namespace`` with DEBUG tracing.

    Classes are left alone; private helpers (leading underscore) are skipped
    to keep the trace readable.
    """

    module_name = namespace.get("__name__")
    if not isinstance(module_name, str):  # pragma: no cover - always set for real modules
        module_name = None
    logger = logger or logging.getLogger(module_name or __name__)
    skip_set: Set[str] = set(skip or [])

    for name, value in list(namespace.items()):
        if name in skip_set or name.startswith("_"):
            continue
        if inspect.isfunction(value) and getattr(value, "__module__", None) == module_name:
            namespace[name] = debug_log_call(logger, name=name)(value)


__all__ = ["apply_debug_logging", "debug_log_call"]

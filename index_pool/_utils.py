from __future__ import annotations

import logging


def log_obj(
    logger: logging.Logger,
    obj: object,
    level: int,
    msg: str,
    *args: object,
) -> None:
    """Logs ``msg`` prefixed with ``obj._log_prefix``, or with ``repr(obj)``
    when the object has no prefix of its own."""
    prefix = getattr(obj, "_log_prefix", None)
    if prefix is None:
        prefix = f"{obj!r}: "
    logger.log(level, prefix + msg, *args)


def check_index(index: object, name: str = "index") -> int:
    """Validates that ``index`` is a natural number and returns it.

    ``bool`` is rejected even though it is an ``int`` subclass.

    >>> check_index(3)
    3
    >>> check_index(-1)
    Traceback (most recent call last):
        ...
    ValueError: index must be non-negative, got -1
    """
    if isinstance(index, bool) or not isinstance(index, int):
        raise TypeError(f"{name} must be an int, got {type(index).__name__}")
    if index < 0:
        raise ValueError(f"{name} must be non-negative, got {index}")
    return index

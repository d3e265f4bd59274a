"""Utilities for development."""

import logging
import os
from functools import partial, partialmethod, wraps
from typing import Any, Callable, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

DEBUG_ENV_VAR = "ANNOTATION_VALIDATOR_DEBUG"


def get_func_name(func: Callable, qualname: bool = False) -> str:
    """
    Retrieve the (qualified) name of a function, resolving partials and wrappers.

    Parameters:
        func (Callable): The function, partial function, method, or wrapped callable.
        qualname (bool): If True, return the qualified name (e.g., including class).

    Returns:
        str: The resolved function name.

    Raises:
        TypeError: If the input is not a recognizable callable.
    """
    while isinstance(func, (partial, partialmethod)):
        func = func.func

    while hasattr(func, "__wrapped__"):
        func = getattr(func, "__wrapped__")

    if hasattr(func, "__name__"):
        return getattr(func, "__qualname__" if qualname else "__name__")

    if hasattr(func, "__call__"):
        return get_func_name(getattr(func, "__call__"), qualname)

    raise TypeError(f"Cannot resolve name from non-callable object: {func!r}")


def get_type_name(cls: Any, qualname: bool = False) -> str:
    """
    Retrieve the name or qualified name of a type.

    Typing constructs without a ``__name__`` (``typing.Any`` on older
    interpreters, parametrized generics) fall back to ``str()``.
    """
    if qualname and hasattr(cls, "__qualname__"):
        return getattr(cls, "__qualname__")
    elif hasattr(cls, "__name__"):
        return getattr(cls, "__name__")
    else:
        return str(cls)


def get_full_name(cls: type) -> str:
    """Return ``module.QualifiedName`` of a class."""
    return f"{cls.__module__}.{get_type_name(cls, qualname=True)}"


def log_debug(func: F) -> F:
    """
    Decorator to log function calls and results in debug mode.

    Tracing is enabled when the environment variable
    ``ANNOTATION_VALIDATOR_DEBUG`` is ``TRUE`` at decoration time; otherwise
    the function is returned untouched.
    """
    if os.getenv(DEBUG_ENV_VAR, "FALSE").upper() != "TRUE":
        return func

    func_name = get_func_name(func, qualname=True)
    func_logger = logging.getLogger(f"{func.__module__}.{func_name}")

    @wraps(func)
    def wrapper(*args, **kwargs):
        if func_logger.isEnabledFor(logging.DEBUG):
            arg_str = ", ".join(repr(a) for a in args)
            kwarg_str = ", ".join(f"{k}={v!r}" for k, v in kwargs.items())
            all_args = ", ".join(filter(None, [arg_str, kwarg_str]))
            func_logger.debug(f"{func_name}({all_args})")

        result = func(*args, **kwargs)

        if func_logger.isEnabledFor(logging.DEBUG):
            func_logger.debug(f"{func_name} -> {result!r}")
        return result

    return wrapper  # type: ignore[return-value]

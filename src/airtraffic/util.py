"""
Generally useful stuff that doesn't fit anywhere else
"""

from collections.abc import Callable
from typing import TypeVar

T = TypeVar("T")


def maybe(dangerous: Callable[[], T]) -> T | None:
    """
    Executes a callable (function, lambda, etc.) and returns the result. If the callable raises an exception, the
    exception is caught and discarded, and None is returned. Only for best-effort cosmetics such as log context.
    """
    try:
        return dangerous()
    except Exception:  # pylint: disable=broad-exception-caught
        return None


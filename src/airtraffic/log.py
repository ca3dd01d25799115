"""
Console logging for the simulator process. Every line is prefixed with the caller's source location so that output from
the engine, the scheduler, and the snapshot server can be told apart without a logging framework:

    simulation/engine.py:127:FlightSimulator._advance: FL17 (IBE4821) retired at MAD
"""

import inspect
import os
import traceback
from typing import Any

from airtraffic.util import maybe


_src_root = ""  # pylint: disable=invalid-name


def set_src_root(path: str) -> None:
    """
    Set the directory prefix to strip from filenames in log message context.
    """
    global _src_root
    _src_root = os.path.abspath(path)
    if not _src_root.endswith("/"):
        _src_root += "/"


def log(*args: object, **kwargs: Any) -> None:
    """
    Log a message to the console prefixed with caller context. The arguments to this function are passed directly to
    print() after the context is printed.
    """
    _log_from(*args, **kwargs)


def log_exception(exc: BaseException) -> None:
    """
    Log the full traceback of `exc`, one log line per traceback line, attributed to the caller.
    """
    for chunk in traceback.format_exception(exc):
        for line in chunk.rstrip("\n").splitlines():
            _log_from(line)


def _log_from(*args: object, **kwargs: Any) -> None:
    # Stack at the lambdas below: lambda, maybe, _log_from, log or log_exception, caller.
    # fmt: off
    frame    = maybe(lambda: inspect.stack()[4].frame                  )
    caller   = maybe(lambda: inspect.getframeinfo(frame)               ) if frame  else None
    filename = maybe(lambda: caller.filename.removeprefix(_src_root)   ) if caller else None
    lineno   = maybe(lambda: caller.lineno                             ) if caller else None
    qualname = maybe(lambda: frame.f_code.co_qualname                  ) if frame  else None
    # fmt: on

    has_file_context = bool(filename and lineno is not None)
    has_fn_context = bool(qualname)

    if has_file_context:
        print(f"{filename}:{lineno}:", end="")
    if has_fn_context:
        print(f"{qualname}:", end="")

    if has_file_context or has_fn_context:
        print(" ", end="")

    kwargs.setdefault("flush", True)
    print(*args, **kwargs)

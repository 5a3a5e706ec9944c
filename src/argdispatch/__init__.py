"""
argdispatch - A minimal exact-match command-line flag dispatcher.

This package lets a program register handlers for named flags (with or without
a value, or bound to a boolean) plus a fallback for free arguments, then scans
the argument list once and calls each handler in input order.
"""

from .handlers import (
    BoundFlag,
    FlagRef,
    MissingValueError,
    NoValueCallback,
    ValueCallback,
)
from .parser import ArgDispatcher

__version__ = "1.0.0"
__all__ = [
    "ArgDispatcher",
    "BoundFlag",
    "FlagRef",
    "MissingValueError",
    "NoValueCallback",
    "ValueCallback",
]

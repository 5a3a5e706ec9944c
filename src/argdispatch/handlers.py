"""
Handler variants used by ArgDispatcher.

Every registered flag maps to exactly one of three handler shapes:

- ValueCallback: called with the token that follows the flag.
- NoValueCallback: called with no arguments.
- BoundFlag: sets a caller-owned FlagRef to True.

All three expose the same ``invoke(next_token)`` contract, returning the
number of tokens consumed from the argument sequence (the flag itself plus
its value, if any).
"""

import dataclasses
from typing import Callable, Optional, Union


class MissingValueError(ValueError):
    """Raised when a value flag is the last token and no value follows it."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Missing value for flag: {key}")


@dataclasses.dataclass
class FlagRef:
    """
    A mutable boolean owned by the caller.

    Python has no references to plain ``bool`` variables, so bound flags point
    at one of these instead. The dispatcher only ever sets ``value`` to True;
    the initial value is the caller's choice.

    Example:
        verbose = FlagRef()
        dispatcher.register_bound_flag("--verbose", verbose)
        dispatcher.parse(["--verbose"])
        assert verbose
    """

    value: bool = False

    def set(self) -> None:
        self.value = True

    def __bool__(self) -> bool:
        return self.value


@dataclasses.dataclass(frozen=True)
class ValueCallback:
    key: str
    callback: Callable[[str], None]

    def invoke(self, next_token: Optional[str]) -> int:
        """
        Call the callback with ``next_token``.

        Returns:
            int: 2, since both the flag and its value are consumed.

        Raises:
            MissingValueError: If there is no following token.
        """
        if next_token is None:
            raise MissingValueError(self.key)
        self.callback(next_token)
        return 2


@dataclasses.dataclass(frozen=True)
class NoValueCallback:
    key: str
    callback: Callable[[], None]

    def invoke(self, next_token: Optional[str]) -> int:
        self.callback()
        return 1


@dataclasses.dataclass(frozen=True)
class BoundFlag:
    key: str
    flag: FlagRef

    def invoke(self, next_token: Optional[str]) -> int:
        # Repeated matches leave the flag True.
        self.flag.set()
        return 1


HandlerEntry = Union[ValueCallback, NoValueCallback, BoundFlag]

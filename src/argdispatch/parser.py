"""
ArgDispatcher - exact-match command-line flag dispatch.

This module provides a registry of flag handlers keyed by exact token text
and a single-pass dispatcher that walks an argument sequence left to right,
invoking the matching handler for each token. Tokens that match no flag are
passed to an optional free-argument handler.
"""

import logging
import sys
from typing import Any, Callable, Iterable, Optional, Sequence

from result import Err, Ok, Result

from .handlers import (
    BoundFlag,
    FlagRef,
    HandlerEntry,
    MissingValueError,
    NoValueCallback,
    ValueCallback,
)

logger = logging.getLogger(__name__)

HANDLER_KINDS = ("value", "flag", "bound", "free")


def _validate_key(key: Any) -> str:
    """
    Reject keys that could never match a token.
    """
    if key is None or key == "":
        raise ValueError("Flag key must be a non-empty string")
    if not isinstance(key, str):
        raise TypeError(f"Flag key must be a string, got {type(key).__name__}")
    return key


def _validate_callback(callback: Any, key: Optional[str] = None) -> None:
    if not callable(callback):
        target = f"flag {key}" if key is not None else "free-argument handler"
        raise TypeError(f"Callback for {target} is not callable: {callback!r}")


class ArgDispatcher:
    """
    A registry of flag handlers plus a dispatcher that applies them to arguments.

    Flags are matched by exact string equality against whole tokens. Each flag
    is bound to one of three handler kinds: a value callback (receives the
    following token), a flag callback (receives nothing), or a bound flag (sets
    a FlagRef to True). Unmatched tokens go to the free-argument handler, if
    one is registered, and are dropped otherwise.

    Registration methods return the dispatcher so calls can be chained.

    Example:
        verbose = FlagRef()
        extras = []

        dispatcher = (
            ArgDispatcher()
            .register_bound_flag("--verbose", verbose)
            .register_value_handler("--file", lambda path: print(path))
            .register_free_argument_handler(extras.append)
        )
        dispatcher.parse()  # uses sys.argv[1:]
    """

    def __init__(
        self,
        handlers: Optional[Iterable[Any]] = None,
        strict: bool = False,
    ) -> None:
        """
        Initialize the dispatcher.

        Args:
            handlers: Optional handler definitions to register up-front. Each
                item is either a ``(key, kind, target)`` tuple or a
                ``{'key': ..., 'kind': ..., 'target': ...}`` dict, where kind is
                one of 'value', 'flag', 'bound' or 'free'. For 'free' the key is
                ignored and may be omitted from the dict.
            strict: If True, a value flag with no following token raises
                MissingValueError. Otherwise the flag is skipped and parsing
                stops.
        """
        self.strict: bool = strict
        self._handlers: dict[str, HandlerEntry] = {}
        self._free_handler: Optional[Callable[[str], None]] = None

        if handlers:
            for item in handlers:
                if isinstance(item, dict) and "kind" in item and "target" in item:
                    key = item.get("key")
                    kind = item["kind"]
                    target = item["target"]
                elif isinstance(item, (list, tuple)) and len(item) == 3:
                    key, kind, target = item
                else:
                    raise ValueError(
                        "Each handler must be (key, kind, target) tuple or "
                        "{'key': ..., 'kind': ..., 'target': ...} dict"
                    )
                self._register_entry(key, kind, target)

    def _register_entry(self, key: Any, kind: str, target: Any) -> None:
        if kind == "value":
            self.register_value_handler(key, target)
        elif kind == "flag":
            self.register_flag_handler(key, target)
        elif kind == "bound":
            self.register_bound_flag(key, target)
        elif kind == "free":
            self.register_free_argument_handler(target)
        else:
            raise ValueError(
                f"Unknown handler kind: {kind!r}. "
                f"Supported kinds are: {', '.join(HANDLER_KINDS)}"
            )

    def _store(self, entry: HandlerEntry) -> "ArgDispatcher":
        if entry.key in self._handlers:
            logger.debug("Overwriting handler for %s", entry.key)
        self._handlers[entry.key] = entry
        return self

    def register_value_handler(
        self, key: str, callback: Callable[[str], None]
    ) -> "ArgDispatcher":
        """
        Bind ``key`` to a callback that receives the token following the flag.

        Args:
            key: Exact token text to match, e.g. '--file'.
            callback: Called with the value token.

        Returns:
            ArgDispatcher: self, for chaining.

        Raises:
            ValueError: If key is empty or None.
            TypeError: If key is not a string or callback is not callable.
        """
        key = _validate_key(key)
        _validate_callback(callback, key)
        return self._store(ValueCallback(key, callback))

    def register_flag_handler(
        self, key: str, callback: Callable[[], None]
    ) -> "ArgDispatcher":
        """
        Bind ``key`` to a callback invoked with no arguments when the flag appears.
        """
        key = _validate_key(key)
        _validate_callback(callback, key)
        return self._store(NoValueCallback(key, callback))

    def register_bound_flag(self, key: str, flag_ref: FlagRef) -> "ArgDispatcher":
        """
        Bind ``key`` to a FlagRef that is set to True whenever the flag appears.

        The dispatcher keeps a reference to ``flag_ref`` but never initializes
        or resets it; the caller decides its starting value.
        """
        key = _validate_key(key)
        if not isinstance(flag_ref, FlagRef):
            raise TypeError(
                f"Bound flag {key} requires a FlagRef, got {type(flag_ref).__name__}"
            )
        return self._store(BoundFlag(key, flag_ref))

    def register_free_argument_handler(
        self, callback: Callable[[str], None]
    ) -> "ArgDispatcher":
        """
        Set the handler for tokens that match no registered flag.

        Only one free-argument handler exists; registering again replaces it.
        """
        _validate_callback(callback)
        if self._free_handler is not None:
            logger.debug("Overwriting free-argument handler")
        self._free_handler = callback
        return self

    @property
    def free_argument_handler(self) -> Optional[Callable[[str], None]]:
        return self._free_handler

    def get_handler(self, key: str) -> Optional[HandlerEntry]:
        return self._handlers.get(key)

    def keys(self) -> list[str]:
        """Registered flag keys in registration order."""
        return list(self._handlers)

    def __contains__(self, key: object) -> bool:
        return key in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def parse(self, args: Optional[Sequence[str]] = None) -> None:
        """
        Dispatch every token in ``args`` to its handler, left to right.

        A value flag consumes the following token, which is never looked at
        again as a flag or free argument. If a value flag is the last token its
        callback is not invoked and parsing stops (or MissingValueError is
        raised in strict mode). Exceptions raised by handlers propagate.

        Args:
            args (Optional[Sequence[str]]): Arguments to parse, excluding the
                program name. If None, uses sys.argv[1:].

        Raises:
            MissingValueError: In strict mode, if a value flag has no value.
        """
        tokens = list(sys.argv[1:] if args is None else args)
        count = len(tokens)
        i = 0
        while i < count:
            token = tokens[i]
            entry = self._handlers.get(token)

            if entry is None:
                if self._free_handler is not None:
                    logger.debug("Free argument at %d: %s", i, token)
                    self._free_handler(token)
                else:
                    logger.debug("Dropping unmatched argument at %d: %s", i, token)
                i += 1
                continue

            next_token = tokens[i + 1] if i + 1 < count else None
            if isinstance(entry, ValueCallback) and next_token is None:
                if self.strict:
                    raise MissingValueError(token)
                logger.debug("No value follows %s; stopping", token)
                return

            logger.debug("Dispatching %s at %d", token, i)
            i += entry.invoke(next_token)

    def safe_parse(self, args: Optional[Sequence[str]] = None) -> Result[None, str]:
        """
        Parse arguments without raising.

        Args:
            args (Optional[Sequence[str]]): Arguments to parse. If None, uses sys.argv[1:].
        Returns:
            Result[None, str]:
                - Ok(None) if every token was dispatched,
                - Err with the error message if parsing or a handler raised.
        """
        try:
            self.parse(args)
            return Ok(None)
        except Exception as e:
            return Err(str(e))

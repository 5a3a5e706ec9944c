#!/usr/bin/env python3
"""
Example script demonstrating the usage of ArgDispatcher.

This script registers a bound flag, a value flag, a plain flag and a
free-argument handler, then dispatches the command line.

Try:
    python basic_example.py --verbose --file readme.md --shout extra_arg
"""

import logging

from argdispatch import ArgDispatcher, FlagRef


class Options:
    def __init__(self):
        self.file_name = None
        self.shout = False
        self.extras = []

    def set_file(self, value):
        self.file_name = value

    def enable_shout(self):
        self.shout = True


if __name__ == "__main__":
    verbose = FlagRef(False)
    options = Options()

    dispatcher = (
        ArgDispatcher()
        .register_bound_flag("--verbose", verbose)
        .register_value_handler("--file", options.set_file)
        .register_flag_handler("--shout", options.enable_shout)
        .register_free_argument_handler(options.extras.append)
    )

    result = dispatcher.safe_parse()
    if result.is_err():
        raise SystemExit(f"error: {result.err()}")

    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    message = f"file={options.file_name} extras={options.extras}"
    print(message.upper() if options.shout else message)
    print(f"verbose: {bool(verbose)}")

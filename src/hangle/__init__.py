"""hangle -- Remote evaluation bridge tunneled over plain HTTP.

This package implements a long-poll REPL: the bridge repeatedly POSTs
its last result to an operator console, receives the next command,
evaluates it against a local environment and sends the result back on
the following turn. No persistent socket is ever opened -- every turn
is a single HTTP request.
"""

__version__ = "0.1.0"

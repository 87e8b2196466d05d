"""Evaluation environment for commands received over the tunnel.

The environment is an explicit registry of names that operator
expressions are evaluated against. It is created once at startup,
optionally preloaded with modules, and shared by every turn of the
session so that names assigned by one command are visible to the next.

Nothing here is sandboxed: the operator is fully trusted and gets the
same builtins any Python module would.
"""

from __future__ import annotations

import importlib
import json
import logging
import math
import numbers
import sys
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import TypeAdapter
from pydantic_core import to_jsonable_python

from hangle.domain.models import EMPTY_DESCRIPTION, PropertyDescriptor

logger = logging.getLogger(__name__)

SOURCE_NAME = "<hangle>"

_DESCRIPTORS = TypeAdapter(list[PropertyDescriptor])


class Environment:
    """Name registry plus the evaluate/describe operations over it.

    Example usage::

        env = Environment({"config": {"retries": 3}})
        env.evaluate("config['retries'] + 1")   # -> '4'
        env.describe("config")                  # -> '[{"name":"retries","type":"number"}]'
    """

    def __init__(self, names: Mapping[str, Any] | None = None) -> None:
        self._namespace: dict[str, Any] = {"__name__": "__hangle__"}
        if names:
            self._namespace.update(names)

    @property
    def namespace(self) -> dict[str, Any]:
        """The live globals mapping expressions are evaluated in."""
        return self._namespace

    def register(self, name: str, value: Any) -> None:
        """Bind a name, replacing any previous binding."""
        self._namespace[name] = value

    def setdefault(self, name: str, value: Any) -> Any:
        """Bind a name only if it is not already bound."""
        return self._namespace.setdefault(name, value)

    def __contains__(self, name: object) -> bool:
        return name in self._namespace

    def __getitem__(self, name: str) -> Any:
        return self._namespace[name]

    def preload(self, modules: Iterable[str]) -> None:
        """Import modules and bind them the way an ``import`` statement would.

        ``os.path`` binds ``os``, with ``os.path`` imported.

        Raises:
            ImportError: If a module cannot be imported.
        """
        for module_name in modules:
            importlib.import_module(module_name)
            top = module_name.partition(".")[0]
            self.register(top, sys.modules[top])
            logger.debug("Preloaded module %s", module_name)

    def evaluate(self, text: str) -> str:
        """Evaluate source text and return the payload for the next turn.

        Text is compiled as an expression first and, if that is not valid
        syntax, run as statements (whose value is ``None``). The value is
        returned as JSON indented by two spaces. Any error raised while
        compiling, running or serializing is returned as its text instead.
        """
        try:
            value = self._run(text)
            return to_json(value)
        except (Exception, SystemExit) as e:
            logger.debug("Evaluation of %r failed: %s", text, e)
            return format_error(e)

    def describe(self, text: str) -> str:
        """List the own members of the value ``text`` evaluates to.

        Returns a compact JSON array of ``{"name", "type"}`` objects in
        enumeration order, or ``"[]"`` if the target cannot be resolved
        or introspected.
        """
        try:
            target = eval(compile(text, SOURCE_NAME, "eval"), self._namespace)
            properties = [
                PropertyDescriptor(name=str(name), kind=kind_of(value))
                for name, value in own_properties(target)
            ]
        except (Exception, SystemExit) as e:
            logger.warning("Cannot describe %r: %s", text, e)
            return EMPTY_DESCRIPTION
        return _DESCRIPTORS.dump_json(properties, by_alias=True).decode()

    def _run(self, text: str) -> Any:
        try:
            code = compile(text, SOURCE_NAME, "eval")
        except SyntaxError:
            code = compile(text, SOURCE_NAME, "exec")
        return eval(code, self._namespace)


def own_properties(target: Any) -> list[tuple[Any, Any]]:
    """Return ``(name, value)`` pairs for the members a value owns.

    Mappings report their items, objects with a ``__dict__`` report its
    contents, and anything else falls back to the public names of ``dir()``.
    """
    if isinstance(target, Mapping):
        return list(target.items())
    try:
        members = vars(target)
    except TypeError:
        return [
            (name, getattr(target, name))
            for name in dir(target)
            if not name.startswith("__")
        ]
    return list(members.items())


def kind_of(value: Any) -> str:
    """Coarse run-time kind of a value, as reported in descriptions."""
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, numbers.Number):
        return "number"
    if isinstance(value, str):
        return "string"
    if value is None:
        return "undefined"
    if callable(value):
        return "function"
    return "object"


def to_json(value: Any) -> str:
    """Pretty-print a value as JSON with two-space indentation.

    Values JSON has no encoding for (models, dataclasses, datetimes, sets)
    are converted by pydantic first; anything else is sent as its ``repr``.
    NaN and infinities become ``null``.
    """
    return json.dumps(
        _finite(to_jsonable_python(value, fallback=repr)),
        indent=2,
        ensure_ascii=False,
        allow_nan=False,
    )


def _finite(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _finite(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_finite(item) for item in value]
    return value


def format_error(error: BaseException) -> str:
    """Readable, never empty, text for an exception."""
    message = str(error)
    name = type(error).__name__
    return f"{name}: {message}" if message else name

"""
Task descriptors.

A task is the unit of work a job carries to a worker. Any zero-argument
callable can be used; `Task` adds a picklable, import-path friendly form
of "call this function with these arguments".
"""

from __future__ import annotations

import importlib
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .errors import InvalidArgumentError


def import_path(func: Callable[..., Any]) -> str:
    """Return 'module:qualname' for a module-level callable."""
    module = getattr(func, "__module__", None)
    qualname = getattr(func, "__qualname__", None)
    if not module or not qualname or "<" in qualname:
        raise InvalidArgumentError(f"{func!r} is not importable by path")
    return f"{module}:{qualname}"


def resolve_func(path: str) -> Callable[..., Any]:
    """Import a callable from a 'module:qualname' (or 'module.name') path."""
    if ":" in path:
        module_name, _, qualname = path.partition(":")
    else:
        module_name, _, qualname = path.rpartition(".")
    if not module_name or not qualname:
        raise InvalidArgumentError(f"Invalid import path: {path!r}")

    obj: Any = importlib.import_module(module_name)
    for attr in qualname.split("."):
        obj = getattr(obj, attr)
    if not callable(obj):
        raise InvalidArgumentError(f"{path!r} does not name a callable")
    return obj


@dataclass
class Task:
    """Function plus arguments, executed by calling the task."""

    func: Callable[..., Any] | str
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not (callable(self.func) or isinstance(self.func, str)):
            raise InvalidArgumentError("func must be a callable or an import path")
        self.args = tuple(self.args)

    @property
    def name(self) -> str:
        if isinstance(self.func, str):
            return self.func
        return getattr(self.func, "__qualname__", repr(self.func))

    def resolve(self) -> Callable[..., Any]:
        if isinstance(self.func, str):
            return resolve_func(self.func)
        return self.func

    def __call__(self) -> Any:
        return self.resolve()(*self.args, **self.kwargs)

    def to_dict(self) -> dict[str, Any]:
        func = self.func if isinstance(self.func, str) else import_path(self.func)
        return {
            "func": func,
            "args": list(self.args),
            "kwargs": dict(self.kwargs),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        return cls(
            func=data["func"],
            args=tuple(data.get("args", ())),
            kwargs=dict(data.get("kwargs", {})),
        )


__all__ = ["Task", "import_path", "resolve_func"]

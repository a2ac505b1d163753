"""Lifecycle hooks declared as decorated Document methods.

A hook is a sync or async method taking no arguments. Hooks of one kind
run in MRO order, so a mixin's hooks run before the model's own.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Any, Callable

HOOKS_ATTR = "_gluestick_hooks"


class Hook(str, Enum):
    # Runs first on insert and save; raise DocumentInvalid to abort the write.
    PRE_VALIDATE = "pre_validate"
    PRE_SAVE = "pre_save"
    POST_DELETE = "post_delete"


def _hook(kind: Hook) -> Callable[[Callable], Callable]:
    def decorator(fn: Callable) -> Callable:
        kinds = getattr(fn, HOOKS_ATTR, ())
        setattr(fn, HOOKS_ATTR, (*kinds, kind))
        return fn

    return decorator


pre_validate = _hook(Hook.PRE_VALIDATE)
pre_save = _hook(Hook.PRE_SAVE)
post_delete = _hook(Hook.POST_DELETE)


def collect_hooks(cls: type) -> dict[Hook, tuple[str, ...]]:
    """Map each hook kind to the names of the methods registered for it.

    Base classes come first. A method overridden in a subclass is listed
    once, at the position of its first definition.
    """
    found: dict[Hook, list[str]] = {kind: [] for kind in Hook}
    for klass in reversed(cls.__mro__):
        for name, attr in vars(klass).items():
            for kind in getattr(attr, HOOKS_ATTR, ()):
                if name not in found[kind]:
                    found[kind].append(name)
    return {kind: tuple(names) for kind, names in found.items()}


async def run_hooks(instance: Any, kind: Hook) -> None:
    for name in type(instance)._hooks.get(kind, ()):
        result = getattr(instance, name)()
        if asyncio.iscoroutine(result):
            await result

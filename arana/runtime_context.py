"""Immutable per-request context carrying routing flags, a rule and a sequencer."""

from __future__ import annotations

import enum
from typing import Any


class _Flag(enum.IntFlag):
    NONE = 0
    MASTER = 1
    SLAVE = 2


_KEY_FLAG = object()
_KEY_RULE = object()
_KEY_SEQUENCE = object()


class RuntimeContext:
    """An immutable chain of key/value bindings; new bindings shadow older ones."""

    __slots__ = ("_parent", "_key", "_value")

    def __init__(self) -> None:
        self._parent: RuntimeContext | None = None
        self._key: Any = None
        self._value: Any = None

    def with_value(self, key: Any, value: Any) -> "RuntimeContext":
        """Return a child context binding key to value."""
        child = RuntimeContext()
        child._parent = self
        child._key = key
        child._value = value
        return child

    def value(self, key: Any) -> Any:
        """Return the nearest value bound to key, or None."""
        node: RuntimeContext | None = self
        while node is not None:
            if node._parent is not None and node._key is key:
                return node._value
            node = node._parent
        return None


def _flag(ctx: RuntimeContext) -> _Flag:
    found = ctx.value(_KEY_FLAG)
    return found if isinstance(found, _Flag) else _Flag.NONE


def with_master(ctx: RuntimeContext) -> RuntimeContext:
    """Force the master data source."""
    return ctx.with_value(_KEY_FLAG, _flag(ctx) | _Flag.MASTER)


def with_slave(ctx: RuntimeContext) -> RuntimeContext:
    """Force a slave data source."""
    return ctx.with_value(_KEY_FLAG, _flag(ctx) | _Flag.SLAVE)


def with_rule(ctx: RuntimeContext, rule: Any) -> RuntimeContext:
    """Bind a rule."""
    return ctx.with_value(_KEY_RULE, rule)


def with_sequencer(ctx: RuntimeContext, sequencer: Any) -> RuntimeContext:
    """Bind a sequencer."""
    return ctx.with_value(_KEY_SEQUENCE, sequencer)


def sequencer(ctx: RuntimeContext) -> Any:
    """Return the bound sequencer, or None."""
    return ctx.value(_KEY_SEQUENCE)


def rule(ctx: RuntimeContext) -> Any:
    """Return the bound rule, or None."""
    return ctx.value(_KEY_RULE)


def is_master(ctx: RuntimeContext) -> bool:
    """True when the master data source is forced."""
    return bool(_flag(ctx) & _Flag.MASTER)


def is_slave(ctx: RuntimeContext) -> bool:
    """True when a slave data source is forced."""
    return bool(_flag(ctx) & _Flag.SLAVE)
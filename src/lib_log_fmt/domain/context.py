"""Immutable property chains threaded through a call graph.

Purpose
-------
Carry request-scoped key/value properties without copying or mutation, so a
parent context can be shared by concurrent branches that each extend it
independently.

Contents
--------
* :class:`Property` – immutable ``(key, value)`` pair.
* :class:`PropertyNode` – node of the persistent singly linked list.
* :class:`PropagationContext` – immutable carrier identified by its head node.
* :func:`attach_properties`, :func:`read_chain`, :func:`iter_chain`.
* :class:`ContextBinder` – :mod:`contextvars` holder for an ambient context.

System Role
-----------
:meth:`lib_log_fmt.domain.message.Message.create` snapshots the chain of the
context passed to a logging call into ``context_properties``.
"""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Tuple, Union


@dataclass(slots=True, frozen=True)
class Property:
    """Immutable key/value pair; duplicate keys are allowed and all emitted."""

    key: str
    value: Any

    def __iter__(self) -> Iterator[Any]:
        yield self.key
        yield self.value


PropertyLike = Union[Property, Tuple[str, Any]]


@dataclass(slots=True, frozen=True)
class PropertyNode:
    """Node of a property chain; never mutated once created."""

    key: str
    value: Any
    previous: PropertyNode | None = None


def iter_chain(head: PropertyNode | None) -> Iterator[PropertyNode]:
    """Yield nodes from ``head`` down to the tail."""
    node = head
    while node is not None:
        yield node
        node = node.previous


class PropagationContext:
    """Immutable carrier of a property chain.

    Identity matters: attaching nothing returns the very same object, and two
    contexts are only equal when they are the same object.

    Examples
    --------
    >>> ctx = EMPTY_CONTEXT.with_properties(env="prod")
    >>> [tuple(p) for p in ctx]
    [('env', 'prod')]
    >>> ctx.with_properties() is ctx
    True
    """

    __slots__ = ("_head",)

    def __init__(self, head: PropertyNode | None = None) -> None:
        self._head = head

    @property
    def head(self) -> PropertyNode | None:
        return self._head

    def __iter__(self) -> Iterator[Property]:
        for node in iter_chain(self._head):
            yield Property(node.key, node.value)

    def __len__(self) -> int:
        return sum(1 for _ in iter_chain(self._head))

    def __bool__(self) -> bool:
        return self._head is not None

    def __repr__(self) -> str:
        pairs = ", ".join(f"{p.key}={p.value!r}" for p in self)
        return f"PropagationContext({pairs})"

    def properties(self) -> tuple[Property, ...]:
        """Return the chain as a tuple, newest batch first."""
        return tuple(self)

    def with_properties(self, *properties: PropertyLike, **named: Any) -> "PropagationContext":
        """Attach ``properties`` then ``named`` (in keyword order) as one batch."""
        batch = list(properties) + [Property(key, value) for key, value in named.items()]
        return attach_properties(self, *batch)


EMPTY_CONTEXT = PropagationContext()


def _as_property(item: PropertyLike) -> Property:
    if isinstance(item, Property):
        return item
    key, value = item
    return Property(str(key), value)


def attach_properties(context: PropagationContext | None, *properties: PropertyLike) -> PropagationContext:
    """Return a context whose chain starts with ``properties`` in supplied order.

    The batch is linked in front of the existing chain, which stays untouched.

    Examples
    --------
    >>> c1 = attach_properties(EMPTY_CONTEXT, ("a", 1), ("b", 2))
    >>> c2 = attach_properties(c1, Property("c", 3))
    >>> [p.key for p in c2], [p.key for p in c1]
    (['c', 'a', 'b'], ['a', 'b'])
    """
    base = context if context is not None else EMPTY_CONTEXT
    if not properties:
        return base
    head = base.head
    for item in reversed([_as_property(p) for p in properties]):
        head = PropertyNode(item.key, item.value, head)
    return PropagationContext(head)


def read_chain(context: Any) -> PropertyNode | None:
    """Return the chain head of ``context``; anything else yields ``None``."""
    if isinstance(context, PropagationContext):
        return context.head
    return None


class ContextBinder:
    """Hold an ambient :class:`PropagationContext` per execution flow.

    Bindings are stored in a :class:`contextvars.ContextVar`, so threads and
    asyncio tasks each see their own ambient context.

    Examples
    --------
    >>> binder = ContextBinder()
    >>> with binder.bind(request_id="r-1") as ctx:
    ...     binder.current() is ctx
    True
    >>> binder.current() is EMPTY_CONTEXT
    True
    """

    _var: contextvars.ContextVar[PropagationContext]

    def __init__(self, name: str = "lib_log_fmt_context") -> None:
        self._var = contextvars.ContextVar(name, default=EMPTY_CONTEXT)

    def current(self) -> PropagationContext:
        """Return the context bound to the current scope."""
        return self._var.get()

    @contextmanager
    def bind(self, *properties: PropertyLike, **named: Any) -> Iterator[PropagationContext]:
        """Attach properties to the ambient context for the ``with`` block."""
        context = self._var.get().with_properties(*properties, **named)
        token = self._var.set(context)
        try:
            yield context
        finally:
            self._var.reset(token)

    @contextmanager
    def use(self, context: PropagationContext) -> Iterator[PropagationContext]:
        """Make ``context`` the ambient context for the ``with`` block."""
        token = self._var.set(context)
        try:
            yield context
        finally:
            self._var.reset(token)


__all__ = [
    "ContextBinder",
    "EMPTY_CONTEXT",
    "PropagationContext",
    "Property",
    "PropertyLike",
    "PropertyNode",
    "attach_properties",
    "iter_chain",
    "read_chain",
]

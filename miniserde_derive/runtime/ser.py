"""
Serialization side of the runtime object model.

A serializable value is turned into a `Fragment`: either a scalar, or a
lazy `Seq` / `Map` iterator producing children one at a time. Nothing is
copied; maps yield references into the original value.
"""

from __future__ import annotations

import functools
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any


class FragmentKind(Enum):
    """Kind of a serialized fragment."""

    NULL = "null"
    BOOL = "bool"
    STR = "str"
    INT = "int"
    FLOAT = "float"
    SEQ = "seq"
    MAP = "map"


@dataclass(frozen=True)
class Fragment:
    """One step of serialization: a scalar or a lazy sequence / map."""

    kind: FragmentKind
    value: Any = None

    @staticmethod
    def null() -> Fragment:
        return Fragment(FragmentKind.NULL)

    @staticmethod
    def boolean(value: bool) -> Fragment:
        return Fragment(FragmentKind.BOOL, value)

    @staticmethod
    def string(value: str) -> Fragment:
        return Fragment(FragmentKind.STR, value)

    @staticmethod
    def integer(value: int) -> Fragment:
        return Fragment(FragmentKind.INT, value)

    @staticmethod
    def floating(value: float) -> Fragment:
        return Fragment(FragmentKind.FLOAT, value)

    @staticmethod
    def seq(seq: Iterator[Any]) -> Fragment:
        return Fragment(FragmentKind.SEQ, seq)

    @staticmethod
    def map(map: Iterator[tuple[str, Any]]) -> Fragment:
        return Fragment(FragmentKind.MAP, map)


class Seq(Iterator):
    """Produces the elements of a sequence on demand.

    `__next__` returns the next element and raises StopIteration once done.
    """


class Map(Iterator):
    """Produces ``(key, value)`` pairs on demand.

    `__next__` returns the next pair and raises StopIteration once done.
    """


@functools.singledispatch
def begin(value: Any) -> Fragment:
    """Start serializing `value`.

    Generated code registers struct and enum classes with ``begin.register``.
    """
    raise TypeError(f"{type(value).__name__} does not implement Serialize")


@begin.register(type(None))
def _begin_none(value: None) -> Fragment:
    return Fragment.null()


@begin.register(bool)
def _begin_bool(value: bool) -> Fragment:
    return Fragment.boolean(value)


@begin.register(int)
def _begin_int(value: int) -> Fragment:
    return Fragment.integer(value)


@begin.register(float)
def _begin_float(value: float) -> Fragment:
    return Fragment.floating(value)


@begin.register(str)
def _begin_str(value: str) -> Fragment:
    return Fragment.string(value)


@begin.register(list)
@begin.register(tuple)
def _begin_sequence(value: list | tuple) -> Fragment:
    return Fragment.seq(iter(value))


@begin.register(dict)
def _begin_dict(value: dict) -> Fragment:
    return Fragment.map(iter(value.items()))

"""
Deserialization side of the runtime object model.

Deserialization is push-based: a driver walks the input and pushes each
value into a `Visitor`. Visitors write finished values into a `Place`, an
optional output slot owned by whoever asked for the value. Maps and
sequences hand out one child visitor per key / element and assemble the
result on `finish()`.
"""

from __future__ import annotations

import types
import typing
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any


class Error(Exception):
    """Deserialization failed: the input is malformed or incomplete."""


_UNSET = object()


class Place:
    """An optional output slot a visitor writes its finished value into."""

    __slots__ = ("_value",)

    def __init__(self) -> None:
        self._value: Any = _UNSET

    def set(self, value: Any) -> None:
        self._value = value

    def is_set(self) -> bool:
        return self._value is not _UNSET

    def take(self) -> Any:
        """Remove and return the stored value.

        Raises:
            Error: If nothing was ever written
        """
        value = self._value
        if value is _UNSET:
            raise Error("missing field")
        self._value = _UNSET
        return value


class Visitor:
    """Receives one value. Every method rejects by default."""

    def null(self) -> None:
        raise Error

    def boolean(self, value: bool) -> None:
        raise Error

    def string(self, value: str) -> None:
        raise Error

    def integer(self, value: int) -> None:
        raise Error

    def floating(self, value: float) -> None:
        raise Error

    def seq(self) -> Seq:
        raise Error

    def map(self) -> Map:
        raise Error

    @staticmethod
    def ignore() -> Visitor:
        """A visitor that accepts and discards anything."""
        return _IGNORE


class Seq(ABC):
    """Receives the elements of a sequence."""

    @abstractmethod
    def element(self) -> Visitor:
        """Return the visitor for the next element."""

    @abstractmethod
    def finish(self) -> None:
        """Called once after the last element."""


class Map(ABC):
    """Receives the entries of a map."""

    @abstractmethod
    def key(self, k: str) -> Visitor:
        """Return the visitor for the value stored under `k`."""

    @abstractmethod
    def finish(self) -> None:
        """Called once after the last entry."""


class _Ignore(Visitor):
    def null(self) -> None:
        pass

    def boolean(self, value: bool) -> None:
        pass

    def string(self, value: str) -> None:
        pass

    def integer(self, value: int) -> None:
        pass

    def floating(self, value: float) -> None:
        pass

    def seq(self) -> Seq:
        return _IgnoreCollection()

    def map(self) -> Map:
        return _IgnoreCollection()


class _IgnoreCollection(Seq, Map):
    def element(self) -> Visitor:
        return _IGNORE

    def key(self, k: str) -> Visitor:
        return _IGNORE

    def finish(self) -> None:
        pass


_IGNORE = _Ignore()

# Deserialize entry points, keyed by class (or generic origin)
_IMPLS: dict[Any, Callable[..., Visitor]] = {}


def impl(cls: Any) -> Callable[[Callable[..., Visitor]], Callable[..., Visitor]]:
    """Register the deserialize entry point of `cls`.

    The entry point is called as ``begin_fn(out, *type_args)`` where
    `type_args` are the arguments of a parametrized generic, if any.
    """

    def decorator(begin_fn: Callable[..., Visitor]) -> Callable[..., Visitor]:
        _IMPLS[cls] = begin_fn
        return begin_fn

    return decorator


def begin(tp: Any, out: Place) -> Visitor:
    """
    Start deserializing a value of type `tp` into `out`.

    Args:
        tp: A class, a parametrized generic (``list[int]``), an optional
            (``int | None``) or ``typing.Any``
        out: Place receiving the finished value

    Raises:
        TypeError: If `tp` does not implement Deserialize
    """
    if tp is Any:
        return _AnyVisitor(out)

    origin = typing.get_origin(tp)
    args = typing.get_args(tp)
    if origin is typing.Union or origin is types.UnionType:
        return _OptionVisitor(_optional_inner(tp), out)

    factory = _IMPLS.get(tp if origin is None else origin)
    if factory is None:
        raise TypeError(f"{tp!r} does not implement Deserialize")
    return factory(out, *args)


def default(tp: Any) -> Place:
    """Return a fresh place for a value of type `tp`.

    Optional types start out holding None, so their key may be absent.
    """
    place = Place()
    origin = typing.get_origin(tp)
    if origin is typing.Union or origin is types.UnionType:
        place.set(None)
    return place


def _optional_inner(tp: Any) -> Any:
    args = typing.get_args(tp)
    inner = [arg for arg in args if arg is not type(None)]
    if len(inner) != 1 or len(args) != 2:
        raise TypeError(f"only optional unions (T | None) are supported, got {tp!r}")
    return inner[0]


class _BoolVisitor(Visitor):
    __slots__ = ("out",)

    def __init__(self, out: Place):
        self.out = out

    def boolean(self, value: bool) -> None:
        self.out.set(value)


class _IntVisitor(Visitor):
    __slots__ = ("out",)

    def __init__(self, out: Place):
        self.out = out

    def integer(self, value: int) -> None:
        self.out.set(value)


class _FloatVisitor(Visitor):
    __slots__ = ("out",)

    def __init__(self, out: Place):
        self.out = out

    def integer(self, value: int) -> None:
        self.out.set(float(value))

    def floating(self, value: float) -> None:
        self.out.set(value)


class _StrVisitor(Visitor):
    __slots__ = ("out",)

    def __init__(self, out: Place):
        self.out = out

    def string(self, value: str) -> None:
        self.out.set(value)


class _ListVisitor(Visitor):
    __slots__ = ("item_type", "out")

    def __init__(self, item_type: Any, out: Place):
        self.item_type = item_type
        self.out = out

    def seq(self) -> Seq:
        return _ListBuilder(self.item_type, self.out)


class _ListBuilder(Seq):
    __slots__ = ("item_type", "out", "places")

    def __init__(self, item_type: Any, out: Place):
        self.item_type = item_type
        self.out = out
        self.places: list[Place] = []

    def element(self) -> Visitor:
        place = Place()
        self.places.append(place)
        return begin(self.item_type, place)

    def finish(self) -> None:
        self.out.set([place.take() for place in self.places])


class _DictVisitor(Visitor):
    __slots__ = ("value_type", "out")

    def __init__(self, value_type: Any, out: Place):
        self.value_type = value_type
        self.out = out

    def map(self) -> Map:
        return _DictBuilder(self.value_type, self.out)


class _DictBuilder(Map):
    __slots__ = ("value_type", "out", "entries")

    def __init__(self, value_type: Any, out: Place):
        self.value_type = value_type
        self.out = out
        self.entries: list[tuple[str, Place]] = []

    def key(self, k: str) -> Visitor:
        place = Place()
        self.entries.append((k, place))
        return begin(self.value_type, place)

    def finish(self) -> None:
        self.out.set({k: place.take() for k, place in self.entries})


class _TupleVisitor(Visitor):
    __slots__ = ("item_types", "variadic", "out")

    def __init__(self, item_types: tuple[Any, ...], variadic: bool, out: Place):
        self.item_types = item_types
        self.variadic = variadic
        self.out = out

    def seq(self) -> Seq:
        return _TupleBuilder(self.item_types, self.variadic, self.out)


class _TupleBuilder(Seq):
    """Fixed-length tuples take one element per item type; variadic ones repeat the first."""

    __slots__ = ("item_types", "variadic", "out", "places")

    def __init__(self, item_types: tuple[Any, ...], variadic: bool, out: Place):
        self.item_types = item_types
        self.variadic = variadic
        self.out = out
        self.places: list[Place] = []

    def element(self) -> Visitor:
        index = len(self.places)
        if self.variadic:
            item_type = self.item_types[0]
        elif index < len(self.item_types):
            item_type = self.item_types[index]
        else:
            raise Error(f"expected {len(self.item_types)} elements")
        place = Place()
        self.places.append(place)
        return begin(item_type, place)

    def finish(self) -> None:
        if not self.variadic and len(self.places) != len(self.item_types):
            raise Error(f"expected {len(self.item_types)} elements, got {len(self.places)}")
        self.out.set(tuple(place.take() for place in self.places))


class _OptionVisitor(Visitor):
    __slots__ = ("inner", "out")

    def __init__(self, inner: Any, out: Place):
        self.inner = inner
        self.out = out

    def null(self) -> None:
        self.out.set(None)

    def boolean(self, value: bool) -> None:
        begin(self.inner, self.out).boolean(value)

    def string(self, value: str) -> None:
        begin(self.inner, self.out).string(value)

    def integer(self, value: int) -> None:
        begin(self.inner, self.out).integer(value)

    def floating(self, value: float) -> None:
        begin(self.inner, self.out).floating(value)

    def seq(self) -> Seq:
        return begin(self.inner, self.out).seq()

    def map(self) -> Map:
        return begin(self.inner, self.out).map()


class _AnyVisitor(Visitor):
    """Builds plain Python values (None, bool, int, float, str, list, dict)."""

    __slots__ = ("out",)

    def __init__(self, out: Place):
        self.out = out

    def null(self) -> None:
        self.out.set(None)

    def boolean(self, value: bool) -> None:
        self.out.set(value)

    def string(self, value: str) -> None:
        self.out.set(value)

    def integer(self, value: int) -> None:
        self.out.set(value)

    def floating(self, value: float) -> None:
        self.out.set(value)

    def seq(self) -> Seq:
        return _ListBuilder(Any, self.out)

    def map(self) -> Map:
        return _DictBuilder(Any, self.out)


@impl(bool)
def _begin_bool(out: Place) -> Visitor:
    return _BoolVisitor(out)


@impl(int)
def _begin_int(out: Place) -> Visitor:
    return _IntVisitor(out)


@impl(float)
def _begin_float(out: Place) -> Visitor:
    return _FloatVisitor(out)


@impl(str)
def _begin_str(out: Place) -> Visitor:
    return _StrVisitor(out)


@impl(list)
def _begin_list(out: Place, item_type: Any = Any) -> Visitor:
    return _ListVisitor(item_type, out)


@impl(dict)
def _begin_dict(out: Place, key_type: Any = str, value_type: Any = Any) -> Visitor:
    if key_type is not str:
        raise TypeError(f"only str map keys are supported, got {key_type!r}")
    return _DictVisitor(value_type, out)


@impl(tuple)
def _begin_tuple(out: Place, *item_types: Any) -> Visitor:
    # bare tuple and tuple[T, ...] are variadic; tuple[A, B] has a fixed length
    if not item_types:
        return _TupleVisitor((Any,), True, out)
    if len(item_types) == 2 and item_types[1] is Ellipsis:
        return _TupleVisitor(item_types[:1], True, out)
    return _TupleVisitor(item_types, False, out)

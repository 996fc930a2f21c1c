"""Closeable iteration over list results."""

from __future__ import annotations

from typing import Any, Generic, Iterable, Iterator, Optional, TypeVar

T = TypeVar("T")


class CloseableEnumeration(Generic[T]):
    """Iterator over a backend listing that can be closed early.

    Closing also closes the wrapped iterator when it exposes ``close()``.
    Iterating a closed enumeration yields nothing further.
    """

    def __init__(self, source: Optional[Iterable[T]]):
        self._source = source if source is not None else ()
        self._iterator: Optional[Iterator[T]] = iter(self._source)
        self._closed = False

    @classmethod
    def from_iterable(cls, source: Optional[Iterable[T]]) -> "CloseableEnumeration[T]":
        if isinstance(source, CloseableEnumeration):
            return source
        return cls(source)

    @property
    def closed(self) -> bool:
        return self._closed

    def __iter__(self) -> "CloseableEnumeration[T]":
        return self

    def __next__(self) -> T:
        if self._iterator is None:
            raise StopIteration
        return next(self._iterator)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        targets = [self._iterator]
        if self._source is not self._iterator:
            targets.append(self._source)
        for obj in targets:
            closer = getattr(obj, "close", None)
            if callable(closer):
                closer()
        self._iterator = None

    def __enter__(self) -> "CloseableEnumeration[T]":
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()

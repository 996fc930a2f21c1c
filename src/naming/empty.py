"""An empty, read-only local context used when nothing else is configured."""

from __future__ import annotations

from typing import Any, List

from .enumeration import CloseableEnumeration
from .errors import NameNotFoundError, OperationNotSupportedError
from .name import to_name
from .plugins import Binding, Context, NameClassPair, NameLike


class EmptyContext(Context):
    """A context with no bindings.

    Looking up the empty name yields another empty context sharing the same
    environment; every other name is not found, and writes are refused.
    """

    def lookup(self, name: NameLike) -> Any:
        if to_name(name).is_empty():
            return EmptyContext(self._environment)
        raise NameNotFoundError(name)

    def lookup_link(self, name: NameLike) -> Any:
        return self.lookup(name)

    def list(self, name: NameLike) -> CloseableEnumeration[NameClassPair]:
        if to_name(name).is_empty():
            empty: List[NameClassPair] = []
            return CloseableEnumeration(empty)
        raise NameNotFoundError(name)

    def list_bindings(self, name: NameLike) -> CloseableEnumeration[Binding]:
        if to_name(name).is_empty():
            empty: List[Binding] = []
            return CloseableEnumeration(empty)
        raise NameNotFoundError(name)

    def destroy_subcontext(self, name: NameLike) -> None:
        raise NameNotFoundError(name)

    def bind(self, name: NameLike, obj: Any) -> None:
        raise OperationNotSupportedError(f"Read-only context: cannot bind {name}")

    def rebind(self, name: NameLike, obj: Any) -> None:
        raise OperationNotSupportedError(f"Read-only context: cannot rebind {name}")

    def unbind(self, name: NameLike) -> None:
        raise OperationNotSupportedError(f"Read-only context: cannot unbind {name}")

    def rename(self, old_name: NameLike, new_name: NameLike) -> None:
        raise OperationNotSupportedError(f"Read-only context: cannot rename {old_name}")

    def create_subcontext(self, name: NameLike) -> Context:
        raise OperationNotSupportedError(f"Read-only context: cannot create {name}")

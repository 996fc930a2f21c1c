"""Split a name into an optional URL scheme and the residual name."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .name import CompositeName


@dataclass(frozen=True)
class SplitName:
    """Result of splitting a name at the scheme in its first component."""

    url_scheme: Optional[str]
    name: CompositeName

    def is_empty(self) -> bool:
        return self.url_scheme is None and self.name.is_empty()


def split_name(orig_name: CompositeName) -> SplitName:
    """Extract the URL scheme from the first component of ``orig_name``.

    The caller's name is never modified. ``"a:b/c"`` gives scheme ``a`` and
    residual ``b/c``; ``"a:"`` gives scheme ``a`` and an empty residual. When
    the scheme consumes the whole first component, an empty leading component
    is only kept if a non-empty second component follows it.
    """
    name = orig_name.clone()
    if name.is_empty():
        return SplitName(None, name)
    first = name.get(0)
    idx = first.find(":")
    if idx == -1:
        return SplitName(None, name)

    url_scheme = first[:idx]
    segment = first[idx + 1:]
    name.remove(0)
    if segment or (orig_name.size() > 1 and orig_name.get(1)):
        name.add(0, segment)
    return SplitName(url_scheme or None, name)

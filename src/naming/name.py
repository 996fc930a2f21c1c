"""Composite names: ordered, slash-separated component lists."""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple, Union

from .errors import MalformedNameError

SEPARATOR = "/"
ESCAPE = "\\"
QUOTES = ('"', "'")


def _parse_component(text: str, start: int) -> Tuple[str, int]:
    """Read one component starting at ``start``; return it and the index of the
    separator (or end of string) that terminated it."""
    length = len(text)
    if start < length and text[start] in QUOTES:
        quote = text[start]
        i = start + 1
        chars: List[str] = []
        while i < length and text[i] != quote:
            if text[i] == ESCAPE and i + 1 < length and text[i + 1] in (quote, ESCAPE):
                i += 1
            chars.append(text[i])
            i += 1
        if i >= length:
            raise MalformedNameError(text, "unterminated quote")
        i += 1
        if i < length and text[i] != SEPARATOR:
            raise MalformedNameError(text, "characters after closing quote")
        return "".join(chars), i

    chars = []
    i = start
    while i < length and text[i] != SEPARATOR:
        if text[i] == ESCAPE and i + 1 < length:
            i += 1
        chars.append(text[i])
        i += 1
    return "".join(chars), i


def _render_component(comp: str) -> str:
    out: List[str] = []
    for pos, char in enumerate(comp):
        if char in (SEPARATOR, ESCAPE) or (pos == 0 and char in QUOTES):
            out.append(ESCAPE)
        out.append(char)
    return "".join(out)


class CompositeName:
    """A mutable sequence of string components.

    ``CompositeName.parse`` follows the usual composite name rules: ``""`` is the
    empty name, ``"/"`` is a single empty component and a trailing separator
    after a non-empty component adds an empty trailing component.
    """

    __slots__ = ("_components",)

    def __init__(self, components: Optional[Sequence[str]] = None):
        self._components: List[str] = list(components or [])

    @classmethod
    def parse(cls, text: str) -> "CompositeName":
        if text is None:
            raise TypeError("name must not be None")
        components: List[str] = []
        all_empty = True
        length = len(text)
        i = 0
        while i < length:
            comp, i = _parse_component(text, i)
            components.append(comp)
            if comp:
                all_empty = False
            if i < length:
                i += 1
                if i == length and not all_empty:
                    components.append("")
        return cls(components)

    def clone(self) -> "CompositeName":
        return CompositeName(self._components)

    def get(self, index: int) -> str:
        return self._components[index]

    def size(self) -> int:
        return len(self._components)

    def is_empty(self) -> bool:
        return not self._components

    def add(self, index_or_comp: Union[int, str], comp: Optional[str] = None) -> "CompositeName":
        """Append ``comp``, or insert it at a position when given two arguments."""
        if comp is None:
            self._components.append(str(index_or_comp))
        else:
            self._components.insert(int(index_or_comp), comp)
        return self

    def add_all(self, other: "CompositeName") -> "CompositeName":
        self._components.extend(other)
        return self

    def remove(self, index: int) -> str:
        return self._components.pop(index)

    def get_prefix(self, end: int) -> "CompositeName":
        return CompositeName(self._components[:end])

    def get_suffix(self, start: int) -> "CompositeName":
        return CompositeName(self._components[start:])

    def components(self) -> List[str]:
        return list(self._components)

    def __len__(self) -> int:
        return len(self._components)

    def __iter__(self) -> Iterator[str]:
        return iter(self._components)

    def __getitem__(self, index: int) -> str:
        return self._components[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CompositeName):
            return self._components == other._components
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._components))

    def __str__(self) -> str:
        rendered = SEPARATOR.join(_render_component(comp) for comp in self._components)
        if self._components and not any(self._components):
            rendered += SEPARATOR
        return rendered

    def __repr__(self) -> str:
        return f"CompositeName({self._components!r})"


class NameParser:  # pylint: disable=too-few-public-methods
    """Parses strings into composite names."""

    def parse(self, text: str) -> CompositeName:
        return CompositeName.parse(text)


NAME_PARSER = NameParser()


def to_name(name: Union[str, CompositeName]) -> CompositeName:
    """Return ``name`` as a composite name, parsing strings."""
    if isinstance(name, CompositeName):
        return name
    return NAME_PARSER.parse(name)

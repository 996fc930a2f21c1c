"""Lenient ``${...}`` property expression expansion.

Supported forms:

- ``${key}`` looks ``key`` up in the supplied properties mapping
- ``${env.NAME}`` reads the process environment
- ``${a,b}`` tries each key in turn
- ``${key:default}`` falls back to ``default`` (itself expanded)
- ``$$`` is a literal ``$``

Unresolved references without a default expand to the empty string, and an
unclosed ``${`` is copied through unchanged.
"""

from __future__ import annotations

import os
from typing import Any, Mapping, Optional

ENV_PREFIX = "env."


def _find_close(text: str, start: int) -> int:
    """Index of the ``}`` closing the expression whose body starts at ``start``."""
    depth = 0
    i = start
    while i < len(text):
        if text.startswith("${", i):
            depth += 1
            i += 2
            continue
        if text[i] == "}":
            if depth == 0:
                return i
            depth -= 1
        i += 1
    return -1


def _lookup(key: str, properties: Mapping[str, Any], environ: Mapping[str, str]) -> Optional[str]:
    if key.startswith(ENV_PREFIX):
        return environ.get(key[len(ENV_PREFIX):])
    value = properties.get(key)
    return None if value is None else str(value)


def expand(
    raw: str,
    properties: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Expand property and environment references embedded in ``raw``."""
    props = properties if properties is not None else {}
    env = environ if environ is not None else os.environ
    out = []
    i = 0
    length = len(raw)
    while i < length:
        char = raw[i]
        if char != "$" or i + 1 >= length:
            out.append(char)
            i += 1
            continue
        nxt = raw[i + 1]
        if nxt == "$":
            out.append("$")
            i += 2
            continue
        if nxt != "{":
            out.append(char)
            i += 1
            continue
        close = _find_close(raw, i + 2)
        if close == -1:
            out.append(raw[i:])
            break
        body = raw[i + 2:close]
        keys, sep, default = body.partition(":")
        value = None
        for key in keys.split(","):
            key = key.strip()
            if key:
                value = _lookup(key, props, env)
                if value is not None:
                    break
        if value is None and sep:
            value = expand(default, props, env)
        out.append(value or "")
        i = close + 1
    return "".join(out)

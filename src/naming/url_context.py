"""Scheme-keyed URL contexts, the fallback that predates provider plugins.

URL contexts receive the full original name and do their own parsing. They are
found either through an explicit registration or, per the
``naming.factory.url.pkgs`` environment property, by importing
``<prefix>.<scheme_module>`` and calling its ``url_context_factory``.
"""

from __future__ import annotations

import importlib
import logging
import re
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants

from .plugins import Context

logger = logging.getLogger(__name__)

UrlContextFactory = Callable[[str, Mapping[str, Any]], Optional[Context]]
FACTORY_ATTRIBUTE = "url_context_factory"


def scheme_module_name(scheme: str) -> str:
    """Module name used for ``scheme`` under a URL package prefix."""
    return re.sub(r"\W", "_", scheme)


class UrlContextRegistry:
    """Resolves a name scheme to a URL context, or None if none exists."""

    def __init__(self) -> None:
        self._factories: Dict[str, UrlContextFactory] = {}
        self._lock = threading.Lock()

    def register(self, scheme: str, factory: UrlContextFactory) -> None:
        with self._lock:
            self._factories[scheme] = factory

    def unregister(self, scheme: str) -> Optional[UrlContextFactory]:
        with self._lock:
            return self._factories.pop(scheme, None)

    def resolve(self, scheme: str, env: Mapping[str, Any]) -> Optional[Context]:
        with self._lock:
            factory = self._factories.get(scheme)
        if factory is not None:
            context = factory(scheme, env)
            if context is not None:
                return context
        for prefix in _package_prefixes(env):
            factory = _import_factory(prefix, scheme)
            if factory is None:
                continue
            context = factory(scheme, env)
            if context is not None:
                if is_debug_enabled(logger):
                    logger.debug("URL context found by package prefix", extra=extra_context(
                        event="decision", component="url_context", action="resolve",
                        target=scheme, outcome=prefix
                    ))
                return context
        return None


def _package_prefixes(env: Mapping[str, Any]) -> List[str]:
    raw = env.get(Constants.URL_PKG_PREFIXES)
    if not raw:
        return []
    return [prefix.strip() for prefix in str(raw).split(":") if prefix.strip()]


def _import_factory(prefix: str, scheme: str) -> Optional[UrlContextFactory]:
    module_name = f"{prefix}.{scheme_module_name(scheme)}"
    try:
        module = importlib.import_module(module_name)
    except ModuleNotFoundError as exc:
        # Only a missing candidate module is skipped; errors inside it propagate.
        if exc.name is not None and (module_name == exc.name or module_name.startswith(exc.name + ".")):
            return None
        raise
    factory = getattr(module, FACTORY_ATTRIBUTE, None)
    return factory if callable(factory) else None


default_registry = UrlContextRegistry()

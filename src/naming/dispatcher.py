"""Selection of the backend context that serves a name scheme.

Resolution walks a fixed sequence of tiers and the first success wins:

1. With no provider URIs (or none carrying a scheme), the first context
   factory supporting ``(None, scheme)``.
2. Otherwise the first provider factory accepting *every* provider URI scheme,
   paired with the first context factory supporting ``(provider, scheme)``.
3. A legacy URL context registered for the scheme. Such a context expects the
   original, unsplit name.
4. An empty local context, only when no provider URIs are configured and the
   name has no scheme. Anything else raises ``NoProviderAvailableError``.

Plugin order is the only tie-break.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from common.logging_utils import extra_context, is_debug_enabled

from .empty import EmptyContext
from .endpoints import ProviderURI
from .errors import NoProviderAvailableError
from .plugins import Context, Environment, NamingContextFactory, NamingProvider, NamingProviderFactory
from .url_context import UrlContextRegistry, default_registry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionResult:
    """The selected context and whether it wants the original name."""

    context: Context
    legacy_name_form: bool = False


class CapabilityDispatcher:
    """Matches provider URIs and a name scheme against the plugin lists."""

    def __init__(
        self,
        provider_factories: Sequence[NamingProviderFactory],
        context_factories: Sequence[NamingContextFactory],
        url_contexts: Optional[UrlContextRegistry] = None,
    ):
        self.provider_factories = tuple(provider_factories)
        self.context_factories = tuple(context_factories)
        self.url_contexts = url_contexts if url_contexts is not None else default_registry

    def resolve(
        self,
        provider_uris: Optional[Sequence[ProviderURI]],
        scheme: Optional[str],
        env: Environment,
    ) -> ResolutionResult:
        """Select the context serving ``scheme``.

        Raises:
            NoProviderAvailableError: if nothing can serve ``scheme``; a
                name without a scheme and without provider URIs never raises.
        """
        if provider_uris is None or all(not uri.scheme for uri in provider_uris):
            context = self._find_context(None, scheme, env)
            if context is not None:
                return self._selected(ResolutionResult(context), "context_factory", scheme)
            legacy = self._legacy_context(scheme, env)
            if legacy is not None:
                return legacy
            if scheme is None:
                return self._selected(ResolutionResult(EmptyContext(env)), "empty_context", scheme)
            raise NoProviderAvailableError(scheme)

        for provider_factory in self.provider_factories:
            if not all(provider_factory.supports_uri_scheme(uri.scheme, env) for uri in provider_uris):
                continue
            provider = provider_factory.create_provider(env, list(provider_uris))
            context = self._find_context(provider, scheme, env)
            if context is not None:
                return self._selected(ResolutionResult(context), "provider", scheme)
            provider.close()

        legacy = self._legacy_context(scheme, env)
        if legacy is not None:
            return legacy
        raise NoProviderAvailableError(scheme)

    def _find_context(
        self,
        provider: Optional[NamingProvider],
        scheme: Optional[str],
        env: Environment,
    ) -> Optional[Context]:
        for context_factory in self.context_factories:
            if context_factory.supports_uri_scheme(provider, scheme):
                return context_factory.create_root_context(provider, scheme, env)
        return None

    def _legacy_context(self, scheme: Optional[str], env: Environment) -> Optional[ResolutionResult]:
        if scheme is None:
            return None
        context = self.url_contexts.resolve(scheme, env)
        if context is None:
            return None
        return self._selected(ResolutionResult(context, legacy_name_form=True), "url_context", scheme)

    @staticmethod
    def _selected(result: ResolutionResult, tier: str, scheme: Optional[str]) -> ResolutionResult:
        if is_debug_enabled(logger):
            logger.debug("Resolved naming context", extra=extra_context(
                event="decision", component="dispatcher", action="resolve",
                outcome=tier, target=scheme, context=type(result.context).__name__
            ))
        return result

"""Root naming context that routes every operation to a backend context.

The first component of a name may carry a URL scheme (``ejb:app/bean``). The
scheme, together with the provider URIs configured in the environment, picks
the backend context; the operation is then forwarded with the residual name,
or with the original name when the backend is a legacy URL context.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

from common.logging_utils import Timer, extra_context, is_debug_enabled
from constants import Constants

from .dispatcher import CapabilityDispatcher, ResolutionResult
from .endpoints import ProviderURIResolver
from .enumeration import CloseableEnumeration
from .loader import load_services
from .name import NAME_PARSER, CompositeName, NameParser, to_name
from .plugins import (
    Binding,
    Context,
    Environment,
    NameClassPair,
    NameLike,
    NamingContextFactory,
    NamingProviderFactory,
)
from .splitter import SplitName, split_name
from .url_context import UrlContextRegistry

logger = logging.getLogger(__name__)


def _check_not_none(param: str, value: Any) -> None:
    if value is None:
        raise TypeError(f"Parameter '{param}' may not be None")


class RoutingContext(Context):
    """The public entry point for naming operations.

    The environment mapping is used as given, not copied, and is shared with
    every backend context created for this instance. Looking up the empty name
    returns a new ``RoutingContext`` holding a shallow copy of the environment
    and the same plugin lists.

    Environment mutation through ``add_to_environment`` and
    ``remove_from_environment`` is serialized with provider URI resolution;
    callers mutating the mapping returned by ``get_environment`` directly from
    several threads must synchronize themselves.
    """

    def __init__(
        self,
        environment: Optional[Environment] = None,
        provider_factories: Optional[Sequence[NamingProviderFactory]] = None,
        context_factories: Optional[Sequence[NamingContextFactory]] = None,
        url_contexts: Optional[UrlContextRegistry] = None,
        properties: Optional[Mapping[str, Any]] = None,
    ):
        """Initialize the routing context.

        Args:
            environment: Naming environment (not copied); a new dict when None.
            provider_factories: Provider plugins in priority order; discovered
                from entry points when None.
            context_factories: Context plugins in priority order; discovered
                from entry points when None.
            url_contexts: Legacy URL context registry; the process-wide
                registry when None.
            properties: Mapping used by ``${key}`` expressions in endpoint
                properties; the environment itself when None.
        """
        super().__init__(environment if environment is not None else {})
        if provider_factories is None:
            provider_factories = load_services(Constants.PROVIDER_ENTRY_POINT_GROUP, NamingProviderFactory)
        if context_factories is None:
            context_factories = load_services(Constants.CONTEXT_ENTRY_POINT_GROUP, NamingContextFactory)
        self._dispatcher = CapabilityDispatcher(provider_factories, context_factories, url_contexts)
        self._properties = properties
        self._uri_resolver = ProviderURIResolver(properties)
        self._lock = threading.RLock()
        # Reserved for callers that attach authentication or TLS settings to
        # the root context; resolution never consults them.
        self.sticky_authentication_configuration: Any = None
        self.sticky_ssl_context: Any = None

    @property
    def provider_factories(self) -> Tuple[NamingProviderFactory, ...]:
        return self._dispatcher.provider_factories

    @property
    def context_factories(self) -> Tuple[NamingContextFactory, ...]:
        return self._dispatcher.context_factories

    def _branch(self) -> "RoutingContext":
        with self._lock:
            environment = dict(self._environment)
        return RoutingContext(
            environment,
            self._dispatcher.provider_factories,
            self._dispatcher.context_factories,
            self._dispatcher.url_contexts,
            self._properties,
        )

    def _provider_context(self, scheme: Optional[str]) -> ResolutionResult:
        with Timer() as timer:
            with self._lock:
                provider_uris = self._uri_resolver.resolve(self._environment)
            result = self._dispatcher.resolve(provider_uris, scheme, self._environment)
        if is_debug_enabled(logger):
            logger.debug("Routed naming operation", extra=extra_context(
                event="routing", component="context", action="provider_context",
                target=scheme, legacy_name_form=result.legacy_name_form,
                duration_ms=timer.duration_ms()
            ))
        return result

    def _route(self, param: str, name: NameLike) -> Tuple[Context, NameLike]:
        _check_not_none(param, name)
        split = split_name(to_name(name))
        return self._target(name, split)

    def _target(self, name: NameLike, split: SplitName) -> Tuple[Context, NameLike]:
        result = self._provider_context(split.url_scheme)
        if result.legacy_name_form:
            return result.context, name
        return result.context, split.name

    def lookup(self, name: NameLike) -> Any:
        _check_not_none("name", name)
        split = split_name(to_name(name))
        if split.is_empty():
            return self._branch()
        context, target_name = self._target(name, split)
        return context.lookup(target_name)

    def lookup_link(self, name: NameLike) -> Any:
        context, target_name = self._route("name", name)
        return context.lookup_link(target_name)

    def bind(self, name: NameLike, obj: Any) -> None:
        context, target_name = self._route("name", name)
        context.bind(target_name, obj)

    def rebind(self, name: NameLike, obj: Any) -> None:
        context, target_name = self._route("name", name)
        context.rebind(target_name, obj)

    def unbind(self, name: NameLike) -> None:
        context, target_name = self._route("name", name)
        context.unbind(target_name)

    def rename(self, old_name: NameLike, new_name: NameLike) -> None:
        """Rename within the context selected by ``old_name``'s scheme."""
        _check_not_none("old_name", old_name)
        _check_not_none("new_name", new_name)
        old_split = split_name(to_name(old_name))
        new_split = split_name(to_name(new_name))
        result = self._provider_context(old_split.url_scheme)
        if result.legacy_name_form:
            result.context.rename(old_name, new_name)
        else:
            result.context.rename(old_split.name, new_split.name)

    def list(self, name: NameLike) -> CloseableEnumeration[NameClassPair]:
        context, target_name = self._route("name", name)
        return CloseableEnumeration.from_iterable(context.list(target_name))

    def list_bindings(self, name: NameLike) -> CloseableEnumeration[Binding]:
        context, target_name = self._route("name", name)
        return CloseableEnumeration.from_iterable(context.list_bindings(target_name))

    def create_subcontext(self, name: NameLike) -> Context:
        context, target_name = self._route("name", name)
        return context.create_subcontext(target_name)

    def destroy_subcontext(self, name: NameLike) -> None:
        context, target_name = self._route("name", name)
        context.destroy_subcontext(target_name)

    def get_name_parser(self, name: Optional[NameLike] = None) -> NameParser:  # pylint: disable=unused-argument
        return NAME_PARSER

    def compose_name(self, name: NameLike, prefix: NameLike) -> Union[str, CompositeName]:
        """Append ``name`` to ``prefix``.

        Two strings compose to a string. Otherwise the result is a composite
        name; a ``CompositeName`` prefix is extended in place.
        """
        _check_not_none("name", name)
        _check_not_none("prefix", prefix)
        if isinstance(name, str) and isinstance(prefix, str):
            return str(NAME_PARSER.parse(prefix).add_all(NAME_PARSER.parse(name)))
        return to_name(prefix).add_all(to_name(name))

    def add_to_environment(self, prop_name: str, prop_val: Any) -> Any:
        """Set an environment property, returning its previous value or None."""
        with self._lock:
            previous = self._environment.get(prop_name)
            self._environment[prop_name] = prop_val
            return previous

    def remove_from_environment(self, prop_name: str) -> Any:
        """Remove an environment property, returning its previous value or None."""
        with self._lock:
            return self._environment.pop(prop_name, None)

    def get_name_in_namespace(self) -> str:
        return ""

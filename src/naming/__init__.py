"""Scheme-aware naming router.

Resolves hierarchical names such as ``ejb:app/module/bean`` to a backend
context chosen from provider and context plugins, and forwards directory
operations to it.
"""

from .context import RoutingContext
from .dispatcher import CapabilityDispatcher, ResolutionResult
from .empty import EmptyContext
from .endpoints import ProviderURI, ProviderURIResolver
from .enumeration import CloseableEnumeration
from .errors import (
    InvalidEndpointError,
    MalformedNameError,
    NameNotFoundError,
    NamingError,
    NoProviderAvailableError,
    OperationNotSupportedError,
)
from .name import CompositeName, NameParser
from .plugins import (
    Binding,
    Context,
    NameClassPair,
    NamingContextFactory,
    NamingProvider,
    NamingProviderFactory,
)
from .splitter import SplitName, split_name
from .url_context import UrlContextRegistry

__version__ = "0.1.0"

__all__ = [
    "Binding",
    "CapabilityDispatcher",
    "CloseableEnumeration",
    "CompositeName",
    "Context",
    "EmptyContext",
    "InvalidEndpointError",
    "MalformedNameError",
    "NameClassPair",
    "NameNotFoundError",
    "NameParser",
    "NamingContextFactory",
    "NamingError",
    "NamingProvider",
    "NamingProviderFactory",
    "NoProviderAvailableError",
    "OperationNotSupportedError",
    "ProviderURI",
    "ProviderURIResolver",
    "ResolutionResult",
    "RoutingContext",
    "SplitName",
    "UrlContextRegistry",
    "split_name",
]

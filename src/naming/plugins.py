"""Plugin contracts for naming providers and backend contexts.

Backends ship two kinds of plugins. A ``NamingProviderFactory`` turns a set of
provider URIs into a ``NamingProvider`` handle; a ``NamingContextFactory``
builds a root ``Context`` for a (provider, name scheme) pair. Either factory
is only asked to create something after it has answered
``supports_uri_scheme`` positively.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable, List, MutableMapping, Optional, Sequence, Union, TYPE_CHECKING

from .errors import OperationNotSupportedError
from .name import CompositeName

if TYPE_CHECKING:
    from .endpoints import ProviderURI

NameLike = Union[str, CompositeName]
Environment = MutableMapping[str, Any]


@dataclass
class NameClassPair:
    """A name and the class name of the object bound to it."""

    name: str
    class_name: Optional[str]


@dataclass
class Binding(NameClassPair):
    """A name together with the object bound to it."""

    obj: Any = None


class NamingProvider:
    """Handle on a set of backend endpoints produced by a provider factory."""

    def __init__(self, environment: Environment, provider_uris: Sequence["ProviderURI"]):
        self.environment = environment
        self.provider_uris: List["ProviderURI"] = list(provider_uris)

    def close(self) -> None:
        """Release any resources held by the provider."""


class NamingProviderFactory(ABC):
    """Creates providers for the URI schemes it supports."""

    @abstractmethod
    def supports_uri_scheme(self, uri_scheme: Optional[str], env: Environment) -> bool:
        """Return True if this factory can connect to endpoints of ``uri_scheme``."""

    @abstractmethod
    def create_provider(self, env: Environment, uris: Sequence["ProviderURI"]) -> NamingProvider:
        """Create a provider serving every URI in ``uris``."""


class NamingContextFactory(ABC):
    """Creates root contexts for a provider and name scheme."""

    @abstractmethod
    def supports_uri_scheme(self, provider: Optional[NamingProvider], name_scheme: Optional[str]) -> bool:
        """Return True if a root context for this pair can be created.

        ``provider`` is None when no provider URIs are configured.
        """

    @abstractmethod
    def create_root_context(
        self,
        provider: Optional[NamingProvider],
        name_scheme: Optional[str],
        env: Environment,
    ) -> "Context":
        """Create the root context for ``provider`` and ``name_scheme``."""


class Context:
    """Base class for backend naming contexts.

    Subclasses override the operations they support; the rest raise
    ``OperationNotSupportedError``. Names arrive either as strings or as
    ``CompositeName`` instances, whichever form the router forwards.
    """

    def __init__(self, environment: Optional[Environment] = None):
        self._environment: Environment = environment if environment is not None else {}

    def lookup(self, name: NameLike) -> Any:
        raise OperationNotSupportedError("Not supported: lookup")

    def lookup_link(self, name: NameLike) -> Any:
        raise OperationNotSupportedError("Not supported: lookup_link")

    def bind(self, name: NameLike, obj: Any) -> None:
        raise OperationNotSupportedError("Not supported: bind")

    def rebind(self, name: NameLike, obj: Any) -> None:
        raise OperationNotSupportedError("Not supported: rebind")

    def unbind(self, name: NameLike) -> None:
        raise OperationNotSupportedError("Not supported: unbind")

    def rename(self, old_name: NameLike, new_name: NameLike) -> None:
        raise OperationNotSupportedError("Not supported: rename")

    def list(self, name: NameLike) -> Iterable[NameClassPair]:
        raise OperationNotSupportedError("Not supported: list")

    def list_bindings(self, name: NameLike) -> Iterable[Binding]:
        raise OperationNotSupportedError("Not supported: list_bindings")

    def create_subcontext(self, name: NameLike) -> "Context":
        raise OperationNotSupportedError("Not supported: create_subcontext")

    def destroy_subcontext(self, name: NameLike) -> None:
        raise OperationNotSupportedError("Not supported: destroy_subcontext")

    def get_environment(self) -> Environment:
        return self._environment

    def close(self) -> None:
        """Release the context; the default holds nothing."""

"""Exception hierarchy for naming operations."""

from __future__ import annotations

from typing import Any, Optional


class NamingError(Exception):
    """Base class for every failure of a directory operation."""


class InvalidEndpointError(NamingError):
    """A configured or synthesized provider endpoint is not a well-formed URI."""

    def __init__(self, raw_value: str, reason: Optional[str] = None):
        self.raw_value = raw_value
        self.reason = reason
        message = f"Invalid provider URI: {raw_value!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class NoProviderAvailableError(NamingError):
    """Every resolution strategy was exhausted for a name scheme."""

    def __init__(self, scheme: Optional[str]):
        self.scheme = scheme
        super().__init__(f"No provider found for URI scheme: {scheme}")


class MalformedNameError(NamingError):
    """A string could not be parsed into a name."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Malformed name {name!r}: {reason}")


class NameNotFoundError(NamingError):
    """Nothing is bound under the requested name."""

    def __init__(self, name: Any):
        self.name = name
        super().__init__(f"Name not found: {name}")


class OperationNotSupportedError(NamingError):
    """The resolved context does not implement the requested operation."""

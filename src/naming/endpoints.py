"""Provider endpoint discovery from the naming environment.

Endpoints come either from the direct provider URL property (a comma separated
URI list) or, for older configurations, are synthesized from the per-connection
``remote.connection.<name>.*`` properties.
"""
from __future__ import annotations

import ipaddress
import logging
import re
import string
import urllib.parse
from dataclasses import dataclass
from typing import Any, List, Mapping, MutableMapping, Optional

from common.logging_utils import extra_context, is_debug_enabled, safe_url
from constants import Constants, RemoteProtocols

from .errors import InvalidEndpointError
from .expression import expand

logger = logging.getLogger(__name__)

_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_SCHEME_CANDIDATE = re.compile(r"^([^:/?#]*):")
_HEX = set(string.hexdigits)
_URI_CHARS = set(string.ascii_letters + string.digits + "-._~:/?#[]@!$&'()*+,;=%")
_CONNECTION_SPLIT = re.compile(r"\s*,\s*")
_PORT_PATTERN = re.compile(r"^[+-]?[0-9]+$")


def _check_characters(text: str) -> None:
    for pos, char in enumerate(text):
        if char == "%":
            escape = text[pos + 1:pos + 3]
            if len(escape) != 2 or not set(escape) <= _HEX:
                raise ValueError(f"Malformed escape pair at index {pos}")
        elif char not in _URI_CHARS:
            # Non-ASCII letters are allowed unencoded, as in an IRI.
            if ord(char) < 128 or char.isspace() or not char.isprintable():
                raise ValueError(f"Illegal character at index {pos}")
    if text.count("#") > 1:
        raise ValueError("Illegal character '#' in fragment")


def _drop_trailing_empty(tokens: List[str]) -> List[str]:
    while tokens and tokens[-1] == "":
        tokens.pop()
    return tokens


@dataclass(frozen=True)
class ProviderURI:
    """One candidate provider endpoint."""

    raw: str
    scheme: Optional[str]
    host: Optional[str]
    port: Optional[int]
    path: str = ""

    @classmethod
    def parse(cls, text: str) -> "ProviderURI":
        """Parse ``text`` as a URI reference.

        Raises:
            ValueError: if ``text`` is not a well-formed URI.
        """
        _check_characters(text)
        scheme = None
        match = _SCHEME_CANDIDATE.match(text)
        if match:
            scheme = match.group(1)
            if not _SCHEME_PATTERN.match(scheme):
                raise ValueError("Expected scheme name at index 0")
        parts = urllib.parse.urlsplit(text)
        if text.count("[") != parts.netloc.count("[") or text.count("]") != parts.netloc.count("]"):
            raise ValueError("Brackets are only allowed around an IPv6 host")
        port = parts.port
        host = parts.hostname
        if "[" in parts.netloc:
            try:
                ipaddress.IPv6Address(host or "")
            except ValueError as exc:
                raise ValueError(f"Malformed IPv6 address: {host}") from exc
        return cls(raw=text, scheme=scheme, host=host, port=port, path=parts.path)

    def __str__(self) -> str:
        return self.raw


class ProviderURIResolver:
    """Derives the ordered list of provider URIs from a naming environment.

    ``resolve`` returns ``None`` when neither the provider URL nor the legacy
    connection properties are configured; that is distinct from an empty list,
    which means legacy connections were named but none of them was usable.
    """

    def __init__(
        self,
        properties: Optional[Mapping[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """Initialize the resolver.

        Args:
            properties: Mapping consulted by ``${key}`` expressions. When omitted,
                the naming environment being resolved is used.
            environ: Mapping consulted by ``${env.NAME}``; defaults to ``os.environ``.
        """
        self._properties = properties
        self._environ = environ

    def _expand(self, raw: str, env: Mapping[str, Any]) -> str:
        properties = self._properties if self._properties is not None else env
        return expand(raw, properties, self._environ)

    def resolve(self, env: MutableMapping[str, Any]) -> Optional[List[ProviderURI]]:
        """Return the provider URIs configured in ``env``, or None.

        Raises:
            InvalidEndpointError: if any configured endpoint is not a valid URI.
        """
        url_value = env.get(Constants.PROVIDER_URL)
        if url_value is not None:
            provider_url = self._expand(str(url_value), env)
            if provider_url:
                return self._parse_provider_url(provider_url)

        connection_names = str(env.get(Constants.REMOTE_CONNECTIONS) or "").strip()
        if not connection_names:
            return None

        logger.warning(
            "The remote.connection.* properties are deprecated; configure %s instead",
            Constants.PROVIDER_URL,
        )
        uris: List[ProviderURI] = []
        for connection_name in _drop_trailing_empty(_CONNECTION_SPLIT.split(connection_names)):
            uri = self._connection_uri(connection_name.strip(), env)
            if uri is not None:
                uris.append(uri)
        return uris

    def _parse_provider_url(self, provider_url: str) -> List[ProviderURI]:
        uris: List[ProviderURI] = []
        for token in _drop_trailing_empty(provider_url.split(",")):
            token = token.strip()
            try:
                uris.append(ProviderURI.parse(token))
            except ValueError as exc:
                raise InvalidEndpointError(token, str(exc)) from exc
        if is_debug_enabled(logger):
            logger.debug("Resolved provider URIs", extra=extra_context(
                event="decision", component="endpoints", action="parse_provider_url",
                target=",".join(safe_url(uri) for uri in uris), count=len(uris)
            ))
        return uris

    def _connection_uri(self, connection_name: str, env: Mapping[str, Any]) -> Optional[ProviderURI]:
        prefix = f"{Constants.REMOTE_CONNECTION_PREFIX}{connection_name}."
        host = _string_property(env, prefix + Constants.HOST_KEY)
        port = _string_property(env, prefix + Constants.PORT_KEY)
        ssl_enabled = _string_property(
            env, prefix + Constants.CONNECT_OPTIONS + Constants.SSL_ENABLED_KEY
        )
        if ssl_enabled is None:
            ssl_enabled = _string_property(
                env, Constants.REMOTE_CONNECTION_PROVIDER_PREFIX + Constants.SSL_ENABLED_KEY
            )
        protocol = _string_property(env, prefix + Constants.PROTOCOL_KEY)
        if protocol is None:
            if (ssl_enabled or "").strip().lower() == "true":
                protocol = RemoteProtocols.SECURE.value
            else:
                protocol = RemoteProtocols.PLAIN.value

        if host is None or port is None:
            if is_debug_enabled(logger):
                logger.debug("Skipping connection without host and port", extra=extra_context(
                    event="decision", component="endpoints", action="connection_uri",
                    target=connection_name, outcome="skipped"
                ))
            return None

        real_host = self._expand(host, env)
        if ":" in real_host and not real_host.startswith("[") and not real_host.endswith("]"):
            real_host = f"[{real_host}]"
        raw = f"{protocol}://{real_host}:{port}"
        if not real_host:
            raise InvalidEndpointError(raw, "Expected hostname")
        try:
            if not _PORT_PATTERN.match(port.strip()):
                raise ValueError(f"Illegal port: {port}")
            port_number = int(port.strip())
            if port_number < 0:
                raise ValueError(f"Illegal port: {port}")
            return ProviderURI.parse(f"{protocol}://{real_host}:{port_number}")
        except ValueError as exc:
            raise InvalidEndpointError(raw, str(exc)) from exc


def _string_property(env: Mapping[str, Any], key: str) -> Optional[str]:
    value = env.get(key)
    return None if value is None else str(value)

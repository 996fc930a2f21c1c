"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    CONFIG_ERROR = 1
    NAMING_ERROR = 2


class RemoteProtocols(Enum):
    """Default remote protocols used for legacy connection endpoints.

    Args:
        Enum (string): URI scheme of the synthesized endpoint.
    """

    PLAIN = "remote+http"
    SECURE = "remote+https"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    # Environment property keys
    PROVIDER_URL = "naming.provider.url"
    URL_PKG_PREFIXES = "naming.factory.url.pkgs"
    REMOTE_CONNECTIONS = "remote.connections"
    REMOTE_CONNECTION_PREFIX = "remote.connection."
    REMOTE_CONNECTION_PROVIDER_PREFIX = "remote.connectionprovider.create.options."
    CONNECT_OPTIONS = "connect.options."
    HOST_KEY = "host"
    PORT_KEY = "port"
    PROTOCOL_KEY = "protocol"
    SSL_ENABLED_KEY = "ssl_enabled"

    # Plugin entry point groups
    PROVIDER_ENTRY_POINT_GROUP = "naming.providers"
    CONTEXT_ENTRY_POINT_GROUP = "naming.contexts"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "NAMING_LOG_LEVEL"
    ENV_CONFIG = "NAMING_CONFIG"
    DEFAULT_CONFIG_PATHS = [
        "naming.yml",
        "naming.yaml",
        "~/.config/naming/naming.yml",
    ]

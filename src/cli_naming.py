"""CLI entry point for naming-router.

Offers read-only diagnostics over the routing engine: how a name splits, which
provider endpoints a configuration yields, and which plugins are installed.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Dict, List, Optional

from args import parse_args
from common.logging_utils import configure_logging
from constants import Constants, ExitCodes
from naming.config import load_environment
from naming.endpoints import ProviderURIResolver
from naming.errors import NamingError
from naming.loader import load_services
from naming.name import CompositeName
from naming.plugins import NamingContextFactory, NamingProviderFactory
from naming.splitter import split_name

logger = logging.getLogger(__name__)


def _setup_logging(args: Any) -> None:
    """Configure logging based on CLI arguments."""
    configure_logging(getattr(args, "LOG_LEVEL", None))

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s"
        )
        file_handler.setFormatter(formatter)
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def _apply_overrides(env: Dict[str, Any], overrides: List[str]) -> None:
    """Apply KEY=VALUE overrides from the command line onto ``env``."""
    for item in overrides:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Invalid --set value (expected KEY=VALUE): {item}")
        env[key.strip()] = value


def _describe(obj: Any) -> str:
    cls = type(obj)
    return f"{cls.__module__}.{cls.__qualname__}"


def _cmd_split(name: str) -> None:
    split = split_name(CompositeName.parse(name))
    print(f"scheme:   {split.url_scheme if split.url_scheme is not None else '(none)'}")
    print(f"residual: {split.name}")
    print(f"components: {split.name.components()}")


def _cmd_endpoints(env: Dict[str, Any]) -> None:
    uris = ProviderURIResolver().resolve(env)
    if uris is None:
        print("(none)")
        return
    if not uris:
        print("(empty)")
        return
    for uri in uris:
        print(uri)


def _cmd_plugins() -> None:
    print("providers:")
    for factory in load_services(Constants.PROVIDER_ENTRY_POINT_GROUP, NamingProviderFactory):
        print(f"  {_describe(factory)}")
    print("contexts:")
    for factory in load_services(Constants.CONTEXT_ENTRY_POINT_GROUP, NamingContextFactory):
        print(f"  {_describe(factory)}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)

    try:
        env = load_environment(getattr(args, "CONFIG", None))
        _apply_overrides(env, getattr(args, "PROPERTY_SET", []) or [])
    except (OSError, ValueError) as exc:
        logger.error("Configuration error: %s", exc)
        return ExitCodes.CONFIG_ERROR.value

    try:
        if args.COMMAND == "split":
            _cmd_split(args.NAME)
        elif args.COMMAND == "endpoints":
            _cmd_endpoints(env)
        elif args.COMMAND == "plugins":
            _cmd_plugins()
    except NamingError as exc:
        logger.error("%s", exc)
        return ExitCodes.NAMING_ERROR.value
    return ExitCodes.SUCCESS.value


if __name__ == "__main__":
    sys.exit(main())

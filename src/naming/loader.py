"""Plugin discovery through ``importlib.metadata`` entry points."""

from __future__ import annotations

import logging
from importlib.metadata import EntryPoint, entry_points
from typing import List, Type, TypeVar

from common.logging_utils import extra_context, is_debug_enabled

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _instantiate(entry_point: EntryPoint, expected_type: Type[T]) -> T:
    loaded = entry_point.load()
    instance = loaded() if isinstance(loaded, type) else loaded
    if not isinstance(instance, expected_type):
        raise TypeError(
            f"{entry_point.value} does not provide a {expected_type.__name__}"
        )
    return instance


def load_services(group: str, expected_type: Type[T]) -> List[T]:
    """Load every plugin registered under the entry point ``group``.

    Entry points are ordered by name (then value) so the resulting priority
    list is the same on every run. A plugin that fails to import, construct or
    type-check is logged and skipped.
    """
    services: List[T] = []
    for entry_point in sorted(entry_points(group=group), key=lambda ep: (ep.name, ep.value)):
        try:
            services.append(_instantiate(entry_point, expected_type))
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.warning(
                "Failed to load naming plugin %s (%s): %s",
                entry_point.name,
                entry_point.value,
                exc,
                extra=extra_context(
                    event="plugin_load", component="loader", action="load_services",
                    target=entry_point.value, outcome="skipped", group=group
                ),
            )
    if is_debug_enabled(logger):
        logger.debug("Loaded naming plugins", extra=extra_context(
            event="plugin_load", component="loader", action="load_services",
            group=group, count=len(services)
        ))
    return services

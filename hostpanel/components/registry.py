"""
Component Registry

ComponentRegistry: the ordered set of server and package components
available to a setup run.

Order is part of the contract: servers are processed before packages, and
within each category components run in the order they were configured.
The registry is populated once, at construction, and never mutated.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any

from hostpanel.components.base import ComponentCategory, component_name, component_priority
from hostpanel.exceptions import ConfigurationError
from hostpanel.utils.imports import import_string

if TYPE_CHECKING:
    from hostpanel.config import Settings

logger = logging.getLogger(__name__)


class ComponentRegistry:
    """Read-only, ordered lookup of server and package components."""

    def __init__(self, servers: Iterable[Any] = (), packages: Iterable[Any] = ()) -> None:
        self._servers: tuple[Any, ...] = tuple(servers)
        self._packages: tuple[Any, ...] = tuple(packages)
        self._by_name: dict[str, Any] = {}

        for category, components in (
            (ComponentCategory.SERVER, self._servers),
            (ComponentCategory.PACKAGE, self._packages),
        ):
            seen: set[str] = set()
            for component in components:
                name = component_name(component)
                if name in seen:
                    raise ConfigurationError(f"Duplicate {category.value} component: {name}", setting=name)
                seen.add(name)
                self._by_name.setdefault(name, component)

    @classmethod
    def from_classes(cls, servers: Sequence[type] = (), packages: Sequence[type] = ()) -> ComponentRegistry:
        """Instantiate each component class once and register the instances."""
        return cls([server() for server in servers], [package() for package in packages])

    @classmethod
    def from_settings(cls, settings: Settings) -> ComponentRegistry:
        """Build the registry from the dotted class paths in settings."""
        servers = [import_string(path) for path in settings.servers]
        packages = [import_string(path) for path in settings.packages]
        registry = cls.from_classes(servers, packages)
        logger.info(
            "Component registry loaded — %d servers, %d packages",
            len(registry.list_servers()),
            len(registry.list_packages()),
        )
        return registry

    # ── Lookup ────────────────────────────────────────────────────────────────

    def list_servers(self) -> tuple[Any, ...]:
        return self._servers

    def list_packages(self) -> tuple[Any, ...]:
        return self._packages

    def all_components(self) -> tuple[Any, ...]:
        """Servers then packages, in registry order."""
        return self._servers + self._packages

    def get(self, name: str) -> Any | None:
        """Return the component with the given identity, or None."""
        return self._by_name.get(name)

    def ranked(self, names: Iterable[str]) -> list[Any]:
        """
        Return the named components ordered by descending priority.

        Used to rank peers providing the same service (e.g. webmail clients).
        Components sharing a priority keep their registry order; unknown
        names are ignored.
        """
        order = {id(c): index for index, c in enumerate(self.all_components())}
        peers = [c for c in (self.get(name) for name in names) if c is not None]
        return sorted(peers, key=lambda c: (-component_priority(c), order[id(c)]))

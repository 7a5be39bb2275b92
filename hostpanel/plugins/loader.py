"""
Plugin Hook Loader

Lets every enabled plugin register its setup listeners before the phase
driver starts, so that plugins can intercept any setup event.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from sqlalchemy import inspect as sa_inspect
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hostpanel.components.dispatcher import failure_reason, invoke_if_supported
from hostpanel.exceptions import DatabaseError, PluginLoadError
from hostpanel.models.plugin import Plugin

if TYPE_CHECKING:
    from hostpanel.events.manager import EventManager
    from hostpanel.plugins.registry import PluginRegistry

logger = logging.getLogger(__name__)


async def get_enabled_plugin_names(db: AsyncSession) -> list[str]:
    """
    Return the names of the enabled plugins.

    A database without the plugin table (fresh install) has no enabled
    plugins.

    Raises:
        DatabaseError: the plugin table cannot be read.
    """
    try:
        has_table = await db.run_sync(lambda session: sa_inspect(session.connection()).has_table(Plugin.__tablename__))
        if not has_table:
            logger.info("No plugin table found, assuming fresh install")
            return []
        result = await db.execute(
            select(Plugin.plugin_name).where(Plugin.plugin_status == "enabled").order_by(Plugin.plugin_id)
        )
    except SQLAlchemyError as exc:
        raise DatabaseError(f"Cannot read enabled plugins: {exc}", operation="select") from exc
    return list(result.scalars().all())


class PluginHookLoader:
    """Registers the setup listeners of enabled plugins on an EventManager."""

    def __init__(self, plugins: PluginRegistry, events: EventManager) -> None:
        self.plugins = plugins
        self.events = events

    async def load(self, enabled_names: Iterable[str]) -> int:
        """
        Run register_setup_listeners() for each enabled plugin that has it.

        Plugins are visited in registry order. Enabled names without a
        matching available plugin are logged and ignored.

        Returns:
            Number of plugins whose listeners were registered.

        Raises:
            PluginLoadError: a plugin returned a non-zero status or raised.
                Loading stops at that plugin.
        """
        enabled = set(enabled_names)
        if not enabled:
            return 0

        for name in sorted(enabled - set(self.plugins.names())):
            logger.warning("Enabled plugin %s is not available on this system", name, extra={"plugin": name})

        loaded = 0
        for plugin in self.plugins.all_plugins():
            name = plugin.meta.name
            if name not in enabled:
                continue
            try:
                result = await invoke_if_supported(plugin, "register_setup_listeners", self.events)
            except Exception as exc:
                raise PluginLoadError(name, str(exc) or type(exc).__name__) from exc
            if result.outcome:
                raise PluginLoadError(name, failure_reason(result.outcome))
            if result.supported:
                loaded += 1
                logger.debug("Setup listeners registered for plugin %s", name, extra={"plugin": name})

        logger.info("Plugin setup listeners registered for %d plugins", loaded)
        return loaded

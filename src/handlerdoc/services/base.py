"""BaseService — abstract foundation for handlerdoc services.

Every service receives :class:`HandlerdocSettings` at construction time and
builds its collaborators (introspection backend, plugin manager) from it
lazily, so constructing a service never imports user code.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from handlerdoc.config.models import IntrospectionBackend

if TYPE_CHECKING:
    from handlerdoc.config.settings import HandlerdocSettings
    from handlerdoc.introspection.descriptors import TypeIntrospector
    from handlerdoc.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class DefinitionService(BaseService):
            def describe(self, handler_class: str, command_class: str) -> ServiceResult:
                resolver = DefinitionResolver(self.introspector, self.plugin_manager)
                ...
    """

    def __init__(
        self,
        settings: HandlerdocSettings,
        *,
        introspector: TypeIntrospector | None = None,
        plugin_manager: PluginManager | None = None,
    ) -> None:
        self._settings = settings
        self._introspector = introspector
        self._plugin_manager = plugin_manager

    @property
    def introspector(self) -> TypeIntrospector:
        """Introspection backend selected by ``[introspection] backend``.

        Raises:
            DescriptorTableError: The table backend is selected but its
                file is missing, unreadable, or malformed.
        """
        if self._introspector is None:
            self._introspector = self._build_introspector()
        return self._introspector

    @property
    def plugin_manager(self) -> PluginManager:
        """Plugin manager with built-ins and entry-point plugins registered."""
        if self._plugin_manager is None:
            self._plugin_manager = self._build_plugin_manager()
        return self._plugin_manager

    def _build_introspector(self) -> TypeIntrospector:
        from handlerdoc.domain.errors import DescriptorTableError
        from handlerdoc.introspection import RuntimeIntrospector, TableIntrospector

        config = self._settings.introspection
        if config.backend is IntrospectionBackend.RUNTIME:
            return RuntimeIntrospector(
                search_paths=[self._settings.project_root],
                handler_method=self._settings.parser.handler_method,
            )
        path = self._settings.table_path
        if path is None:
            raise DescriptorTableError("<unset>", "introspection.table_path is not configured")
        return TableIntrospector.from_file(path)

    def _build_plugin_manager(self) -> PluginManager:
        from handlerdoc.plugins.builtins.namespace_domain import NamespaceDomainPlugin
        from handlerdoc.plugins.manager import PluginManager

        pm = PluginManager()
        plugins = self._settings.plugins
        if plugins.namespace_domain:
            pm.register_plugin(
                NamespaceDomainPlugin(
                    self._settings.domain,
                    command_segments=self._settings.parser.command_segments,
                ),
                name="namespace_domain",
            )
        if plugins.entry_points:
            pm.discover_and_load()
        logger.debug("Plugins loaded: %s", pm.list_plugin_names())
        return pm

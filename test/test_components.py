"""
Component Registry & Capability Dispatch Tests

Test classes:
    TestComponentHelpers  — name / priority conventions
    TestDispatcher        — invoke_if_supported / supports
    TestComponentRegistry — ordering, lookup, ranking, settings loading
"""

from __future__ import annotations

import pytest
from utils.mocks import AsyncComponent, MockComponent


class TestComponentHelpers:
    def test_name_defaults_to_class_name(self):
        from hostpanel.components.base import component_name

        class Named:
            pass

        assert component_name(Named()) == "Named"
        assert component_name(MockComponent("httpd")) == "httpd"

    def test_priority_attribute_or_callable(self):
        from hostpanel.components.base import component_priority

        class Fixed:
            priority = 5

        class Computed:
            def priority(self):
                return 7

        assert component_priority(Fixed()) == 5
        assert component_priority(Computed()) == 7
        assert component_priority(object()) == 0

    def test_phase_labels(self):
        from hostpanel.components.base import Phase

        assert [p.value for p in Phase] == ["preinstall", "install", "postinstall"]
        assert [p.label for p in Phase] == ["PreInstall", "Install", "PostInstall"]


class TestDispatcher:
    async def test_unsupported_operation_is_skipped(self):
        from hostpanel.components.dispatcher import invoke_if_supported

        component = MockComponent("httpd", implements=("install",))
        result = await invoke_if_supported(component, "preinstall")
        assert result.outcome == 0
        assert result.supported is False
        assert component.calls == []

    async def test_supported_operation_outcome_returned_verbatim(self):
        from hostpanel.components.dispatcher import invoke_if_supported

        component = MockComponent("httpd", failures={"install": 5})
        result = await invoke_if_supported(component, "install")
        assert result == (5, True)
        assert component.calls == [("httpd", "install")]

    async def test_message_outcome_returned_verbatim(self):
        from hostpanel.components.dispatcher import failure_reason, invoke_if_supported

        component = MockComponent("httpd", failures={"install": "cannot write vhost"})
        result = await invoke_if_supported(component, "install")
        assert result == ("cannot write vhost", True)
        assert failure_reason(result.outcome) == "cannot write vhost"
        assert failure_reason(3) == "returned status 3"

    async def test_none_outcome_counts_as_success(self):
        from hostpanel.components.dispatcher import invoke_if_supported

        class Quiet:
            def install(self):
                return None

        assert await invoke_if_supported(Quiet(), "install") == (0, True)

    async def test_arguments_are_forwarded(self):
        from hostpanel.components.dispatcher import invoke_if_supported

        received = []

        class Listening:
            def register_setup_listeners(self, events):
                received.append(events)

        marker = object()
        await invoke_if_supported(Listening(), "register_setup_listeners", marker)
        assert received == [marker]

    async def test_async_operation_is_awaited(self):
        from hostpanel.components.dispatcher import invoke_if_supported

        calls = []
        result = await invoke_if_supported(AsyncComponent(calls), "preinstall")
        assert result == (0, True)
        assert calls == [("async", "preinstall")]

    async def test_non_callable_attribute_is_not_an_operation(self):
        from hostpanel.components.dispatcher import invoke_if_supported, supports

        class Odd:
            install = "yes"

        assert supports(Odd(), "install") is False
        assert await invoke_if_supported(Odd(), "install") == (0, False)

    async def test_exceptions_propagate(self):
        from hostpanel.components.dispatcher import invoke_if_supported

        component = MockComponent("httpd", failures={"install": RuntimeError("disk full")})
        with pytest.raises(RuntimeError, match="disk full"):
            await invoke_if_supported(component, "install")


class TestComponentRegistry:
    def test_order_is_preserved(self):
        from hostpanel.components.registry import ComponentRegistry

        a, b, x = MockComponent("A"), MockComponent("B"), MockComponent("X")
        registry = ComponentRegistry([a, b], [x])
        assert registry.list_servers() == (a, b)
        assert registry.list_packages() == (x,)
        assert registry.all_components() == (a, b, x)

    def test_empty_registry(self):
        from hostpanel.components.registry import ComponentRegistry

        registry = ComponentRegistry()
        assert registry.list_servers() == ()
        assert registry.list_packages() == ()

    def test_duplicate_name_in_category_rejected(self):
        from hostpanel.components.registry import ComponentRegistry
        from hostpanel.exceptions import ConfigurationError

        with pytest.raises(ConfigurationError):
            ComponentRegistry([MockComponent("httpd"), MockComponent("httpd")])

    def test_get_by_name(self):
        from hostpanel.components.registry import ComponentRegistry

        httpd = MockComponent("httpd")
        registry = ComponentRegistry([httpd])
        assert registry.get("httpd") is httpd
        assert registry.get("nginx") is None

    def test_from_classes_instantiates_once(self):
        from hostpanel.components.registry import ComponentRegistry
        from utils.mocks import HttpdServer, MtaServer, RoundcubePackage

        registry = ComponentRegistry.from_classes([HttpdServer, MtaServer], [RoundcubePackage])
        assert [type(c) for c in registry.list_servers()] == [HttpdServer, MtaServer]
        assert registry.get("httpd") is registry.list_servers()[0]

    def test_from_settings(self):
        from hostpanel.components.registry import ComponentRegistry
        from hostpanel.config import Settings

        settings = Settings(
            servers=["utils.mocks.HttpdServer", "utils.mocks:MtaServer"],
            packages=["utils.mocks.RoundcubePackage"],
        )
        registry = ComponentRegistry.from_settings(settings)
        assert [c.name for c in registry.list_servers()] == ["httpd", "mta"]
        assert [c.name for c in registry.list_packages()] == ["roundcube"]

    def test_from_settings_unknown_class(self):
        from hostpanel.components.registry import ComponentRegistry
        from hostpanel.config import Settings
        from hostpanel.exceptions import ConfigurationError

        with pytest.raises(ConfigurationError):
            ComponentRegistry.from_settings(Settings(servers=["utils.mocks.NoSuchServer"]))

    def test_ranked_by_descending_priority(self):
        from hostpanel.components.registry import ComponentRegistry

        roundcube = MockComponent("roundcube", priority=10)
        rainloop = MockComponent("rainloop", priority=20)
        pma = MockComponent("pma", priority=10)
        registry = ComponentRegistry([], [roundcube, pma, rainloop])

        ranked = registry.ranked(["roundcube", "rainloop", "pma", "unknown"])
        assert ranked == [rainloop, roundcube, pma]


class TestImportString:
    def test_colon_and_dot_forms(self):
        from hostpanel.utils.imports import import_string
        from utils.mocks import HttpdServer

        assert import_string("utils.mocks.HttpdServer") is HttpdServer
        assert import_string("utils.mocks:HttpdServer") is HttpdServer

    def test_invalid_paths(self):
        from hostpanel.exceptions import ConfigurationError
        from hostpanel.utils.imports import import_string

        for path in ("nodots", "no_such_module_xyz.Thing", "utils.mocks.Missing"):
            with pytest.raises(ConfigurationError):
                import_string(path)

"""Tests for the routing root context."""

import pytest

from naming.context import RoutingContext
from naming.empty import EmptyContext
from naming.enumeration import CloseableEnumeration
from naming.errors import InvalidEndpointError, NameNotFoundError, NoProviderAvailableError
from naming.name import CompositeName
from naming.plugins import Binding, NameClassPair
from naming.url_context import UrlContextRegistry

from naming_fakes import RecordingContext, StaticContextFactory, StaticProviderFactory


class TestRoutingContextLookup:
    """Tests for lookup routing."""

    def setup_method(self):
        """Set up test fixtures."""
        self.env = {"custom": "value"}
        self.ejb = StaticContextFactory("ejb", label="ejb")
        self.url_contexts = UrlContextRegistry()
        self.legacy = RecordingContext(label="legacy")
        self.url_contexts.register("legacy", lambda scheme, env: self.legacy)
        self.ctx = RoutingContext(self.env, [], [self.ejb], self.url_contexts)

    def test_empty_lookup_returns_new_scope(self):
        """lookup('') yields a new root with a cloned environment."""
        child = self.ctx.lookup("")
        assert isinstance(child, RoutingContext)
        assert child is not self.ctx
        assert child.get_environment() == self.env
        assert child.get_environment() is not self.env
        assert child.context_factories == self.ctx.context_factories

    def test_child_scope_mutation_is_isolated(self):
        """Environment changes in the child scope do not reach the parent."""
        child = self.ctx.lookup(CompositeName())
        child.add_to_environment("extra", 1)
        child.remove_from_environment("custom")
        assert self.env == {"custom": "value"}
        self.ctx.add_to_environment("parent-only", 2)
        assert "parent-only" not in child.get_environment()

    def test_scheme_routes_with_residual_name(self):
        """A scheme selects the context and the residual name is forwarded."""
        result = self.ctx.lookup("ejb:app/module/bean")
        context = self.ejb.contexts[0]
        assert context.calls == [("lookup", CompositeName(["app", "module", "bean"]))]
        assert result == ("ejb", CompositeName(["app", "module", "bean"]))
        assert context.get_environment() is self.env

    def test_string_and_name_forms_behave_identically(self):
        """String and composite names route the same way."""
        self.ctx.lookup("ejb:a/b")
        self.ctx.lookup(CompositeName(["ejb:a", "b"]))
        first, second = self.ejb.contexts
        assert first.calls == second.calls

    def test_scheme_only_lookup(self):
        """'ejb:' forwards an empty residual name."""
        self.ctx.lookup("ejb:")
        assert self.ejb.contexts[0].calls == [("lookup", CompositeName())]

    def test_legacy_context_receives_original_string(self):
        """URL contexts get the unsplit name exactly as passed."""
        self.ctx.lookup("legacy:foo/bar")
        assert self.legacy.calls == [("lookup", "legacy:foo/bar")]

    def test_legacy_context_receives_original_name_object(self):
        """URL contexts get the caller's composite name object."""
        name = CompositeName(["legacy:foo", "bar"])
        self.ctx.lookup(name)
        assert self.legacy.calls[0][1] is name

    def test_plain_name_uses_empty_context(self):
        """Without scheme, providers or plugins, the empty context answers."""
        with pytest.raises(NameNotFoundError):
            self.ctx.lookup("plain/name")

    def test_unknown_scheme_raises(self):
        """Unresolvable schemes propagate NoProviderAvailableError."""
        with pytest.raises(NoProviderAvailableError):
            self.ctx.lookup("nowhere:thing")

    def test_none_name_rejected(self):
        """None names are rejected."""
        with pytest.raises(TypeError):
            self.ctx.lookup(None)

    def test_invalid_endpoint_propagates(self):
        """Endpoint errors surface from the operation."""
        self.ctx.add_to_environment("naming.provider.url", "bad uri")
        with pytest.raises(InvalidEndpointError):
            self.ctx.lookup("ejb:x")


class TestRoutingContextOperations:
    """Tests for the other directory verbs."""

    def setup_method(self):
        """Set up test fixtures."""
        self.providers = StaticProviderFactory("remote+http")
        self.ejb = StaticContextFactory("ejb", with_provider=True, label="ejb")
        self.url_contexts = UrlContextRegistry()
        self.legacy = RecordingContext(label="legacy")
        self.url_contexts.register("legacy", lambda scheme, env: self.legacy)
        self.env = {"naming.provider.url": "remote+http://localhost:8080"}
        self.ctx = RoutingContext(self.env, [self.providers], [self.ejb], self.url_contexts)

    def _calls(self):
        return [call for context in self.ejb.contexts for call in context.calls]

    def test_provider_context_is_used(self):
        """Configured provider URIs select the provider-backed context."""
        self.ctx.lookup("ejb:app/bean")
        provider = self.ejb.contexts[0].provider
        assert provider is self.providers.created[0]
        assert [str(uri) for uri in provider.provider_uris] == ["remote+http://localhost:8080"]

    def test_write_operations_forward_residual(self):
        """bind, rebind, unbind and lookup_link forward the residual name."""
        self.ctx.bind("ejb:a", 1)
        self.ctx.rebind("ejb:a", 2)
        self.ctx.unbind("ejb:a")
        self.ctx.lookup_link("ejb:a")
        residual = CompositeName(["a"])
        assert self._calls() == [
            ("bind", residual, 1),
            ("rebind", residual, 2),
            ("unbind", residual),
            ("lookup_link", residual),
        ]

    def test_subcontext_operations(self):
        """create_subcontext and destroy_subcontext are routed."""
        created = self.ctx.create_subcontext("ejb:sub")
        self.ctx.destroy_subcontext("ejb:sub")
        assert created.label == "ejb-sub"
        assert self._calls() == [
            ("create_subcontext", CompositeName(["sub"])),
            ("destroy_subcontext", CompositeName(["sub"])),
        ]

    def test_list_returns_closeable_enumeration(self):
        """list wraps the backend listing."""
        with self.ctx.list("ejb:app") as listing:
            assert isinstance(listing, CloseableEnumeration)
            assert list(listing) == [NameClassPair("bean", "example.Bean")]
        assert listing.closed
        assert len(self.ejb.contexts) == 1

    def test_list_bindings(self):
        """list_bindings wraps the backend bindings."""
        bindings = list(self.ctx.list_bindings("ejb:app"))
        assert bindings == [Binding("bean", "example.Bean", obj=42)]

    def test_rename_uses_residual_names(self):
        """Both names are split independently."""
        self.ctx.rename("ejb:old/x", "ejb:new/y")
        assert self._calls() == [
            ("rename", CompositeName(["old", "x"]), CompositeName(["new", "y"])),
        ]

    def test_rename_target_chosen_by_old_name(self):
        """Only the old name's scheme selects the context."""
        self.ctx.rename("ejb:a", "legacy:b")
        assert self._calls() == [("rename", CompositeName(["a"]), CompositeName(["b"]))]
        assert not self.legacy.calls

    def test_rename_legacy_forwards_original_names(self):
        """Legacy contexts receive both names unsplit."""
        self.ctx.rename("legacy:a", "ejb:b")
        assert self.legacy.calls == [("rename", "legacy:a", "ejb:b")]

    def test_rename_rejects_none(self):
        """Both rename arguments are required."""
        with pytest.raises(TypeError):
            self.ctx.rename("ejb:a", None)
        with pytest.raises(TypeError):
            self.ctx.rename(None, "ejb:a")

    def test_unserved_scheme_with_providers(self):
        """With providers configured, a scheme no context serves raises."""
        with pytest.raises(NoProviderAvailableError):
            self.ctx.bind("other:x", 1)


class TestRoutingContextEnvironment:
    """Tests for environment handling and name algebra."""

    def setup_method(self):
        """Set up test fixtures."""
        self.env = {}
        self.ctx = RoutingContext(self.env, [], [], UrlContextRegistry())

    def test_environment_is_not_copied(self):
        """The constructor keeps the caller's mapping."""
        assert self.ctx.get_environment() is self.env

    def test_default_environment(self):
        """A missing environment starts empty."""
        assert RoutingContext(None, [], []).get_environment() == {}

    def test_add_returns_previous_value(self):
        """add_to_environment behaves like a map put."""
        assert self.ctx.add_to_environment("k", 1) is None
        assert self.ctx.add_to_environment("k", 2) == 1
        assert self.env == {"k": 2}

    def test_remove_returns_previous_value(self):
        """remove_from_environment behaves like a map remove."""
        self.env["k"] = "v"
        assert self.ctx.remove_from_environment("k") == "v"
        assert self.ctx.remove_from_environment("k") is None

    def test_compose_strings(self):
        """Composing strings returns a string."""
        assert self.ctx.compose_name("b/c", "a") == "a/b/c"

    def test_compose_names_extends_prefix(self):
        """Composing names extends the prefix in place."""
        prefix = CompositeName(["a"])
        result = self.ctx.compose_name(CompositeName(["ejb:x"]), prefix)
        assert result is prefix
        assert prefix.components() == ["a", "ejb:x"]

    def test_root_properties(self):
        """The routing context is always the namespace root."""
        assert self.ctx.get_name_in_namespace() == ""
        assert self.ctx.get_name_parser("anything").parse("a/b") == CompositeName(["a", "b"])
        assert self.ctx.sticky_authentication_configuration is None
        assert self.ctx.sticky_ssl_context is None
        self.ctx.close()

    def test_empty_name_operations_use_empty_context(self):
        """Non-lookup operations on the empty name reach the empty context."""
        assert list(self.ctx.list("")) == []
        with pytest.raises(NameNotFoundError):
            self.ctx.destroy_subcontext("")

    def test_plugins_discovered_once(self, monkeypatch):
        """Plugins are discovered at construction and shared with child scopes."""
        calls = []

        def fake_load_services(group, expected_type):
            calls.append(group)
            return []

        monkeypatch.setattr("naming.context.load_services", fake_load_services)
        root = RoutingContext({})
        root.lookup("")
        assert calls == ["naming.providers", "naming.contexts"]

    def test_empty_context_child_lookup(self):
        """Looking up 'x:' style empty residuals on the empty context works."""
        empty = EmptyContext(self.env)
        assert isinstance(empty.lookup(""), EmptyContext)

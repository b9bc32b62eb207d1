"""Tests for georoutes.registrar — CallbackRegistrar."""

import sys
import threading
import types

import pytest

from georoutes.callbacks import DefaultCallbacks
from georoutes.errors import CallbackNotFoundError, InvalidArgumentError, ReflectionError
from georoutes.registrar import CallbackEntry, CallbackRegistrar, DefaultCallback


def _handler() -> str:
    return "handled"


def _other() -> str:
    return "other"


class _Provider:
    @staticmethod
    def foo() -> str:
        return "foo"

    @staticmethod
    def bar() -> str:
        return "bar"

    def instance_method(self) -> str:
        return "not registered"


class _ChildProvider(_Provider):
    prefix = "child"

    @classmethod
    def baz(cls) -> str:
        return f"{cls.prefix}-baz"


class _OverridingProvider(_Provider):
    def foo(self) -> str:
        return "instance foo"


@pytest.fixture
def registrar() -> CallbackRegistrar:
    return CallbackRegistrar()


class TestRegister:
    @pytest.mark.parametrize("name", ["unauthorized", "myCallback", "my_callback", "my-callback"])
    def test_stored_under_studly_proxy_key(self, registrar: CallbackRegistrar, name: str) -> None:
        registrar.register(name, _handler)
        expected = {
            "unauthorized": "orUnauthorized",
            "myCallback": "orMyCallback",
            "my_callback": "orMyCallback",
            "my-callback": "orMyCallback",
        }[name]
        assert registrar.has_proxy_key(expected)

    def test_overwrites_silently(self, registrar: CallbackRegistrar) -> None:
        registrar.register("myCallback", _handler)
        registrar.register("myCallback", _other)
        assert registrar.resolve("myCallback") is _other
        assert len(registrar) == 1

    def test_rejects_non_callable(self, registrar: CallbackRegistrar) -> None:
        with pytest.raises(InvalidArgumentError):
            registrar.register("broken", "not callable")  # type: ignore[arg-type]
        assert len(registrar) == 0

    def test_entries_keep_registered_name(self, registrar: CallbackRegistrar) -> None:
        registrar.register("my_callback", _handler)
        assert registrar.entries() == [
            CallbackEntry(name="my_callback", proxy="orMyCallback", handler=_handler)
        ]


class TestLoadMany:
    def test_registers_each_pair(self, registrar: CallbackRegistrar) -> None:
        registrar.load_many({"first": _handler, "second_one": _other})
        assert registrar.has_proxy_key("orFirst")
        assert registrar.has_proxy_key("orSecondOne")

    def test_empty_mapping(self, registrar: CallbackRegistrar) -> None:
        registrar.load_many({})
        assert registrar.list_proxies() == {}


class TestListProxies:
    def test_two_registrations(self, registrar: CallbackRegistrar) -> None:
        registrar.register("first", _handler)
        registrar.register("second", _other)
        proxies = registrar.list_proxies()
        assert proxies == {"orFirst": _handler, "orSecond": _other}

    def test_returns_copy(self, registrar: CallbackRegistrar) -> None:
        registrar.register("first", _handler)
        proxies = registrar.list_proxies()
        proxies["orInjected"] = _other
        proxies.pop("orFirst")
        assert registrar.has_proxy_key("orFirst")
        assert not registrar.has_proxy_key("orInjected")


class TestImportStaticHandlers:
    def test_registers_static_methods(self, registrar: CallbackRegistrar) -> None:
        registrar.import_static_handlers(_Provider)
        assert registrar.has_proxy_key("orFoo")
        assert registrar.has_proxy_key("orBar")
        assert registrar.resolve("foo")() == "foo"

    def test_skips_instance_methods(self, registrar: CallbackRegistrar) -> None:
        registrar.import_static_handlers(_Provider)
        assert not registrar.has_proxy_key("orInstanceMethod")
        assert len(registrar) == 2

    def test_includes_inherited_and_class_methods(self, registrar: CallbackRegistrar) -> None:
        registrar.import_static_handlers(_ChildProvider)
        assert set(registrar.list_proxies()) == {"orFoo", "orBar", "orBaz"}
        # classmethods come back bound to the class
        assert registrar.resolve("baz")() == "child-baz"

    def test_default_callbacks(self, registrar: CallbackRegistrar) -> None:
        registrar.import_static_handlers(DefaultCallbacks)
        assert set(registrar.list_proxies()) == {"orUnauthorized", "orNotFound", "orRedirectTo"}

    def test_instance_override_hides_static_base(self, registrar: CallbackRegistrar) -> None:
        registrar.import_static_handlers(_OverridingProvider)
        assert not registrar.has_proxy_key("orFoo")
        assert set(registrar.list_proxies()) == {"orBar"}

    def test_import_string(
        self, registrar: CallbackRegistrar, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        mod = types.ModuleType("_fake_geo_callbacks")
        mod.Provider = _Provider  # type: ignore[attr-defined]
        monkeypatch.setitem(sys.modules, "_fake_geo_callbacks", mod)

        registrar.import_static_handlers("_fake_geo_callbacks:Provider")
        assert registrar.has_proxy_key("orFoo")

    @pytest.mark.parametrize(
        "provider",
        [
            42,
            _handler,
            "no_such_module_xyz:Provider",
            "georoutes.callbacks:Missing",
            "noColon",
            ".callbacks:DefaultCallbacks",
        ],
    )
    def test_not_introspectable(self, registrar: CallbackRegistrar, provider: object) -> None:
        registrar.register("existing", _handler)
        with pytest.raises(ReflectionError):
            registrar.import_static_handlers(provider)  # type: ignore[arg-type]
        assert registrar.list_proxies() == {"orExisting": _handler}


class TestResolve:
    def test_getter_by_bare_name(self, registrar: CallbackRegistrar) -> None:
        registrar.register("myCallback", _handler)
        assert registrar.resolve("myCallback") is _handler

    def test_getter_by_exact_proxy_key(self, registrar: CallbackRegistrar) -> None:
        registrar.register("my_callback", _handler)
        assert registrar.resolve("orMyCallback") is _handler

    def test_snake_case_does_not_round_trip(self, registrar: CallbackRegistrar) -> None:
        """Writes use studly case, bare-name reads only capitalize the first letter."""
        registrar.register("my_callback", _handler)
        assert registrar.has_proxy_key("orMyCallback")
        with pytest.raises(CallbackNotFoundError) as exc_info:
            registrar.resolve("my_callback")
        assert exc_info.value.name == "my_callback"

    def test_missing(self, registrar: CallbackRegistrar) -> None:
        with pytest.raises(CallbackNotFoundError, match=r"Undefined callback \[nope\]"):
            registrar.resolve("nope")

    def test_setter_returns_handler(self, registrar: CallbackRegistrar) -> None:
        assert registrar.resolve("my_callback", _handler) is _handler
        assert registrar.has_proxy_key("orMyCallback")

    def test_setter_matches_register(self) -> None:
        a = CallbackRegistrar()
        b = CallbackRegistrar()
        a.resolve("some-name", _handler)
        b.register("some-name", _handler)
        assert a.list_proxies() == b.list_proxies()

    def test_non_callable_handler_means_getter(self, registrar: CallbackRegistrar) -> None:
        registrar.register("myCallback", _handler)
        assert registrar.resolve("myCallback", None) is _handler


class TestMembership:
    def test_has_registered_name(self, registrar: CallbackRegistrar) -> None:
        registrar.register("myCallback", _handler)
        assert registrar.has_registered_name("myCallback")
        assert not registrar.has_registered_name("other")

    def test_has_registered_name_snake_case(self, registrar: CallbackRegistrar) -> None:
        registrar.register("my_callback", _handler)
        assert not registrar.has_registered_name("my_callback")
        assert registrar.has_registered_name("myCallback")

    def test_has_proxy_key_is_literal(self, registrar: CallbackRegistrar) -> None:
        registrar.register("myCallback", _handler)
        assert registrar.has_proxy_key("orMyCallback")
        assert not registrar.has_proxy_key("myCallback")

    def test_contains_and_len(self, registrar: CallbackRegistrar) -> None:
        registrar.register("myCallback", _handler)
        assert "orMyCallback" in registrar
        assert "myCallback" not in registrar
        assert len(registrar) == 1


class TestDefault:
    def test_builtin_default_is_unauthorized(self, registrar: CallbackRegistrar) -> None:
        handler, args = registrar.get_default()
        assert handler is DefaultCallbacks.unauthorized
        assert args == ()

    def test_invoke_builtin_default(self, registrar: CallbackRegistrar) -> None:
        from georoutes.errors import Unauthorized

        with pytest.raises(Unauthorized):
            registrar.invoke_default()

    def test_set_default_by_name(self, registrar: CallbackRegistrar) -> None:
        calls: list[tuple] = []

        def unauthorized(*args: object) -> str:
            calls.append(args)
            return "denied"

        registrar.register("unauthorized", unauthorized)
        registrar.set_default("unauthorized")
        assert registrar.invoke_default() == "denied"
        assert calls == [()]

    def test_set_default_by_proxy_key(self, registrar: CallbackRegistrar) -> None:
        registrar.register("go_home", _handler)
        registrar.set_default("orGoHome")
        assert registrar.get_default() == (_handler, ())

    def test_set_default_callable_with_args(self, registrar: CallbackRegistrar) -> None:
        calls: list[tuple] = []

        def record(*args: object) -> int:
            calls.append(args)
            return len(calls)

        registrar.set_default(record, "a", 2)
        assert registrar.get_default() == (record, ("a", 2))
        assert registrar.invoke_default() == 1
        assert calls == [("a", 2)]

    def test_set_default_unknown_name(self, registrar: CallbackRegistrar) -> None:
        with pytest.raises(CallbackNotFoundError):
            registrar.set_default("missing")
        assert registrar.get_default()[0] is DefaultCallbacks.unauthorized

    def test_set_default_invalid_type(self, registrar: CallbackRegistrar) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            registrar.set_default(42)  # type: ignore[arg-type]
        assert exc_info.value.actual == "int"
        assert exc_info.value.expected == ("str", "callable")

    def test_handler_errors_propagate(self, registrar: CallbackRegistrar) -> None:
        def boom() -> None:
            raise RuntimeError("boom")

        registrar.set_default(boom)
        with pytest.raises(RuntimeError, match="boom"):
            registrar.invoke_default()

    def test_default_may_reenter_registrar(self, registrar: CallbackRegistrar) -> None:
        registrar.register("fallback", _handler)
        registrar.set_default(lambda: registrar.resolve("fallback")())
        assert registrar.invoke_default() == "handled"

    def test_default_callback_value(self, registrar: CallbackRegistrar) -> None:
        registrar.set_default(_handler)
        assert registrar.default_callback() == DefaultCallback(_handler, ())


class TestThreadSafety:
    def test_concurrent_registration(self, registrar: CallbackRegistrar) -> None:
        def worker(offset: int) -> None:
            for i in range(100):
                registrar.register(f"w{offset}n{i}", _handler)
                registrar.list_proxies()

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(registrar) == 800

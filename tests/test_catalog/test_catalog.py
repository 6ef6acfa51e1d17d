"""Tests for module registries, the merged catalog and catalog files."""

from pathlib import Path

import pytest

from diagtrans.i18n import (
    CatalogFileError,
    CatalogRegistry,
    CatalogSource,
    ModuleRegistry,
    StaticCatalog,
    UnknownModuleError,
    load_catalog_file,
)
from diagtrans.i18n.system import STRINGS as SYSTEM_STRINGS


class CountingCatalog:
    """CatalogSource that counts how often it is asked for its catalog."""

    def __init__(self, strings: dict[str, str]) -> None:
        self.strings = strings
        self.calls = 0

    def catalog(self) -> dict[str, str]:
        self.calls += 1
        return self.strings


# ── SYSTEM catalog ──────────────────────────────────────────────────────


class TestSystemCatalog:
    def test_all_system_tags_present(self):
        assert set(SYSTEM_STRINGS) == {
            "CANNOT_CONTINUE",
            "PROFILE_FILE",
            "DEPENDENCY_VERSION",
            "GLOBAL_VERSION",
            "LOGGER_CALLBACK_ERROR",
            "LOOKUP_ERROR",
            "MODULE_ERROR",
            "MODULE_VERSION",
            "MODULE_END",
            "NO_NETWORK",
            "POLICY_DISABLED",
            "UNKNOWN_METHOD",
            "UNKNOWN_MODULE",
            "SKIP_IPV4_DISABLED",
            "SKIP_IPV6_DISABLED",
            "FAKE_DELEGATION",
            "ADDED_FAKE_DELEGATION",
            "FAKE_DELEGATION_TO_SELF",
            "FAKE_DELEGATION_IN_ZONE_NO_IP",
            "FAKE_DELEGATION_NO_IP",
            "PACKET_BIG",
        }

    def test_no_empty_templates(self):
        empty = [k for k, v in SYSTEM_STRINGS.items() if not v.strip()]
        assert not empty, f"Empty SYSTEM templates: {empty}"

    def test_exact_texts(self):
        assert SYSTEM_STRINGS["LOOKUP_ERROR"] == (
            "DNS query to {ns} for {name}/{type}/{class} failed with error: {message}"
        )
        assert SYSTEM_STRINGS["FAKE_DELEGATION_IN_ZONE_NO_IP"] == (
            "The fake delegation of domain {domain} includes an in-zone name server "
            "{ns} without mandatory glue (without IP address)."
        )
        assert SYSTEM_STRINGS["PACKET_BIG"] == (
            "Packet size ({size}) exceeds common maximum size of {maxsize} bytes "
            '(try with "{command}").'
        )

    def test_pot_file_lists_every_system_message(self):
        pot = Path(__file__).resolve().parents[2] / "src" / "diagtrans" / "locale" / "diagtrans.pot"
        content = pot.read_text(encoding="utf-8")
        for template in SYSTEM_STRINGS.values():
            escaped = template.replace('"', '\\"')
            assert f'msgid "{escaped}"' in content, template


# ── ModuleRegistry ──────────────────────────────────────────────────────


class TestModuleRegistry:
    def test_register_and_get(self):
        registry = ModuleRegistry()
        source = StaticCatalog({"A": "a"})
        registry.register("Basic", source)
        assert registry.get("Basic") is source
        assert "Basic" in registry
        assert len(registry) == 1

    def test_insertion_order(self):
        registry = ModuleRegistry()
        for name in ("Basic", "Address", "Zone", "Delegation"):
            registry.register(name, StaticCatalog({}))
        assert registry.modules() == ["Basic", "Address", "Zone", "Delegation"]

    def test_unknown_module(self):
        registry = ModuleRegistry()
        registry.register("Basic", StaticCatalog({}))
        with pytest.raises(UnknownModuleError, match="Available modules: Basic"):
            registry.get("Nope")

    def test_rejects_objects_without_catalog(self):
        registry = ModuleRegistry()
        with pytest.raises(TypeError, match="catalog"):
            registry.register("Basic", {"A": "a"})  # type: ignore[arg-type]

    def test_static_catalog_is_a_source(self):
        assert isinstance(StaticCatalog({}), CatalogSource)

    def test_static_catalog_copies_input(self):
        strings = {"A": "a"}
        source = StaticCatalog(strings)
        strings["A"] = "changed"
        assert source.catalog() == {"A": "a"}


# ── CatalogRegistry ─────────────────────────────────────────────────────


class TestCatalogRegistry:
    def test_system_installed_first(self):
        modules = ModuleRegistry()
        modules.register("Basic", StaticCatalog({"B": "b"}))
        data = CatalogRegistry(modules).load()
        assert list(data) == ["SYSTEM", "BASIC"]
        assert data["SYSTEM"]["NO_NETWORK"] == "Both IPv4 and IPv6 are disabled."

    def test_base_module_requested_first(self):
        modules = ModuleRegistry()
        modules.register("Zone", StaticCatalog({}))
        modules.register("Basic", StaticCatalog({}))
        data = CatalogRegistry(modules).load()
        assert list(data) == ["SYSTEM", "BASIC", "ZONE"]

    def test_base_module_required(self):
        modules = ModuleRegistry()
        modules.register("Zone", StaticCatalog({}))
        with pytest.raises(UnknownModuleError):
            CatalogRegistry(modules).load()

    def test_without_base_module(self):
        modules = ModuleRegistry()
        modules.register("Zone", StaticCatalog({"Z": "z"}))
        data = CatalogRegistry(modules, base_module=None).load()
        assert list(data) == ["SYSTEM", "ZONE"]

    def test_lazy_and_idempotent(self):
        source = CountingCatalog({"B": "b"})
        modules = ModuleRegistry()
        modules.register("Basic", source)
        registry = CatalogRegistry(modules)

        assert not registry.loaded
        assert source.calls == 0

        first = registry.load()
        second = registry.load()
        registry.lookup("BASIC", "B")

        assert registry.loaded
        assert first is second
        assert source.calls == 1

    def test_last_write_wins(self):
        first = StaticCatalog({"B01": "first"})
        second = StaticCatalog({"B01": "second"})
        modules = ModuleRegistry()
        modules.register("Basic", first)
        modules.register("BASIC", second)
        data = CatalogRegistry(modules, base_module=None).load()
        assert data["BASIC"] == {"B01": "second"}

    def test_module_can_override_system(self):
        modules = ModuleRegistry()
        modules.register("System", StaticCatalog({"NO_NETWORK": "offline"}))
        data = CatalogRegistry(modules, base_module=None).load()
        assert dict(data["SYSTEM"]) == {"NO_NETWORK": "offline"}

    def test_lookup(self):
        modules = ModuleRegistry()
        modules.register("Basic", StaticCatalog({"B": "b"}))
        registry = CatalogRegistry(modules)
        assert registry.lookup("BASIC", "B") == "b"
        assert registry.lookup("BASIC", "MISSING") is None
        assert registry.lookup("MISSING", "B") is None
        assert registry.lookup("SYSTEM", "FAKE_DELEGATION") == "Followed a fake delegation."

    def test_lookup_is_case_sensitive_on_module(self):
        modules = ModuleRegistry()
        modules.register("Basic", StaticCatalog({"B": "b"}))
        assert CatalogRegistry(modules).lookup("Basic", "B") is None

    def test_later_source_changes_not_visible(self):
        strings = {"B": "b"}
        modules = ModuleRegistry()
        modules.register("Basic", CountingCatalog(strings))
        registry = CatalogRegistry(modules)
        registry.load()
        strings["B"] = "changed"
        assert registry.lookup("BASIC", "B") == "b"

    def test_failed_build_is_retried(self):
        class Flaky:
            def __init__(self):
                self.calls = 0

            def catalog(self):
                self.calls += 1
                if self.calls == 1:
                    raise RuntimeError("not ready")
                return {"B": "b"}

        source = Flaky()
        modules = ModuleRegistry()
        modules.register("Basic", source)
        registry = CatalogRegistry(modules)

        with pytest.raises(RuntimeError, match="not ready"):
            registry.load()
        assert not registry.loaded
        assert registry.lookup("BASIC", "B") == "b"


# ── Catalog files ───────────────────────────────────────────────────────


class TestCatalogFile:
    def test_load(self, tmp_path):
        path = tmp_path / "modules.yaml"
        path.write_text(
            "Basic:\n"
            "  B01_PARENT_FOUND: 'The parent zone is {pname}.'\n"
            "Delegation:\n"
            "  ENOUGH_NS: 'Enough name servers: {count}.'\n",
            encoding="utf-8",
        )
        registry = load_catalog_file(path)
        assert registry.modules() == ["Basic", "Delegation"]
        assert registry.get("Delegation").catalog() == {"ENOUGH_NS": "Enough name servers: {count}."}

    def test_load_into_existing_registry(self, tmp_path):
        path = tmp_path / "zone.yaml"
        path.write_text("Zone:\n  Z01: 'z'\n", encoding="utf-8")
        registry = ModuleRegistry()
        registry.register("Basic", StaticCatalog({}))
        result = load_catalog_file(path, registry=registry)
        assert result is registry
        assert registry.modules() == ["Basic", "Zone"]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert len(load_catalog_file(path)) == 0

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_catalog_file(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("Basic: [unclosed\n", encoding="utf-8")
        with pytest.raises(CatalogFileError, match="Invalid YAML"):
            load_catalog_file(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- Basic\n", encoding="utf-8")
        with pytest.raises(CatalogFileError, match="top level"):
            load_catalog_file(path)

    def test_module_must_be_mapping(self, tmp_path):
        path = tmp_path / "module.yaml"
        path.write_text("Basic: hello\n", encoding="utf-8")
        with pytest.raises(CatalogFileError, match="Basic"):
            load_catalog_file(path)

    def test_template_must_be_string(self, tmp_path):
        path = tmp_path / "template.yaml"
        path.write_text("Basic:\n  B01: [1, 2]\n", encoding="utf-8")
        with pytest.raises(CatalogFileError, match="Basic/B01"):
            load_catalog_file(path)

    def test_catalog_file_error_is_value_error(self):
        assert issubclass(CatalogFileError, ValueError)

"""
Catalog Registry — merged message catalog of every active module.

Each evaluation module supplies its own ``tag -> template`` mapping through
the CatalogSource protocol. The CatalogRegistry merges them, together with
the built-in SYSTEM table, into one catalog keyed by uppercased module name:

    {"SYSTEM": {"NO_NETWORK": "..."}, "BASIC": {...}, ...}

The catalog is built on first access and then cached for the life of the
registry. Module sources are queried once.
"""

import threading
from collections.abc import Mapping, Sequence
from pathlib import Path
from types import MappingProxyType
from typing import Protocol, runtime_checkable

import structlog
import yaml

from .system import STRINGS as SYSTEM_STRINGS
from .system import SYSTEM_MODULE

logger = structlog.get_logger()

# Always requested first, before the modules reported by the registry
BASE_MODULE = "Basic"

Catalog = Mapping[str, Mapping[str, str]]


class UnknownModuleError(Exception):
    """Error raised when a requested module is not in the registry."""

    pass


class CatalogFileError(ValueError):
    """Error raised when a catalog file does not have the expected shape."""

    pass


@runtime_checkable
class CatalogSource(Protocol):
    """Anything that can hand out a ``tag -> template`` mapping."""

    def catalog(self) -> Mapping[str, str]:
        ...


class StaticCatalog:
    """CatalogSource backed by a fixed mapping."""

    def __init__(self, strings: Mapping[str, str]) -> None:
        self._strings = dict(strings)

    def catalog(self) -> Mapping[str, str]:
        return self._strings

    def __repr__(self) -> str:
        return f"StaticCatalog({len(self._strings)} tags)"


class ModuleRegistry:
    """Ordered registry of evaluation modules and their catalog sources.

    Registration order is preserved and is the order in which catalogs are
    merged, so a later module whose uppercased name collides with an earlier
    one replaces it in the merged catalog.

    Usage:
        modules = ModuleRegistry()
        modules.register("Basic", StaticCatalog({"B01_PARENT_FOUND": "..."}))
        modules.register("Delegation", delegation_module)
    """

    def __init__(self) -> None:
        self._sources: dict[str, CatalogSource] = {}

    def register(self, name: str, source: CatalogSource) -> None:
        """Register (or replace) the catalog source of a module.

        Args:
            name: Module name as reported by the engine (e.g. "Basic").
            source: Object implementing ``catalog()``.

        Raises:
            TypeError: If source does not implement CatalogSource.
        """
        if not isinstance(source, CatalogSource):
            raise TypeError(
                f"Module '{name}' must provide a catalog() method, "
                f"got {type(source).__name__}"
            )
        self._sources[name] = source

    def get(self, name: str) -> CatalogSource:
        """Get the catalog source of a module.

        Raises:
            UnknownModuleError: If the module is not registered.
        """
        if name not in self._sources:
            available = ", ".join(self._sources) if self._sources else "(none)"
            raise UnknownModuleError(
                f"Module '{name}' not found. Available modules: {available}"
            )
        return self._sources[name]

    def modules(self) -> list[str]:
        """Registered module names, in registration order."""
        return list(self._sources)

    def __contains__(self, name: object) -> bool:
        return name in self._sources

    def __len__(self) -> int:
        return len(self._sources)

    def __repr__(self) -> str:
        return f"ModuleRegistry(modules={self.modules()})"


class CatalogRegistry:
    """Lazily built, cached catalog for one translator.

    Build order:
    1. The SYSTEM table under "SYSTEM".
    2. The base module, if any, then every module reported by the
       module registry, each under ``name.upper()``. Last write wins.

    Without a module registry the catalog only holds SYSTEM. With one, the
    base module must be registered in it.

    A failing catalog source is not caught: the error reaches whoever
    triggered the build, and nothing is cached, so the next access retries.
    """

    def __init__(
        self,
        modules: ModuleRegistry | None = None,
        base_module: str | None = BASE_MODULE,
    ) -> None:
        self._modules = modules
        self._base_module = base_module
        self._data: Catalog | None = None
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._data is not None

    def load(self) -> Catalog:
        """Return the merged catalog, building it on first call."""
        if self._data is None:
            with self._lock:
                if self._data is None:
                    self._data = self._build()
        return self._data

    def lookup(self, module: str, tag: str) -> str | None:
        """Template for a module/tag pair, or None if either is unknown."""
        return self.load().get(module, {}).get(tag)

    def _module_names(self, modules: ModuleRegistry) -> Sequence[str]:
        reported = modules.modules()
        if self._base_module is None:
            return reported
        return [self._base_module] + [n for n in reported if n != self._base_module]

    def _build(self) -> Catalog:
        data: dict[str, Mapping[str, str]] = {
            SYSTEM_MODULE: MappingProxyType(dict(SYSTEM_STRINGS)),
        }
        if self._modules is not None:
            for name in self._module_names(self._modules):
                strings = self._modules.get(name).catalog()
                key = name.upper()
                if key in data:
                    logger.debug("catalog.module_replaced", module=key, source=name)
                data[key] = MappingProxyType(dict(strings))

        logger.debug(
            "catalog.loaded",
            modules=len(data),
            tags=sum(len(tags) for tags in data.values()),
        )
        return MappingProxyType(data)


def load_catalog_file(path: Path, registry: ModuleRegistry | None = None) -> ModuleRegistry:
    """Load module catalogs from a YAML file.

    Expected shape:

        Basic:
          B01_PARENT_FOUND: "The parent zone is {pname}."
        Delegation:
          ENOUGH_NS: "..."

    Args:
        path: YAML file to read.
        registry: Registry to add the modules to. A new one is created if None.

    Returns:
        The registry with one StaticCatalog per module in the file, in file order.

    Raises:
        FileNotFoundError: If path does not exist.
        CatalogFileError: If the content is not a mapping of mappings of strings.
    """
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise CatalogFileError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise CatalogFileError(f"{path}: top level must be a mapping of modules")

    registry = registry if registry is not None else ModuleRegistry()
    for module, strings in data.items():
        if not isinstance(strings, dict):
            raise CatalogFileError(f"{path}: module '{module}' must map tags to templates")
        for tag, template in strings.items():
            if not isinstance(template, str):
                raise CatalogFileError(
                    f"{path}: template for {module}/{tag} must be a string"
                )
        registry.register(str(module), StaticCatalog({str(k): v for k, v in strings.items()}))

    logger.debug("catalog.file_loaded", path=str(path), modules=len(data))
    return registry

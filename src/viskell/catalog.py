"""Function catalog: the type classes and function signatures of the editor.

A catalog is configuration. It is read from YAML with two sections::

    classes:
      Num: [Int, Integer, Float, Double]
    functions:
      Arithmetic:
        "(+)": Num a => a -> a -> a

`classes` is the table consulted when checking constraints; `functions`
lists the blocks the editor offers, grouped by category.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from importlib import resources
from typing import TYPE_CHECKING, Any

from viskell.config import load_config, load_settings
from viskell.constraints import TypeClass
from viskell.errors import CatalogError, SignatureError
from viskell.expr import Ident, Value
from viskell.log import configure as configure_logging
from viskell.log import get_logger
from viskell.signature import build_signature

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping
    from pathlib import Path

    from viskell.config import Settings
    from viskell.types import Type

logger = get_logger(__name__)

DEFAULT_CATALOG = "catalog.yaml"


@dataclass(frozen=True)
class FunctionInfo:
    """A function offered by the catalog.

    The signature is a template: it is never unified itself, every
    reference to the function gets a fresh copy.
    """

    name: str
    category: str
    signature: Type

    def __str__(self) -> str:
        return f"{self.name} :: {self.signature}"


@dataclass
class Catalog:
    """Type classes and functions known to the editor."""

    classes: dict[str, TypeClass] = field(default_factory=dict)
    functions: dict[str, FunctionInfo] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Catalog:
        """Build a catalog from a parsed configuration mapping.

        Raises:
            CatalogError: If a section has the wrong shape, a signature
                does not parse, or a function is defined twice.

        """
        unknown = set(data) - {"classes", "functions"}
        if unknown:
            msg = f"Unknown catalog sections: {sorted(unknown)}"
            raise CatalogError(msg)

        catalog = cls()
        for name, instances in _mapping(data.get("classes"), "classes").items():
            if not isinstance(instances, list) or not all(
                isinstance(i, str) for i in instances
            ):
                msg = f"Instances of class {name!r} must be a list of type names"
                raise CatalogError(msg)
            catalog.classes[name] = TypeClass(name, frozenset(instances))

        for category, entries in _mapping(data.get("functions"), "functions").items():
            for name, text in _mapping(entries, f"category {category!r}").items():
                catalog.add(name, category, text)

        logger.info(
            "Loaded catalog with %d classes and %d functions",
            len(catalog.classes),
            len(catalog.functions),
        )
        return catalog

    @classmethod
    def from_yaml(cls, path: str | Path) -> Catalog:
        """Load a catalog from a YAML file."""
        return cls.from_mapping(load_config(path))

    @classmethod
    def from_settings(cls, settings: Settings) -> Catalog:
        """Load the catalog named by the settings, or the bundled one."""
        if settings.catalog is None:
            return load_default_catalog()
        return cls.from_yaml(settings.catalog)

    def add(self, name: str, category: str, text: str) -> FunctionInfo:
        """Add a function given its signature text.

        Raises:
            CatalogError: If the name is taken or the signature is invalid.

        """
        if name in self.functions:
            msg = f"Function {name!r} is defined more than once"
            raise CatalogError(msg)
        if not isinstance(text, str):
            msg = f"Signature of {name!r} must be a string, got {text!r}"
            raise CatalogError(msg)
        try:
            signature = build_signature(text, self.classes)
        except SignatureError as exc:
            msg = f"Invalid signature for {name!r}: {exc}"
            raise CatalogError(msg) from exc
        info = FunctionInfo(name, category, signature)
        self.functions[name] = info
        return info

    def type_class(self, name: str) -> TypeClass:
        """Return the type class with the given name.

        Raises:
            KeyError: If there is no such class.

        """
        if name not in self.classes:
            msg = f"Unknown type class {name!r}. Available: {sorted(self.classes)}"
            raise KeyError(msg)
        return self.classes[name]

    def lookup(self, name: str) -> FunctionInfo:
        """Return the function with the given name.

        Raises:
            KeyError: If there is no such function.

        """
        if name not in self.functions:
            msg = f"Unknown function {name!r}"
            raise KeyError(msg)
        return self.functions[name]

    def categories(self) -> list[str]:
        """Categories in catalog order."""
        return list(dict.fromkeys(info.category for info in self.functions.values()))

    def functions_in(self, category: str) -> list[FunctionInfo]:
        return [info for info in self.functions.values() if info.category == category]

    def ident(self, name: str) -> Ident:
        """Build an expression referencing a catalog function."""
        info = self.lookup(name)
        return Ident(info.name, info.signature)

    def value(self, type_text: str, value: str) -> Value:
        """Build a literal expression, e.g. ``catalog.value("Float", "5.0")``.

        Raises:
            SignatureError: If the type does not parse.

        """
        return Value(build_signature(type_text, self.classes), value)

    def __contains__(self, name: object) -> bool:
        return name in self.functions

    def __iter__(self) -> Iterator[FunctionInfo]:
        return iter(self.functions.values())

    def __len__(self) -> int:
        return len(self.functions)


def _mapping(value: Any, what: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"Catalog {what} must be a mapping"
        raise CatalogError(msg)
    return value


def load_default_catalog() -> Catalog:
    """Load the catalog bundled with the package."""
    source = resources.files("viskell").joinpath("data", DEFAULT_CATALOG)
    with resources.as_file(source) as path:
        return Catalog.from_yaml(path)


def setup(path: str | Path | None = None) -> Catalog:
    """Load settings, configure logging and return the configured catalog.

    Args:
        path: Settings file; defaults to ``$VISKELL_CONFIG`` if set

    """
    settings = load_settings(path)
    configure_logging(settings.log_level)
    return Catalog.from_settings(settings)

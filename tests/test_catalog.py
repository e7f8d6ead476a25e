"""Tests for the function catalog."""

from pathlib import Path

import pytest

from viskell.catalog import Catalog, load_default_catalog, setup
from viskell.checker import check
from viskell.config import Settings
from viskell.errors import CatalogError, SignatureError
from viskell.expr import apply
from viskell.types import TypeCon, TypeVar

SMALL_CATALOG = """\
classes:
  Ord: [Int, Char]
functions:
  Comparison:
    max: Ord a => a -> a -> a
  Logic:
    not: Bool -> Bool
"""


def write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


class TestDefaultCatalog:
    """Tests for the bundled catalog."""

    def test_loads(self) -> None:
        catalog = load_default_catalog()
        assert "map" in catalog
        assert "(+)" in catalog
        assert len(catalog) > 20

    def test_classes(self) -> None:
        catalog = load_default_catalog()
        num = catalog.type_class("Num")
        assert num.admits(TypeCon("Int"))
        assert not num.admits(TypeCon("Bool"))

    def test_signature_text(self) -> None:
        catalog = load_default_catalog()
        assert str(catalog.lookup("map")) == "map :: (a -> b) -> [a] -> [b]"
        assert str(catalog.lookup("fst")) == "fst :: (a, b) -> a"

    def test_constraints_come_from_classes(self) -> None:
        catalog = load_default_catalog()
        signature = catalog.lookup("negate").signature
        argument = signature.argument  # type: ignore[attr-defined]
        assert isinstance(argument, TypeVar)
        assert catalog.type_class("Num") in argument.constraints.classes

    def test_categories_keep_order(self) -> None:
        catalog = load_default_catalog()
        categories = catalog.categories()
        assert categories[0] == "Arithmetic"
        assert "Lists" in categories
        assert all(info.category == "Lists" for info in catalog.functions_in("Lists"))


class TestCatalogFromMapping:
    """Tests for building catalogs from configuration."""

    def test_small_catalog(self, tmp_path: Path) -> None:
        catalog = Catalog.from_yaml(write(tmp_path / "catalog.yaml", SMALL_CATALOG))
        assert sorted(info.name for info in catalog) == ["max", "not"]
        assert catalog.categories() == ["Comparison", "Logic"]

    def test_empty_mapping(self) -> None:
        catalog = Catalog.from_mapping({})
        assert len(catalog) == 0
        assert catalog.categories() == []

    def test_unknown_section(self) -> None:
        with pytest.raises(CatalogError, match="Unknown catalog sections"):
            Catalog.from_mapping({"types": {}})

    def test_class_instances_must_be_list(self) -> None:
        with pytest.raises(CatalogError, match="must be a list"):
            Catalog.from_mapping({"classes": {"Num": "Int"}})

    def test_functions_must_be_mapping(self) -> None:
        with pytest.raises(CatalogError, match="must be a mapping"):
            Catalog.from_mapping({"functions": ["id"]})

    def test_invalid_signature(self) -> None:
        data = {"functions": {"Misc": {"bad": "a ->"}}}
        with pytest.raises(CatalogError, match="Invalid signature for 'bad'") as exc_info:
            Catalog.from_mapping(data)
        assert isinstance(exc_info.value.__cause__, SignatureError)

    def test_unknown_class_in_signature(self) -> None:
        data = {"functions": {"Misc": {"sort": "Ord a => [a] -> [a]"}}}
        with pytest.raises(CatalogError, match="Unknown type class"):
            Catalog.from_mapping(data)

    def test_duplicate_function(self) -> None:
        data = {"functions": {"A": {"id": "a -> a"}, "B": {"id": "b -> b"}}}
        with pytest.raises(CatalogError, match="more than once"):
            Catalog.from_mapping(data)

    def test_non_string_signature(self) -> None:
        with pytest.raises(CatalogError, match="must be a string"):
            Catalog.from_mapping({"functions": {"A": {"one": 1}}})


class TestCatalogLookup:
    """Tests for lookups and expression helpers."""

    def test_unknown_function(self) -> None:
        with pytest.raises(KeyError, match="Unknown function"):
            load_default_catalog().lookup("frobnicate")

    def test_unknown_class(self) -> None:
        with pytest.raises(KeyError, match="Unknown type class"):
            load_default_catalog().type_class("Monad")

    def test_ident_and_value(self) -> None:
        catalog = load_default_catalog()
        expr = apply(catalog.ident("max"), catalog.value("Int", "1"), catalog.value("Int", "2"))
        result = check(expr)
        assert result.success
        assert result.type == TypeCon("Int")

    def test_constraint_from_catalog_rejects(self) -> None:
        catalog = load_default_catalog()
        expr = apply(catalog.ident("(+)"), catalog.value("Bool", "True"))
        result = check(expr)
        assert not result.success
        assert "∉ constraints of (Num)" in result.error.message


class TestSetup:
    """Tests for settings-driven loading."""

    def test_from_settings_default(self) -> None:
        catalog = Catalog.from_settings(Settings())
        assert "map" in catalog

    def test_setup_with_custom_catalog(self, tmp_path: Path) -> None:
        write(tmp_path / "small.yaml", SMALL_CATALOG)
        settings = write(tmp_path / "viskell.yaml", "catalog: small.yaml\nlog_level: warning\n")
        catalog = setup(settings)
        assert "max" in catalog
        assert "map" not in catalog

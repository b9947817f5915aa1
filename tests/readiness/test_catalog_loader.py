import copy

import pytest
from pydantic import ValidationError

from services.readiness_engine.loader import (
    CatalogValidationError,
    load_catalog_data,
    load_catalog_from_file,
)

MINIMAL = {
    "version": "1.0.0",
    "released_at": "2025-01-15",
    "categories": [
        {"id": 1, "name": "One", "themes": [{"title": "T", "left": "L", "right": "R"}]},
        {"id": 2, "name": "Two", "themes": [{"title": "T", "left": "L", "right": "R"}]},
    ],
}


def test_bundled_catalog_loads():
    catalog = load_catalog_from_file()
    assert catalog.version == "1.0.0"
    assert len(catalog.categories) == 10
    assert catalog.categories[0].name == "Strategic Vision & Value"
    assert all(len(category.themes) == 3 for category in catalog.categories)


def test_get_category_by_name():
    catalog = load_catalog_data(MINIMAL)
    assert catalog.get_category("Two").id == 2
    assert catalog.get_category("Three") is None


def test_duplicate_category_id_rejected():
    data = copy.deepcopy(MINIMAL)
    data["categories"][1]["id"] = 1
    with pytest.raises(CatalogValidationError, match="Duplicate category ID"):
        load_catalog_data(data)


def test_duplicate_category_name_rejected():
    data = copy.deepcopy(MINIMAL)
    data["categories"][1]["name"] = "One"
    with pytest.raises(CatalogValidationError, match="Duplicate category name"):
        load_catalog_data(data)


def test_duplicate_theme_title_rejected():
    data = copy.deepcopy(MINIMAL)
    data["categories"][0]["themes"].append({"title": "T", "left": "x", "right": "y"})
    with pytest.raises(CatalogValidationError, match="Duplicate theme title"):
        load_catalog_data(data)


def test_category_without_themes_rejected():
    data = copy.deepcopy(MINIMAL)
    data["categories"][0]["themes"] = []
    with pytest.raises(ValidationError):
        load_catalog_data(data)


def test_missing_file(tmp_path):
    with pytest.raises(CatalogValidationError, match="File not found"):
        load_catalog_from_file(tmp_path / "missing.yml")


def test_empty_file(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    with pytest.raises(CatalogValidationError, match="empty"):
        load_catalog_from_file(path)


def test_malformed_yaml(tmp_path):
    path = tmp_path / "broken.yml"
    path.write_text("categories: [unclosed", encoding="utf-8")
    with pytest.raises(CatalogValidationError, match="Error parsing YAML"):
        load_catalog_from_file(path)

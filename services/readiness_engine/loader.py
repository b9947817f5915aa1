import yaml
from pathlib import Path
from pydantic import ValidationError
from typing import Dict, Any, Union

from services.readiness_engine.models import ReadinessCatalog

# assets/ lives at the project root, two levels above this package
DEFAULT_CATALOG_PATH = Path(__file__).resolve().parents[2] / "assets" / "readiness_catalog.yml"


class CatalogValidationError(ValueError):
    """Custom exception for catalog validation errors not covered by Pydantic."""
    pass


def load_catalog_data(data: Dict[str, Any]) -> ReadinessCatalog:
    """
    Validates the raw dictionary data against the ReadinessCatalog model
    and performs additional custom validations.
    """
    try:
        catalog = ReadinessCatalog.model_validate(data)
    except ValidationError as e:
        # Re-raise Pydantic's validation error for schema issues
        raise e

    category_ids = set()
    category_names = set()
    for category in catalog.categories:
        if category.id in category_ids:
            raise CatalogValidationError(f"Duplicate category ID found: {category.id}")
        category_ids.add(category.id)

        # Raw answers are keyed by category name, so names must be unique too
        if category.name in category_names:
            raise CatalogValidationError(f"Duplicate category name found: '{category.name}'")
        category_names.add(category.name)

        theme_titles = set()
        for theme in category.themes:
            if theme.title in theme_titles:
                raise CatalogValidationError(
                    f"Duplicate theme title '{theme.title}' in category '{category.name}'"
                )
            theme_titles.add(theme.title)

    return catalog


def load_catalog_from_file(file_path: Union[str, Path] = DEFAULT_CATALOG_PATH) -> ReadinessCatalog:
    """
    Loads the question catalog from a YAML file, validates it,
    and returns a ReadinessCatalog object.
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise CatalogValidationError(f"File not found: {file_path}")
    except yaml.YAMLError as e:
        raise CatalogValidationError(f"Error parsing YAML file {file_path}: {e}")

    if data is None:
        raise CatalogValidationError(f"YAML file is empty or invalid: {file_path}")

    return load_catalog_data(data)

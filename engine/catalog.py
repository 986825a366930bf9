"""Loading of the maintenance task catalog from YAML."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml
from jsonschema import ValidationError, validate

from .calculations import DAYS_PER_MONTH
from .category import Category
from .errors import CatalogError
from .task import MaintenanceTaskDefinition

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_CATALOG_PATH = DATA_DIR / "catalog.yaml"
CATALOG_SCHEMA_PATH = DATA_DIR / "catalog_schema.yaml"

Catalog = Tuple[MaintenanceTaskDefinition, ...]


def load_schema(path: Union[str, Path]) -> dict:
    """Load a JSON schema stored as YAML."""
    with open(path) as fp:
        return yaml.safe_load(fp)


def _parse_task(dct: Dict[str, Any]) -> MaintenanceTaskDefinition:
    """Build a task definition from its camelCase YAML entry."""
    interval_days = dct.get("intervalDays")
    if interval_days is None and dct.get("intervalMonths") is not None:
        interval_days = int(round(dct["intervalMonths"] * DAYS_PER_MONTH))
    return MaintenanceTaskDefinition(
        id=dct["id"],
        display_title=dct["title"],
        category=Category(dct["category"]),
        distance_interval_km=dct.get("intervalKm"),
        time_interval_days=interval_days,
        template_id=dct.get("templateId"),
        icon=dct.get("icon"),
        declared_due_field=dct.get("declaredDueField"),
    )


def parse_catalog(data: Any) -> Catalog:
    """Validate raw catalog data and convert it to task definitions."""
    try:
        validate(instance=data, schema=load_schema(CATALOG_SCHEMA_PATH))
    except ValidationError as e:
        where = ".".join(str(p) for p in e.path)
        raise CatalogError(f"Invalid catalog at '{where}': {e.message}") from e

    tasks = tuple(_parse_task(dct) for dct in data["tasks"])

    for attr in ("id", "template_id"):
        seen = set()
        for task in tasks:
            value = getattr(task, attr)
            if value in seen:
                raise CatalogError(f"Duplicate task {attr} '{value}' in catalog")
            seen.add(value)
    return tasks


def load_catalog(filename: Optional[Union[str, Path]] = None) -> Catalog:
    """Load a catalog YAML file (the bundled one by default)."""
    path = Path(filename) if filename is not None else DEFAULT_CATALOG_PATH
    with open(path, "rb") as fp:
        data = yaml.load(fp, Loader=yaml.SafeLoader)
    tasks = parse_catalog(data)
    logger.debug("Loaded %d maintenance tasks from %s", len(tasks), path)
    return tasks


@lru_cache(maxsize=None)
def default_catalog() -> Catalog:
    """The bundled catalog, loaded once per process."""
    return load_catalog()

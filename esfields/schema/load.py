"""
Loading the dashboard schema family from json schema sources.

Sources are read from three roots, overlaid in order:
- the base schemas shipped with esfields
- schemas distributed with plugins
- the schemas of this instance
Each root contains a directory per schema package. A file in a later root replaces the file with the
same name in an earlier root. The document declaring the family (under FAMILY_KEY) is then built
into a SchemaFamily by the builder given to the SchemaLoader.
"""

import json
import logging
from pathlib import Path
from typing import Annotated, Any, Callable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

FAMILY_KEY = "dashboardFamily"
DEFAULT_PACKAGE = "dashboardschema"
BASE_SCHEMA_ROOT = Path(__file__).parent


class SchemaLoadError(Exception):
    pass


class BaseLoadPaths(BaseModel):
    base_schema_root: Path
    dist_plugin_schema_root: Path
    instance_schema_root: Path
    package_name: str = DEFAULT_PACKAGE


class VersionedSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    major: Annotated[int, Field(ge=0)]
    minor: Annotated[int, Field(ge=0)]
    definition: Annotated[dict[str, Any], Field(alias="schema")]

    @property
    def version(self) -> tuple[int, int]:
        return (self.major, self.minor)


class SchemaFamily(BaseModel):
    name: str
    lineage: Annotated[list[VersionedSchema], Field(min_length=1)]

    def latest(self) -> VersionedSchema:
        return max(self.lineage, key=lambda s: s.version)


FamilyBuilder = Callable[[str, dict[str, Any]], SchemaFamily]


def build_dashboard_family(name: str, value: dict[str, Any]) -> SchemaFamily:
    try:
        family = SchemaFamily.model_validate({"name": name, **value})
    except ValidationError as e:
        raise SchemaLoadError(f"{name} found but building the schema family failed: {e}") from e
    versions = [s.version for s in family.lineage]
    if len(set(versions)) != len(versions):
        raise SchemaLoadError(f"{name} found but its lineage contains duplicate versions: {versions}")
    return family


def default_load_paths(dist_plugin_schema_root: Path, instance_schema_root: Path) -> BaseLoadPaths:
    return BaseLoadPaths(
        base_schema_root=BASE_SCHEMA_ROOT,
        dist_plugin_schema_root=dist_plugin_schema_root,
        instance_schema_root=instance_schema_root,
    )


class SchemaLoader:
    def __init__(self, build_family: FamilyBuilder = build_dashboard_family):
        self.build_family = build_family

    def load_base_schema(self, paths: BaseLoadPaths) -> SchemaFamily:
        """
        Load the base dashboard schema family

        Raises:
            SchemaLoadError: If the sources cannot be read, do not declare the family, or the family cannot be built
        """
        documents = _read_sources(paths)
        value = _find_declaration(documents, FAMILY_KEY)
        if value is None:
            raise SchemaLoadError(f"{FAMILY_KEY} not found in schema package {paths.package_name!r}")
        try:
            return self.build_family(FAMILY_KEY, value)
        except SchemaLoadError:
            raise
        except Exception as e:
            raise SchemaLoadError(str(e)) from e


def _read_sources(paths: BaseLoadPaths) -> dict[str, Any]:
    base_package = paths.base_schema_root / paths.package_name
    if not base_package.is_dir():
        raise SchemaLoadError(f"Schema package {paths.package_name!r} not found in {paths.base_schema_root}")

    files: dict[str, Path] = {}
    for root in (paths.base_schema_root, paths.dist_plugin_schema_root, paths.instance_schema_root):
        package_dir = root / paths.package_name
        if not package_dir.is_dir():
            continue
        for file in sorted(package_dir.glob("*.json")):
            if file.name in files:
                logging.debug(f"Schema source {file} overrides {files[file.name]}")
            files[file.name] = file

    documents = {}
    for name, file in sorted(files.items()):
        try:
            documents[name] = json.loads(file.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise SchemaLoadError(f"Cannot read schema source {file}: {e}") from e
    return documents


def _find_declaration(documents: dict[str, Any], key: str) -> dict[str, Any] | None:
    result = None
    for name, document in documents.items():
        if isinstance(document, dict) and key in document:
            if result is not None:
                logging.warning(f"{key} is declared more than once, using the declaration in {name}")
            if not isinstance(document[key], dict):
                raise SchemaLoadError(f"{key} in {name} should be an object")
            result = document[key]
    return result

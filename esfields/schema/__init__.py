from esfields.schema.load import (
    BaseLoadPaths,
    SchemaFamily,
    SchemaLoader,
    SchemaLoadError,
    VersionedSchema,
    build_dashboard_family,
    default_load_paths,
)

__all__ = [
    "BaseLoadPaths",
    "SchemaFamily",
    "SchemaLoader",
    "SchemaLoadError",
    "VersionedSchema",
    "build_dashboard_family",
    "default_load_paths",
]

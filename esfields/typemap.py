"""
Mapping from concrete elastic field types to the type aliases clients can filter on.
See https://www.elastic.co/guide/en/elasticsearch/reference/current/mapping-types.html
"""

from esfields.models import TypeAlias

# Many to one: a concrete type maps to (at most) one alias.
# Types not listed here have no alias, and are only returned if no filter is given.
TYPE_ALIASES: dict[str, TypeAlias] = {
    # NUMBER fields
    "float": "number",
    "double": "number",
    "integer": "number",
    "long": "number",
    "scaled_float": "number",
    # DATE fields
    "date": "date",
    "date_nanos": "date",
    # STRING fields
    "string": "string",
    "text": "string",
    # NESTED fields
    "nested": "nested",
}

# Identity metadata fields, see
# https://www.elastic.co/guide/en/elasticsearch/reference/current/mapping-fields.html#_identity_metadata_fields
# Custom fields can also start with an underscore, so we cannot simply skip everything starting with one.
METADATA_FIELDS = frozenset(
    [
        "_index",
        "_type",
        "_id",
        "_source",
        "_size",
        "_field_names",
        "_ignored",
        "_routing",
        "_meta",
    ]
)


def is_metadata_field(field_name: str) -> bool:
    return field_name in METADATA_FIELDS


def get_type_alias(field_type: str) -> TypeAlias | None:
    return TYPE_ALIASES.get(field_type)


def field_type_matches_alias(field_type: str, type_alias: str | None) -> bool:
    """
    Does the elastic field_type fall under the given alias?
    e.g. a "string" alias matches fields of type "text" and "string".
    An empty or missing alias matches every type.
    """
    if not type_alias:
        return True
    return get_type_alias(field_type) == type_alias

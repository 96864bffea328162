"""
Decoding and flattening of elastic index mappings.

A mapping (as returned by GET /<index>/_mapping) is a tree of field definitions:

    {"properties": {"host": {"type": "text"},
                    "metrics": {"properties": {"cpu": {"type": "float"}}}}}

The raw json is decoded once into MappingNode objects, so any unexpected shape fails loudly in
a single place. The decoded tree is then flattened into {"host": "text", "metrics.cpu": "float"}.

Elastic guarantees the structure of this document, so a malformed mapping is a bug (ours or
elastic's) and raises MalformedMappingError rather than being partially recovered.
"""

from typing import Any, Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError, field_validator

from esfields.typemap import is_metadata_field

# Elastic < 7 nests mappings under a document type name. _default_ is a template for new types.
DEFAULT_DOC_TYPE = "_default_"


class MalformedMappingError(Exception):
    """The mapping document does not have the structure that elastic guarantees"""


class MappingNode(BaseModel):
    """
    A field definition. Leaf fields only have a type, object fields only have properties,
    and some (e.g. nested fields) have both. Other mapping parameters are ignored.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    type: Optional[StrictStr] = None
    properties: Optional[dict[str, "MappingNode"]] = None

    @field_validator("properties", mode="before")
    @classmethod
    def skip_metadata_fields(cls, value: Any) -> Any:
        # metadata fields can contain anything (e.g. _meta), so don't try to decode them
        if isinstance(value, Mapping):
            return {k: v for (k, v) in value.items() if not is_metadata_field(k)}
        return value


def parse_mapping(raw: Any) -> MappingNode:
    """
    Decode the mappings document of a single index (or document type) into a MappingNode tree.
    An empty document (an index without any fields) decodes to a node without fields.
    """
    if not isinstance(raw, Mapping):
        raise MalformedMappingError(f"Expected the mapping to be an object, got {type(raw).__name__}")
    if len(raw) == 0:
        return MappingNode(properties={})
    try:
        node = MappingNode.model_validate(raw)
    except ValidationError as e:
        raise MalformedMappingError(f"Invalid mapping document: {e}") from e
    if node.properties is None:
        raise MalformedMappingError(f"Mapping document has no properties (keys: {sorted(raw.keys())})")
    return node


def extract_fields(node: MappingNode, path: Sequence[str] = ()) -> dict[str, str]:
    """
    Flatten the (decoded) mapping into a dict of {dotted.field.name: elastic type}, skipping
    metadata fields at any depth.

    :param node: A node with properties, i.e. the root of a mapping or an object field
    :param path: The names of the ancestor fields of node
    """
    if node.properties is None:
        raise MalformedMappingError(f"Field {'.'.join(path) or '(root)'} has no properties")
    fields: dict[str, str] = {}
    for name, child in node.properties.items():
        if is_metadata_field(name):
            continue
        child_path = [*path, name]
        if child.type is not None:
            fields[".".join(child_path)] = child.type
        if child.properties is not None:
            # If the same name is reachable twice the document is malformed; last one wins
            fields.update(extract_fields(child, child_path))
    return fields


def extract_index_fields(index_mapping: Any, es_version: int = 70) -> dict[str, str]:
    """
    Extract the fields from the entry for one index in a get mapping response, i.e. {"mappings": {...}}

    :param es_version: major*10+minor elastic version, before 70 mappings are keyed by document type
    """
    if not isinstance(index_mapping, Mapping) or "mappings" not in index_mapping:
        raise MalformedMappingError("Index entry in mapping response has no mappings")
    mappings = index_mapping["mappings"]
    if es_version >= 70:
        return extract_fields(parse_mapping(mappings))

    if not isinstance(mappings, Mapping):
        raise MalformedMappingError(f"Expected the mappings to be an object, got {type(mappings).__name__}")
    fields: dict[str, str] = {}
    for doc_type, type_mapping in mappings.items():
        if doc_type == DEFAULT_DOC_TYPE:
            continue
        fields.update(extract_fields(parse_mapping(type_mapping)))
    return fields

"""
The fields query: list the fields of an index, optionally restricted to a type alias.

Here we transform a raw elastic `/_mapping` response to a table to return to the client.
The table has the following structure:

|-----------|-----------|
| name      | type      |
|-----------|-----------|
| fieldName | fieldType |
|-----------|-----------|
"""

import logging
from typing import Any

from esfields.client import MappingFetcher
from esfields.config import get_settings
from esfields.mapping import extract_index_fields
from esfields.models import FieldsQuery, IndexMappingResponse, QueryResponse, QueryResult, Table, TableColumn
from esfields.typemap import field_type_matches_alias

UNKNOWN_ERROR = "Unknown elasticsearch error response"


class FieldsQueryExecutor:
    """Runs fields queries against the mappings provided by the given fetcher"""

    def __init__(self, client: MappingFetcher, es_version: int | None = None):
        self.client = client
        self.es_version = get_settings().elastic_version if es_version is None else es_version

    async def execute(self, query: FieldsQuery) -> QueryResponse:
        logging.info("executing fields query")
        index_mapping = await self.client.get_index_mapping()
        return transform(index_mapping, query.model.field_type_filter, query.ref_id, es_version=self.es_version)


def transform(
    index_mapping: IndexMappingResponse, field_type_filter: str | None, ref_id: str, es_version: int = 70
) -> QueryResponse:
    """
    Create the result table for a fields query from the mapping response.
    If the response is an error, the result for ref_id contains that error instead of a table.
    """
    if index_mapping.error is not None:
        return QueryResponse(results={ref_id: get_error_from_elastic_response(index_mapping.error, ref_id)})

    # If multiple indices are queried, the fields of the last index are used
    extracted_fields: dict[str, str] = {}
    for i, (index_name, index) in enumerate(index_mapping.mappings.items()):
        if i > 0:
            logging.debug(f"Fields query matched multiple indices, replacing fields with those of {index_name!r}")
        extracted_fields = extract_index_fields(index, es_version)

    table = Table(columns=[TableColumn(text="name"), TableColumn(text="type")])
    for field_name in sorted(extracted_fields):
        field_type = extracted_fields[field_name]
        if field_type_matches_alias(field_type, field_type_filter):
            table.rows.append((field_name, field_type))

    return QueryResponse(results={ref_id: QueryResult(ref_id=ref_id, tables=[table])})


def get_error_from_elastic_response(error: Any, ref_id: str) -> QueryResult:
    """
    Create an error result from the elastic error payload, which is either a message or an error object like
    {"root_cause": [{"type": ..., "reason": ...}], "type": "index_not_found_exception", "reason": ...}
    """
    message = None
    if isinstance(error, str):
        message = error
    elif isinstance(error, dict):
        root_causes = error.get("root_cause")
        root_cause = root_causes[0] if isinstance(root_causes, list) and root_causes else None
        root_reason = root_cause.get("reason") if isinstance(root_cause, dict) else None
        candidates = [root_reason, error.get("reason"), error.get("type")]
        # the payload is not guaranteed to be shaped like an elastic error, only use string messages
        message = next((c for c in candidates if isinstance(c, str) and c), None)
    return QueryResult(ref_id=ref_id, error=message or UNKNOWN_ERROR, error_details=error)

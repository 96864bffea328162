"""API Endpoints for listing index fields."""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from esfields.client import ElasticMappingClient, MappingFetcher
from esfields.connections import es
from esfields.fields_query import FieldsQueryExecutor
from esfields.models import FieldRow, FieldsQuery, FieldsQueryModel, IndexId, QueryResponse, TypeAlias

app_fields = APIRouter(prefix="/index", tags=["fields"])


def get_mapping_fetcher(ix: IndexId) -> MappingFetcher:
    """Dependency providing the fetcher for the mapping of index ix"""
    return ElasticMappingClient(es(), ix)


@app_fields.post("/{ix}/fields/query", response_model=QueryResponse)
async def fields_query(
    query: Annotated[
        FieldsQuery,
        Body(
            description="The query, the result is returned under its refId",
            examples=[{"refId": "A", "model": {"fieldTypeFilter": "number"}}],
        ),
    ],
    fetcher: MappingFetcher = Depends(get_mapping_fetcher),
):
    """
    Run a fields query on an index (or index pattern). Returns a table of field names and types,
    or an error result if elastic returned an error.
    """
    return await FieldsQueryExecutor(fetcher).execute(query)


@app_fields.get("/{ix}/fields")
async def list_fields(
    type: Annotated[TypeAlias | None, Query(description="Only list fields of this type")] = None,
    fetcher: MappingFetcher = Depends(get_mapping_fetcher),
) -> list[FieldRow]:
    """
    List the fields of an index (or index pattern), sorted by name.
    """
    query = FieldsQuery(ref_id="fields", model=FieldsQueryModel(field_type_filter=type))
    result = (await FieldsQueryExecutor(fetcher).execute(query)).results[query.ref_id]
    if result.error is not None:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=result.error)
    return [FieldRow(name=name, type=field_type) for (name, field_type) in result.tables[0].rows]

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

IndexId = Annotated[str, Field(pattern=r"^[a-z0-9*][a-z0-9_.*,-]*$", title="Index name, pattern or comma-separated names")]

TypeAlias = Literal["number", "string", "date", "nested"]


######################## FIELDS QUERY #########################


class FieldsQueryModel(BaseModel):
    """The query model as sent by the client. Only the type filter is relevant for a fields query."""

    model_config = ConfigDict(populate_by_name=True)

    field_type_filter: Annotated[
        TypeAlias | Literal[""] | None,
        Field(alias="fieldTypeFilter", description="Only return fields whose type falls under this alias"),
    ] = None


class FieldsQuery(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ref_id: Annotated[str, Field(alias="refId", description="Correlation id, the result is returned under this key")]
    model: FieldsQueryModel = FieldsQueryModel()


######################## RESULTS #########################


class TableColumn(BaseModel):
    text: str


class Table(BaseModel):
    columns: list[TableColumn] = []
    rows: list[tuple[str, str]] = []


class QueryResult(BaseModel):
    """
    The result for a single query. Either tables or error is filled, never both.
    error is a human readable message, error_details the payload as returned by elastic.
    """

    model_config = ConfigDict(populate_by_name=True)

    ref_id: Annotated[str, Field(alias="refId")]
    tables: list[Table] = []
    error: str | None = None
    error_details: Annotated[Any, Field(alias="errorDetails")] = None


class QueryResponse(BaseModel):
    results: dict[str, QueryResult] = {}


class FieldRow(BaseModel):
    name: str
    type: str


######################## MAPPING FETCH #########################


class IndexMappingResponse(BaseModel):
    """
    Raw response of the get mapping call: either {index: {"mappings": {...}}} or an error payload
    """

    mappings: dict[str, Any] = {}
    error: Any = None

"""
Retrieving index mappings from elastic.

Anything that can produce an IndexMappingResponse can act as a MappingFetcher, which makes it easy
to run a fields query against a canned mapping (e.g. in tests).
"""

import logging
from typing import Any, Protocol

from elasticsearch import ApiError, AsyncElasticsearch

from esfields.models import IndexMappingResponse


class MappingFetcher(Protocol):
    async def get_index_mapping(self) -> IndexMappingResponse: ...


class ElasticMappingClient:
    """Fetch the mapping of one or more indices (comma separated or a wildcard pattern)"""

    def __init__(self, elastic: AsyncElasticsearch, index: str):
        self.elastic = elastic
        self.index = index

    async def get_index_mapping(self) -> IndexMappingResponse:
        try:
            r = await self.elastic.indices.get_mapping(index=self.index)
        except ApiError as e:
            logging.warning(f"Could not get mapping for {self.index!r}: {e}")
            return IndexMappingResponse(error=_error_payload(e))
        return IndexMappingResponse(mappings=r.body)


def _error_payload(e: ApiError) -> Any:
    """Return the error object from the elastic response body, or the error message if there is none"""
    body = e.body
    if isinstance(body, dict) and body.get("error"):
        return body["error"]
    return e.message

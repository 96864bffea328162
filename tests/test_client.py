import pytest
from elastic_transport import ApiResponseMeta, HttpHeaders, NodeConfig, ObjectApiResponse
from elasticsearch import AuthorizationException, NotFoundError

from esfields.client import ElasticMappingClient
from tests.tools import EXAMPLE_MAPPING


class StubIndices:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.requested: list[str] = []

    async def get_mapping(self, index: str):
        self.requested.append(index)
        if self.error is not None:
            raise self.error
        return self.result


class StubElastic:
    def __init__(self, indices: StubIndices):
        self.indices = indices


def meta(status: int) -> ApiResponseMeta:
    return ApiResponseMeta(
        status=status,
        http_version="1.1",
        headers=HttpHeaders(),
        duration=0.0,
        node=NodeConfig("http", "localhost", 9200),
    )


@pytest.mark.anyio
async def test_get_index_mapping():
    indices = StubIndices(result=ObjectApiResponse(body={"logs": {"mappings": EXAMPLE_MAPPING}}, meta=meta(200)))
    client = ElasticMappingClient(StubElastic(indices), "logs*")  # type: ignore
    response = await client.get_index_mapping()
    assert indices.requested == ["logs*"]
    assert response.error is None
    assert response.mappings == {"logs": {"mappings": EXAMPLE_MAPPING}}


@pytest.mark.anyio
async def test_get_index_mapping_error():
    error = {
        "root_cause": [{"type": "index_not_found_exception", "reason": "no such index [nope]"}],
        "type": "index_not_found_exception",
        "reason": "no such index [nope]",
    }
    body = {"error": error, "status": 404}
    indices = StubIndices(error=NotFoundError("index_not_found_exception", meta(404), body))
    response = await ElasticMappingClient(StubElastic(indices), "nope").get_index_mapping()  # type: ignore
    assert response.mappings == {}
    assert response.error == error


@pytest.mark.anyio
async def test_get_index_mapping_error_without_body():
    indices = StubIndices(error=AuthorizationException("security_exception", meta(403), ""))
    response = await ElasticMappingClient(StubElastic(indices), "secret").get_index_mapping()  # type: ignore
    assert response.error == "security_exception"


@pytest.mark.anyio
async def test_get_index_mapping_connection_error():
    indices = StubIndices(error=ConnectionError("refused"))
    with pytest.raises(ConnectionError):
        await ElasticMappingClient(StubElastic(indices), "logs").get_index_mapping()  # type: ignore

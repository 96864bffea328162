import pytest
from httpx import ASGITransport, AsyncClient

from esfields import api
from esfields.api.fields import get_mapping_fetcher
from tests.tools import EXAMPLE_MAPPING, FakeMappingFetcher, mapping_response


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def fetcher():
    return FakeMappingFetcher(mapping_response(logs=EXAMPLE_MAPPING))


@pytest.fixture()
def use_fetcher():
    """Make the API use the given fetcher instead of connecting to elastic"""

    def _use_fetcher(fetcher):
        api.app.dependency_overrides[get_mapping_fetcher] = lambda: fetcher

    yield _use_fetcher
    api.app.dependency_overrides.clear()


@pytest.fixture()
async def client(fetcher, use_fetcher):
    # Note: ASGITransport does not run the lifespan, so no elastic connection is made
    use_fetcher(fetcher)
    async with AsyncClient(transport=ASGITransport(app=api.app), base_url="http://test") as client:
        yield client

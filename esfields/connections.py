import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from elasticsearch import AsyncElasticsearch

from esfields.config import get_settings


class ElasticConnection:
    elastic: AsyncElasticsearch | None

    def __init__(self, elastic: AsyncElasticsearch | None = None):
        self.elastic = elastic


CONNECTION = ElasticConnection()


@asynccontextmanager
async def elastic_connection() -> AsyncGenerator[None, None]:
    """
    The context manager to open and close the elasticsearch connection.
    Use it once around the lifetime of whatever needs es():
        - For running the server: in the FastAPI lifespan
        - For CLI commands: within the CLI command
    """
    try:
        await start_elastic()
        yield
    finally:
        await close_elastic()


def es() -> AsyncElasticsearch:
    """
    Use this function to access the elasticsearch connection.
    """
    if CONNECTION.elastic is None:
        raise ConnectionError("Elasticsearch connection not initialized")
    return CONNECTION.elastic


def connect_elastic() -> AsyncElasticsearch:
    """
    Connect to the elastic server using the system settings
    """
    settings = get_settings()
    if settings.elastic_password:
        return AsyncElasticsearch(
            settings.elastic_host,
            basic_auth=("elastic", settings.elastic_password),
            verify_certs=bool(settings.elastic_verify_ssl),
        )
    else:
        return AsyncElasticsearch(settings.elastic_host or None)


async def start_elastic():
    """
    Check whether we can connect with elastic
    """
    settings = get_settings()
    logging.debug(
        f"Connecting with elasticsearch at {settings.elastic_host}, password? {'yes' if settings.elastic_password else 'no'} "
    )
    CONNECTION.elastic = connect_elastic()
    if not await CONNECTION.elastic.ping():
        raise ConnectionError(f"Cannot connect to elasticsearch server {settings.elastic_host}")


async def close_elastic() -> None:
    if CONNECTION.elastic is not None:
        await CONNECTION.elastic.close()
        CONNECTION.elastic = None

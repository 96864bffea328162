"""
esfields: list the fields of elasticsearch indices
"""

import argparse
import asyncio
import inspect
import logging
import sys
from pathlib import Path
from typing import get_args

import uvicorn
from uvicorn.config import LOGGING_CONFIG

from esfields.client import ElasticMappingClient, MappingFetcher
from esfields.config import ENV_PREFIX, get_settings
from esfields.connections import elastic_connection, es
from esfields.fields_query import FieldsQueryExecutor
from esfields.models import FieldsQuery, FieldsQueryModel, TypeAlias
from esfields.schema import SchemaLoader, SchemaLoadError, default_load_paths


async def _check_elastic_connection():
    async with elastic_connection():
        logging.info(f"Connected to elasticsearch {get_settings().elastic_host}")


def run(args):
    logging.info(f"Starting server at port {args.port}, debug={not args.nodebug}")
    logging.info(
        "To change server config, create an .env file and/or set environment parameters,\n"
        f"{' ' * 26}see esfields/config.py for more information.\n"
        f"{' ' * 26}You can run `python -m esfields config` to show the current settings\n"
    )

    asyncio.run(_check_elastic_connection())
    log_config = "logging.yml" if Path("logging.yml").exists() else LOGGING_CONFIG
    uvicorn.run("esfields.api:app", host="0.0.0.0", reload=not args.nodebug, port=int(args.port), log_config=log_config)


async def list_fields(args):
    index = args.index or get_settings().index
    async with elastic_connection():
        await print_fields(ElasticMappingClient(es(), index), args.type, args.ref_id)


async def print_fields(fetcher: MappingFetcher, field_type_filter: str | None, ref_id: str):
    """Run a fields query and print the resulting table as tab separated lines"""
    query = FieldsQuery(ref_id=ref_id, model=FieldsQueryModel(field_type_filter=field_type_filter))
    response = await FieldsQueryExecutor(fetcher).execute(query)

    result = response.results[query.ref_id]
    if result.error is not None:
        logging.error(f"Cannot list fields: {result.error}")
        sys.exit(1)
    table = result.tables[0]
    print("\t".join(column.text for column in table.columns))
    for name, field_type in table.rows:
        print(f"{name}\t{field_type}")


def check_schema(args):
    paths = default_load_paths(Path(args.plugin_root), Path(args.instance_root))
    try:
        family = SchemaLoader().load_base_schema(paths)
    except SchemaLoadError as e:
        logging.error(f"Cannot load base schema: {e}")
        sys.exit(1)
    latest = family.latest()
    print(f"{family.name}: {len(family.lineage)} schema version(s), latest {latest.major}.{latest.minor}")


def show_config(_args):
    settings = get_settings()
    for fieldname, fieldinfo in type(settings).model_fields.items():
        if doc := fieldinfo.description:
            print(f"# {doc}")
        value = getattr(settings, fieldname)
        if value is None:
            print(f"#{ENV_PREFIX}{fieldname}=\n")
        else:
            print(f"{ENV_PREFIX}{fieldname}={value}\n")


def main():
    parser = argparse.ArgumentParser(description=__doc__, prog="python -m esfields")

    subparsers = parser.add_subparsers(dest="action", title="action", help="Action to perform:", required=True)
    p = subparsers.add_parser("run", help="Run the backend API in development mode")
    p.add_argument(
        "--no-debug",
        action="store_true",
        dest="nodebug",
        help="Disable debug mode (useful for testing downstream clients)",
    )
    p.add_argument("-p", "--port", help="Port", default=5000)
    p.set_defaults(func=run)

    p = subparsers.add_parser("fields", help="List the fields of an index")
    p.add_argument("index", nargs="?", help="Index or index pattern (default: the configured index)")
    p.add_argument("-t", "--type", choices=get_args(TypeAlias), help="Only list fields of this type")
    p.add_argument("--ref-id", default="A", help="Correlation id of the query")
    p.set_defaults(func=list_fields)

    p = subparsers.add_parser("config", help="Show the current settings as .env lines")
    p.set_defaults(func=show_config)

    p = subparsers.add_parser("check-schema", help="Check that the base dashboard schema can be loaded")
    p.add_argument("--plugin-root", default=".", help="Root directory of plugin schemas")
    p.add_argument("--instance-root", default=".", help="Root directory of instance schemas")
    p.set_defaults(func=check_schema)

    args = parser.parse_args()

    logging.basicConfig(format="[%(levelname)-7s:%(name)-15s] %(message)s", level=logging.INFO)
    es_logger = logging.getLogger("elasticsearch")
    es_logger.setLevel(logging.WARNING)

    if inspect.iscoroutinefunction(args.func):
        asyncio.run(args.func(args))
    else:
        args.func(args)


if __name__ == "__main__":
    main()

"""esfields API: list the fields of elasticsearch indices."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from esfields.api.fields import app_fields
from esfields.connections import elastic_connection
from esfields.mapping import MalformedMappingError


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.info("Connecting to elasticsearch...")
    async with elastic_connection():
        yield


app = FastAPI(
    title="esfields",
    description=__doc__ if __doc__ else "",
    openapi_tags=[
        dict(name="fields", description="Endpoints to list the fields of an index"),
    ],
    lifespan=lifespan,
)
app.include_router(app_fields)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1000)


@app.exception_handler(ValueError)
async def value_error_exception_handler(request: Request, exc: ValueError):
    return JSONResponse(
        status_code=400,
        content={"message": str(exc)},
    )


@app.exception_handler(MalformedMappingError)
async def malformed_mapping_exception_handler(request: Request, exc: MalformedMappingError):
    logging.error(f"Malformed mapping in {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"message": f"Elasticsearch returned a malformed mapping: {exc}"},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc) -> JSONResponse:
    return JSONResponse(
        status_code=422, content={"message": "There was an issue with the data you sent.", "fields_invalid": exc.errors()}
    )

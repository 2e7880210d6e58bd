"""
FastAPI REST API for tour records.

List, fetch, create, update and delete tours stored in MongoDB.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tour_api.adapters.mongodb import MongoTourStore
from tour_api.config import get_config
from tour_api.core.errors import StoreError, TourApiError, ValidationError
from tour_api.execution import ResultFormatter, TourService
from tour_api.query import QueryTranslator, parse_query_params, top_cheapest_directive

config = get_config()

logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("tour_api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = MongoTourStore.from_uri(
        mongo_uri=config.mongo_uri,
        database_name=config.mongo_database,
        collection_name=config.mongo_collection,
    )
    try:
        store.ensure_indexes()
        logger.info("Database connection successful")
    except StoreError as e:
        logger.warning("Database not ready at startup: %s", e.message)
    app.state.store = store
    yield
    store.close()


app = FastAPI(
    title="Tour API",
    description="Manage tours with filtering, sorting, field limiting and pagination",
    version="1.0.0",
    lifespan=lifespan,
)


@app.middleware("http")
async def stamp_request_time(request: Request, call_next):
    """Record when the request was received."""
    request.state.requested_at = datetime.now(timezone.utc)
    return await call_next(request)


@app.exception_handler(TourApiError)
async def handle_tour_api_error(request: Request, exc: TourApiError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=ResultFormatter.format_error(exc))


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception("%s %s failed", request.method, request.url.path)
    error = StoreError("Something went wrong")
    return JSONResponse(status_code=error.status_code, content=ResultFormatter.format_error(error))


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    messages = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()]
    error = ValidationError("Invalid request. " + "; ".join(messages))
    return JSONResponse(status_code=error.status_code, content=ResultFormatter.format_error(error))


def get_service(request: Request) -> TourService:
    return TourService(request.app.state.store)


def get_translator() -> QueryTranslator:
    return QueryTranslator(default_limit=config.default_page_size)


def requested_at(request: Request) -> datetime:
    return getattr(request.state, "requested_at", None) or datetime.now(timezone.utc)


router = APIRouter(prefix="/tours", tags=["tours"])


@router.get("/top-five-cheapest-tours")
def get_top_cheapest_tours(
    request: Request, service: TourService = Depends(get_service)
):
    """Five best-rated tours, cheapest first among equal ratings."""
    result = service.list_tours(top_cheapest_directive(), requested_at(request))
    return ResultFormatter.format_list(result)


@router.get("")
def get_all_tours(
    request: Request,
    service: TourService = Depends(get_service),
    translator: QueryTranslator = Depends(get_translator),
):
    """
    List tours.

    Supports ``field=value``, ``field[gt|gte|lt|lte]=value``,
    ``sort=field1,-field2``, ``fields=field1,field2``, ``page=N`` and ``limit=N``.
    """
    params = parse_query_params(request.query_params.multi_items())
    directive = translator.translate(params)
    result = service.list_tours(directive, requested_at(request))
    return ResultFormatter.format_list(result)


@router.get("/{tour_id}")
def get_tour(request: Request, tour_id: str, service: TourService = Depends(get_service)):
    tour = service.get_tour(tour_id)
    return ResultFormatter.format_record(tour, requested_at(request))


@router.post("", status_code=201)
def create_tour(
    body: Dict[str, Any] = Body(...), service: TourService = Depends(get_service)
):
    tour = service.create_tour(body)
    return ResultFormatter.format_record(tour)


@router.patch("/{tour_id}")
def update_tour(
    tour_id: str,
    body: Dict[str, Any] = Body(...),
    service: TourService = Depends(get_service),
):
    tour = service.update_tour(tour_id, body)
    return ResultFormatter.format_record(tour)


@router.delete("/{tour_id}", status_code=204)
def delete_tour(tour_id: str, service: TourService = Depends(get_service)):
    service.delete_tour(tour_id)
    return Response(status_code=204)


app.include_router(router, prefix=config.api_prefix)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.api_host, port=config.api_port)

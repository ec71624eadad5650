# catalog/main.py
import json
from contextlib import asynccontextmanager
from decimal import Decimal
from typing import Dict, List, Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError

from catalog.core import NotFound, Outcome, StoreFault
from catalog.database import ProductStore, connect, get_store, store_for
from catalog.models import Product, ProductIn
from catalog.utils import settings
from catalog.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCT_NOT_FOUND = "Product not found."

router = APIRouter(tags=["Product"])

# the body is parsed by product_body, so the schema is declared by hand
PRODUCT_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": ProductIn.model_json_schema()}},
    }
}


async def product_body(request: Request) -> ProductIn:
    """
    Reads a Product from the raw body with JSON numbers parsed as Decimal,
    so a price never passes through a binary float on the way in.
    """
    raw = await request.body()
    try:
        data = json.loads(raw, parse_float=Decimal)
    except ValueError as e:
        raise RequestValidationError([{
            "type": "json_invalid",
            "loc": ("body",),
            "msg": "JSON decode error",
            "input": {},
            "ctx": {"error": str(e)},
        }])
    try:
        return ProductIn.model_validate(data)
    except ValidationError as e:
        raise RequestValidationError(
            [{**err, "loc": ("body", *err["loc"])} for err in e.errors(include_url=False)]
        )


def _confirmation(outcome: Outcome, message: str, headers: Optional[Dict[str, str]] = None) -> Response:
    if isinstance(outcome, StoreFault):
        # no detail leaves the service, the store layer has logged it
        return Response(status_code=500)
    if isinstance(outcome, NotFound):
        return PlainTextResponse(PRODUCT_NOT_FOUND, status_code=404)
    return PlainTextResponse(message, headers=headers)


# ---------------------------
# Product endpoints
# ---------------------------
@router.get("/GetProducts", response_model=List[Product], operation_id="GetProducts")
async def get_products(store: ProductStore = Depends(get_store)):
    logger.info("Getting all products.")
    outcome = await store.list_products()
    if isinstance(outcome, StoreFault):
        return Response(status_code=500)
    return outcome.value


@router.post("/CreateProduct", response_class=PlainTextResponse, operation_id="CreateProduct",
             openapi_extra=PRODUCT_BODY)
async def create_product(payload: ProductIn = Depends(product_body), store: ProductStore = Depends(get_store)):
    logger.info("Creating a new product.")
    outcome = await store.create_product(payload)
    headers = None
    if not isinstance(outcome, StoreFault):
        # the body stays a plain confirmation, the new id travels in a header
        headers = {"X-Product-Id": outcome.value}
    return _confirmation(outcome, "Product created successfully.", headers)


@router.put("/UpdateProduct/{product_id}", response_class=PlainTextResponse, operation_id="UpdateProduct",
            openapi_extra=PRODUCT_BODY)
async def update_product(product_id: str, payload: ProductIn = Depends(product_body),
                         store: ProductStore = Depends(get_store)):
    logger.info(f"Updating product with id: {product_id}")
    if payload.id is not None and payload.id != product_id:
        logger.warning(f"Ignoring body id {payload.id}, keeping {product_id}")
    outcome = await store.replace_product(product_id, payload)
    return _confirmation(outcome, "Product updated successfully.")


@router.delete("/DeleteProduct/{product_id}", response_class=PlainTextResponse, operation_id="DeleteProduct")
async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
    logger.info(f"Deleting product with id: {product_id}")
    outcome = await store.delete_product(product_id)
    return _confirmation(outcome, "Product deleted successfully.")


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected request body on {request.url.path}")
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@asynccontextmanager
async def lifespan(app: FastAPI):
    # one client per process, shared by every request
    client = connect()
    app.state.store = store_for(client)
    try:
        yield
    finally:
        await client.close()


def create_app() -> FastAPI:
    app = FastAPI(title="Product Catalog Service", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Product-Id"],
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.include_router(router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)

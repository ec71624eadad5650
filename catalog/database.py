# catalog/database.py
from typing import Any, Optional

from bson import ObjectId
from fastapi import Request
from pymongo import AsyncMongoClient

from catalog.core import NotFound, Ok, Outcome, StoreFault
from catalog.models import ProductIn, from_document, to_document
from catalog.utils import settings
from catalog.utils.logging import get_logger

logger = get_logger(__name__)


def _object_id(product_id: str) -> Optional[ObjectId]:
    # anything that is not an ObjectId can never match an _id
    if not ObjectId.is_valid(product_id):
        return None
    return ObjectId(product_id)


class ProductStore:
    """
    Product access over a single collection. Every method returns an
    Outcome. Anything raised while talking to the driver or reading its
    documents back is logged here and comes back as StoreFault.
    """

    def __init__(self, collection: Any):
        self.collection = collection

    def _fault(self, operation: str, exc: Exception) -> StoreFault:
        logger.error(f"Error {operation}: {exc}")
        return StoreFault(operation=operation, error=exc)

    async def list_products(self) -> Outcome:
        try:
            docs = await self.collection.find({}).to_list(length=None)
            products = [from_document(d) for d in docs]
        except Exception as e:
            return self._fault("getting products", e)
        return Ok(products)

    async def create_product(self, payload: ProductIn) -> Outcome:
        product_id = ObjectId()
        try:
            await self.collection.insert_one(to_document(product_id, payload))
        except Exception as e:
            return self._fault("creating product", e)
        return Ok(str(product_id))

    async def replace_product(self, product_id: str, payload: ProductIn) -> Outcome:
        oid = _object_id(product_id)
        if oid is None:
            return NotFound(product_id)
        try:
            result = await self.collection.replace_one({"_id": oid}, to_document(oid, payload))
        except Exception as e:
            return self._fault("updating product", e)
        # an identical replacement modifies nothing and counts as not found
        if not result.acknowledged or result.modified_count == 0:
            return NotFound(product_id)
        return Ok(product_id)

    async def delete_product(self, product_id: str) -> Outcome:
        oid = _object_id(product_id)
        if oid is None:
            return NotFound(product_id)
        try:
            result = await self.collection.delete_one({"_id": oid})
        except Exception as e:
            return self._fault("deleting product", e)
        if result.deleted_count == 0:
            return NotFound(product_id)
        return Ok(product_id)


def connect() -> AsyncMongoClient:
    connection_string = settings.require_connection_string()
    logger.info(f"Connecting to MongoDB database '{settings.MONGO_DATABASE}'")
    return AsyncMongoClient(connection_string)


def store_for(client: Any) -> ProductStore:
    return ProductStore(client[settings.MONGO_DATABASE][settings.MONGO_COLLECTION])


def get_store(request: Request) -> ProductStore:
    return request.app.state.store

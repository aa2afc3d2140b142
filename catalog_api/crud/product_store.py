from abc import ABC, abstractmethod
import uuid
from typing import List, Optional

from azure.cosmos.exceptions import CosmosHttpResponseError
from azure.cosmos.aio import ContainerProxy

from catalog_api.models.product import Product, ProductBase
from catalog_api.exceptions import PersistenceError
from catalog_api.logging_config import get_child_logger, tracer

# Create a child logger for this module
logger = get_child_logger("crud.product")


class ProductStore(ABC):
    """
    Persistence capability the product service depends on.

    Absence is reported through the return value (None / False); every
    other failure is raised as PersistenceError.
    """

    @abstractmethod
    async def insert(self, product: ProductBase) -> Product:
        """Store a new product and return it with its assigned id."""

    @abstractmethod
    async def find_all(self) -> List[Product]:
        """Return every stored product, in store-defined order."""

    @abstractmethod
    async def find_by_id(self, product_id: str) -> Optional[Product]:
        """Return the product stored under product_id, or None."""

    @abstractmethod
    async def update_by_id(
        self, product_id: str, product: ProductBase
    ) -> Optional[Product]:
        """Replace every field of a stored product; None if it does not exist."""

    @abstractmethod
    async def delete_by_id(self, product_id: str) -> bool:
        """Remove a stored product; False if it does not exist."""


def _cosmos_error(e: CosmosHttpResponseError) -> PersistenceError:
    # Underlying store message is passed through unchanged
    return PersistenceError(e.message or str(e), original_exception=e)


class CosmosProductStore(ProductStore):
    """
    ProductStore backed by a Cosmos DB container partitioned on /id.
    """

    def __init__(self, container: ContainerProxy):
        self.container = container

    async def insert(self, product: ProductBase) -> Product:
        data = product.model_dump()
        data["id"] = str(uuid.uuid4())

        with tracer.start_as_current_span("store_insert_product") as span:
            span.set_attribute("product.id", data["id"])
            try:
                result = await self.container.create_item(body=data)
                logger.info(
                    "Product document created", extra={"product_id": data["id"]}
                )
                return Product.model_validate(result)
            except CosmosHttpResponseError as e:
                span.set_attribute("error", True)
                span.set_attribute("error.status_code", e.status_code)
                logger.error(
                    "Cosmos DB error during product creation",
                    extra={"status_code": e.status_code, "product_id": data["id"]},
                    exc_info=True,
                )
                raise _cosmos_error(e) from e
            except Exception as e:
                span.set_attribute("error", True)
                span.set_attribute("error.type", type(e).__name__)
                logger.error(f"Unexpected error during product creation: {e}", exc_info=True)
                raise PersistenceError(str(e), original_exception=e) from e

    async def find_all(self) -> List[Product]:
        with tracer.start_as_current_span("store_find_all_products") as span:
            try:
                items = [
                    Product.model_validate(item)
                    async for item in self.container.read_all_items()
                ]
                span.set_attribute("products.count", len(items))
                logger.info(f"Retrieved {len(items)} products", extra={"count": len(items)})
                return items
            except CosmosHttpResponseError as e:
                span.set_attribute("error", True)
                span.set_attribute("error.status_code", e.status_code)
                logger.error(
                    "Cosmos DB error during product listing",
                    extra={"status_code": e.status_code},
                    exc_info=True,
                )
                raise _cosmos_error(e) from e
            except Exception as e:
                span.set_attribute("error", True)
                span.set_attribute("error.type", type(e).__name__)
                logger.error(f"Unexpected error during product listing: {e}", exc_info=True)
                raise PersistenceError(str(e), original_exception=e) from e

    async def find_by_id(self, product_id: str) -> Optional[Product]:
        with tracer.start_as_current_span("store_find_product") as span:
            span.set_attribute("product.id", product_id)
            try:
                item = await self.container.read_item(
                    item=product_id, partition_key=product_id
                )
                return Product.model_validate(item)
            except CosmosHttpResponseError as e:
                if e.status_code == 404:
                    logger.debug("Product document not found", extra={"product_id": product_id})
                    return None
                span.set_attribute("error", True)
                span.set_attribute("error.status_code", e.status_code)
                logger.error(
                    "Cosmos DB error retrieving product",
                    extra={"product_id": product_id, "status_code": e.status_code},
                    exc_info=True,
                )
                raise _cosmos_error(e) from e
            except Exception as e:
                span.set_attribute("error", True)
                span.set_attribute("error.type", type(e).__name__)
                logger.error(f"Unexpected error retrieving product {product_id}: {e}", exc_info=True)
                raise PersistenceError(str(e), original_exception=e) from e

    async def update_by_id(
        self, product_id: str, product: ProductBase
    ) -> Optional[Product]:
        # Full replacement: the new body carries only the id and the seven fields
        body = product.model_dump()
        body["id"] = product_id

        with tracer.start_as_current_span("store_replace_product") as span:
            span.set_attribute("product.id", product_id)
            try:
                result = await self.container.replace_item(item=product_id, body=body)
                return Product.model_validate(result)
            except CosmosHttpResponseError as e:
                if e.status_code == 404:
                    return None
                span.set_attribute("error", True)
                span.set_attribute("error.status_code", e.status_code)
                logger.error(
                    "Cosmos DB error during product update",
                    extra={"product_id": product_id, "status_code": e.status_code},
                    exc_info=True,
                )
                raise _cosmos_error(e) from e
            except Exception as e:
                span.set_attribute("error", True)
                span.set_attribute("error.type", type(e).__name__)
                logger.error(f"Unexpected error during product update: {e}", exc_info=True)
                raise PersistenceError(str(e), original_exception=e) from e

    async def delete_by_id(self, product_id: str) -> bool:
        with tracer.start_as_current_span("store_delete_product") as span:
            span.set_attribute("product.id", product_id)
            try:
                await self.container.delete_item(item=product_id, partition_key=product_id)
                return True
            except CosmosHttpResponseError as e:
                if e.status_code == 404:
                    return False
                span.set_attribute("error", True)
                span.set_attribute("error.status_code", e.status_code)
                logger.error(
                    "Cosmos DB error during product deletion",
                    extra={"product_id": product_id, "status_code": e.status_code},
                    exc_info=True,
                )
                raise _cosmos_error(e) from e
            except Exception as e:
                span.set_attribute("error", True)
                span.set_attribute("error.type", type(e).__name__)
                logger.error(f"Unexpected error during product deletion: {e}", exc_info=True)
                raise PersistenceError(str(e), original_exception=e) from e

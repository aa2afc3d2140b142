from typing import Any, List, Mapping, Union

from catalog_api.crud.product_store import ProductStore
from catalog_api.exceptions import NotFoundError, ValidationError
from catalog_api.logging_config import get_child_logger, tracer
from catalog_api.models.product import (
    REQUIRED_FIELDS,
    Product,
    ProductBase,
    ProductFields,
)

logger = get_child_logger("services.product")

CREATED_MESSAGE = "Product created successfully!"
UPDATED_MESSAGE = "Product updated successfully!"
DELETED_MESSAGE = "Product deleted successfully!"


def find_missing_fields(fields: ProductFields) -> List[str]:
    """
    Return the names of required fields that are absent, null, or blank text.

    Numeric zero counts as present.
    """
    missing = []
    for name in REQUIRED_FIELDS:
        value = getattr(fields, name)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(name)
    return missing


def validate_fields(fields: Union[ProductFields, Mapping[str, Any]]) -> ProductBase:
    """
    Check that all seven product fields are populated.

    Raises:
        ValidationError: If one or more fields are missing
    """
    if not isinstance(fields, ProductFields):
        fields = ProductFields.model_validate(dict(fields))

    missing = find_missing_fields(fields)
    if missing:
        raise ValidationError(missing_fields=missing)
    return ProductBase.model_validate(fields.model_dump())


class ProductResourceService:
    """
    Validates and executes the catalog operations against a ProductStore.

    Each method issues at most one store call. Absence reported by the
    store becomes NotFoundError; PersistenceError from the store is
    propagated unchanged.
    """

    def __init__(self, store: ProductStore):
        self.store = store

    async def create(self, fields: ProductFields) -> str:
        with tracer.start_as_current_span("create_product") as span:
            try:
                product = validate_fields(fields)
            except ValidationError as e:
                span.set_attribute("error", True)
                span.set_attribute("error.type", "validation_error")
                logger.info(
                    "Rejected product creation with missing fields",
                    extra={"missing_fields": e.missing_fields},
                )
                raise

            span.set_attribute("product.name", product.name)
            created = await self.store.insert(product)
            span.set_attribute("product.id", created.id)
            logger.info(
                "Product created successfully",
                extra={"product_id": created.id, "category": created.category},
            )
            return CREATED_MESSAGE

    async def list_all(self) -> List[Product]:
        with tracer.start_as_current_span("list_products") as span:
            products = await self.store.find_all()
            span.set_attribute("products.count", len(products))
            return products

    async def get_by_id(self, product_id: str) -> Product:
        with tracer.start_as_current_span("get_product_by_id") as span:
            span.set_attribute("product.id", product_id)
            product = await self.store.find_by_id(product_id)
            if product is None:
                logger.warning("Product not found", extra={"product_id": product_id})
                raise NotFoundError()
            return product

    async def update_by_id(self, product_id: str, fields: ProductFields) -> Product:
        with tracer.start_as_current_span("update_product") as span:
            span.set_attribute("product.id", product_id)
            try:
                replacement = validate_fields(fields)
            except ValidationError as e:
                span.set_attribute("error", True)
                span.set_attribute("error.type", "validation_error")
                logger.info(
                    "Rejected product update with missing fields",
                    extra={"product_id": product_id, "missing_fields": e.missing_fields},
                )
                raise

            updated = await self.store.update_by_id(product_id, replacement)
            if updated is None:
                logger.warning("Product not found", extra={"product_id": product_id})
                raise NotFoundError()

            logger.info("Product updated successfully", extra={"product_id": product_id})
            return updated

    async def delete_by_id(self, product_id: str) -> str:
        with tracer.start_as_current_span("delete_product") as span:
            span.set_attribute("product.id", product_id)
            deleted = await self.store.delete_by_id(product_id)
            if not deleted:
                logger.warning("Product not found", extra={"product_id": product_id})
                raise NotFoundError()

            logger.info("Product deleted successfully", extra={"product_id": product_id})
            return DELETED_MESSAGE

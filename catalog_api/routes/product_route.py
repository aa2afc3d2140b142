from typing import List
from fastapi import APIRouter, Body, Depends, Path, status
from fastapi.responses import JSONResponse
from azure.cosmos.aio import ContainerProxy

from catalog_api.models.product import (
    ErrorResponse,
    MessageResponse,
    Product,
    ProductFields,
    ProductUpdateResponse,
)
from catalog_api.crud.product_store import CosmosProductStore, ProductStore
from catalog_api.services.product_service import (
    UPDATED_MESSAGE,
    ProductResourceService,
)
from catalog_api.db import get_container, ContainerType
from catalog_api.exceptions import (
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from catalog_api.logging_config import tracer, get_child_logger

# Create a child logger for this module
logger = get_child_logger("routes.product")

router = APIRouter(prefix="/produto", tags=["produto"])


async def get_products_container() -> ContainerProxy:
    return await get_container(ContainerType.PRODUCTS)


async def get_product_store(
    container: ContainerProxy = Depends(get_products_container),
) -> ProductStore:
    return CosmosProductStore(container)


async def get_product_service(
    store: ProductStore = Depends(get_product_store),
) -> ProductResourceService:
    return ProductResourceService(store)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _not_found(e: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND, content={"message": str(e)}
    )


def _persistence_failure(action: str, e: PersistenceError) -> JSONResponse:
    logger.error(
        f"Database error during {action}: {e}", exc_info=e.original_exception
    )
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))


def _unexpected_failure(action: str, e: Exception) -> JSONResponse:
    logger.error(f"Unexpected error during {action}: {e}", exc_info=True)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))


_ERROR_RESPONSES = {
    status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}
_NOT_FOUND_RESPONSE = {status.HTTP_404_NOT_FOUND: {"model": MessageResponse}}


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
    summary="Create a new product",
)
async def add_new_product(
    fields: ProductFields = Body(..., description="All seven product fields"),
    service: ProductResourceService = Depends(get_product_service),
):
    try:
        message = await service.create(fields)
        return MessageResponse(message=message)
    except ValidationError as e:
        return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, str(e))
    except PersistenceError as e:
        return _persistence_failure("product creation", e)
    except Exception as e:
        return _unexpected_failure("product creation", e)


@router.get(
    "",
    response_model=List[Product],
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse}},
    summary="List all products",
)
async def get_products(
    service: ProductResourceService = Depends(get_product_service),
):
    with tracer.start_as_current_span("api_get_products") as span:
        logger.info("Handling GET /produto request")
        try:
            products = await service.list_all()
            span.set_attribute("products.count", len(products))
            return products
        except PersistenceError as e:
            span.set_attribute("error", True)
            span.set_attribute("error.type", "persistence_error")
            return _persistence_failure("product listing", e)
        except Exception as e:
            span.set_attribute("error", True)
            span.set_attribute("error.type", type(e).__name__)
            return _unexpected_failure("product listing", e)


@router.get(
    "/{product_id}",
    response_model=Product,
    responses={**_NOT_FOUND_RESPONSE, **_ERROR_RESPONSES},
    summary="Get a product by ID",
)
async def get_product(
    product_id: str = Path(..., title="The ID of the product to retrieve"),
    service: ProductResourceService = Depends(get_product_service),
):
    try:
        return await service.get_by_id(product_id)
    except NotFoundError as e:
        return _not_found(e)
    except PersistenceError as e:
        return _persistence_failure(f"retrieval of product {product_id}", e)
    except Exception as e:
        return _unexpected_failure(f"retrieval of product {product_id}", e)


@router.put(
    "/{product_id}",
    response_model=ProductUpdateResponse,
    responses={**_NOT_FOUND_RESPONSE, **_ERROR_RESPONSES},
    summary="Replace a product by ID",
)
async def update_existing_product(
    fields: ProductFields = Body(..., description="All seven product fields"),
    product_id: str = Path(..., title="The ID of the product to update"),
    service: ProductResourceService = Depends(get_product_service),
):
    try:
        product = await service.update_by_id(product_id, fields)
        return ProductUpdateResponse(message=UPDATED_MESSAGE, produto=product)
    except ValidationError as e:
        return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, str(e))
    except NotFoundError as e:
        return _not_found(e)
    except PersistenceError as e:
        return _persistence_failure("product update", e)
    except Exception as e:
        return _unexpected_failure("product update", e)


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    responses={**_NOT_FOUND_RESPONSE, **_ERROR_RESPONSES},
    summary="Delete a product by ID",
)
async def delete_existing_product(
    product_id: str = Path(..., title="The ID of the product to delete"),
    service: ProductResourceService = Depends(get_product_service),
):
    try:
        message = await service.delete_by_id(product_id)
        return MessageResponse(message=message)
    except NotFoundError as e:
        return _not_found(e)
    except PersistenceError as e:
        return _persistence_failure("product deletion", e)
    except Exception as e:
        return _unexpected_failure("product deletion", e)

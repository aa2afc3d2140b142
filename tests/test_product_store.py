"""Tests for the Cosmos DB backed product store.

The container is mocked, so these verify:
- Which container call each operation issues (one per operation)
- Cosmos 404 mapped to absence, other Cosmos errors to PersistenceError
- Cosmos system properties dropped from returned products
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from azure.cosmos.exceptions import CosmosHttpResponseError

from catalog_api.crud.product_store import CosmosProductStore
from catalog_api.exceptions import PersistenceError
from catalog_api.models.product import ProductBase


def cosmos_error(status_code: int, message: str = "boom") -> CosmosHttpResponseError:
    return CosmosHttpResponseError(status_code=status_code, message=message)


def stored(doc: dict, product_id: str = "abc-123") -> dict:
    """Simulate what Cosmos returns: the document plus system properties."""
    return {**doc, "id": product_id, "_rid": "r1", "_etag": '"e1"', "_ts": 1700000000}


async def _items(docs):
    for doc in docs:
        yield doc


async def _failing_items(error):
    raise error
    yield  # pragma: no cover


@pytest.fixture
def container():
    return MagicMock()


@pytest.fixture
def product_store(container) -> CosmosProductStore:
    return CosmosProductStore(container)


class TestInsert:

    @pytest.mark.asyncio
    async def test_insert_assigns_id_and_strips_system_fields(self, product_store, container, cerveja):
        container.create_item = AsyncMock(side_effect=lambda body: stored(body, body["id"]))

        product = await product_store.insert(ProductBase(**cerveja))

        body = container.create_item.await_args.kwargs["body"]
        assert body["id"] == product.id
        assert set(body) == {"id", *cerveja}
        assert product.model_dump(exclude={"id"}) == cerveja
        assert not hasattr(product, "_etag")

    @pytest.mark.asyncio
    async def test_insert_wraps_cosmos_error(self, product_store, container, cerveja):
        container.create_item = AsyncMock(side_effect=cosmos_error(503, "Service unavailable"))

        with pytest.raises(PersistenceError, match="Service unavailable") as exc_info:
            await product_store.insert(ProductBase(**cerveja))
        assert isinstance(exc_info.value.original_exception, CosmosHttpResponseError)

    @pytest.mark.asyncio
    async def test_insert_wraps_unexpected_error(self, product_store, container, cerveja):
        container.create_item = AsyncMock(side_effect=ConnectionError("socket closed"))

        with pytest.raises(PersistenceError, match="socket closed"):
            await product_store.insert(ProductBase(**cerveja))


class TestFindAll:

    @pytest.mark.asyncio
    async def test_find_all_returns_every_document(self, product_store, container, cerveja, camiseta):
        container.read_all_items = MagicMock(
            return_value=_items([stored(cerveja, "1"), stored(camiseta, "2")])
        )

        products = await product_store.find_all()

        assert [p.id for p in products] == ["1", "2"]
        assert products[1].name == "Camiseta"

    @pytest.mark.asyncio
    async def test_find_all_wraps_cosmos_error(self, product_store, container):
        container.read_all_items = MagicMock(
            return_value=_failing_items(cosmos_error(500, "Internal error"))
        )

        with pytest.raises(PersistenceError, match="Internal error"):
            await product_store.find_all()


class TestFindById:

    @pytest.mark.asyncio
    async def test_find_by_id_uses_id_as_partition_key(self, product_store, container, cerveja):
        container.read_item = AsyncMock(return_value=stored(cerveja))

        product = await product_store.find_by_id("abc-123")

        container.read_item.assert_awaited_once_with(item="abc-123", partition_key="abc-123")
        assert product.id == "abc-123"

    @pytest.mark.asyncio
    async def test_missing_document_is_none(self, product_store, container):
        container.read_item = AsyncMock(side_effect=cosmos_error(404, "Not found"))

        assert await product_store.find_by_id("nonexistent") is None

    @pytest.mark.asyncio
    async def test_malformed_id_is_persistence_error(self, product_store, container):
        container.read_item = AsyncMock(side_effect=cosmos_error(400, "Invalid id"))

        with pytest.raises(PersistenceError, match="Invalid id"):
            await product_store.find_by_id("bad/id")


class TestUpdateById:

    @pytest.mark.asyncio
    async def test_update_replaces_whole_document(self, product_store, container, camiseta):
        container.replace_item = AsyncMock(side_effect=lambda item, body: stored(body, item))

        product = await product_store.update_by_id("abc-123", ProductBase(**camiseta))

        kwargs = container.replace_item.await_args.kwargs
        assert kwargs["item"] == "abc-123"
        assert kwargs["body"] == {**camiseta, "id": "abc-123"}
        assert product.model_dump(exclude={"id"}) == camiseta

    @pytest.mark.asyncio
    async def test_update_missing_document_is_none(self, product_store, container, camiseta):
        container.replace_item = AsyncMock(side_effect=cosmos_error(404, "Not found"))

        assert await product_store.update_by_id("nonexistent", ProductBase(**camiseta)) is None

    @pytest.mark.asyncio
    async def test_update_wraps_cosmos_error(self, product_store, container, camiseta):
        container.replace_item = AsyncMock(side_effect=cosmos_error(429, "Request rate is large"))

        with pytest.raises(PersistenceError, match="Request rate is large"):
            await product_store.update_by_id("abc-123", ProductBase(**camiseta))


class TestDeleteById:

    @pytest.mark.asyncio
    async def test_delete_existing_document(self, product_store, container):
        container.delete_item = AsyncMock(return_value=None)

        assert await product_store.delete_by_id("abc-123") is True
        container.delete_item.assert_awaited_once_with(item="abc-123", partition_key="abc-123")

    @pytest.mark.asyncio
    async def test_delete_missing_document_is_false(self, product_store, container):
        container.delete_item = AsyncMock(side_effect=cosmos_error(404, "Not found"))

        assert await product_store.delete_by_id("abc-123") is False

    @pytest.mark.asyncio
    async def test_delete_wraps_cosmos_error(self, product_store, container):
        container.delete_item = AsyncMock(side_effect=cosmos_error(403, "Forbidden"))

        with pytest.raises(PersistenceError, match="Forbidden"):
            await product_store.delete_by_id("abc-123")

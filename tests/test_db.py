from unittest.mock import AsyncMock, MagicMock

import pytest

from catalog_api import db
from catalog_api.config import CosmosSettings


@pytest.fixture
def cosmos_client(monkeypatch):
    client = MagicMock()
    client.close = AsyncMock()
    client_cls = MagicMock(return_value=client)
    monkeypatch.setattr(db, "CosmosClient", client_cls)
    monkeypatch.setattr(db, "_client", None)
    monkeypatch.setattr(db, "_credential", None)
    return client_cls


def _settings(monkeypatch, key=None):
    settings = CosmosSettings(
        endpoint="https://example.documents.azure.com:443/",
        database="loja",
        products_container="produtos",
        key=key,
    )
    monkeypatch.setattr(db, "get_cosmos_settings", lambda: settings)
    return settings


@pytest.mark.asyncio
async def test_get_container_uses_configured_names(monkeypatch, cosmos_client):
    _settings(monkeypatch, key="secret")

    await db.get_container(db.ContainerType.PRODUCTS)

    cosmos_client.assert_called_once_with(
        "https://example.documents.azure.com:443/", credential="secret"
    )
    client = cosmos_client.return_value
    client.get_database_client.assert_called_once_with("loja")
    client.get_database_client.return_value.get_container_client.assert_called_once_with("produtos")


@pytest.mark.asyncio
async def test_client_is_created_once(monkeypatch, cosmos_client):
    _settings(monkeypatch, key="secret")

    await db.get_container(db.ContainerType.PRODUCTS)
    await db.get_container(db.ContainerType.PRODUCTS)

    assert cosmos_client.call_count == 1


@pytest.mark.asyncio
async def test_default_credential_without_key(monkeypatch, cosmos_client):
    _settings(monkeypatch)
    credential = MagicMock()
    credential.close = AsyncMock()
    monkeypatch.setattr(db, "DefaultAzureCredential", MagicMock(return_value=credential))

    await db.get_container(db.ContainerType.PRODUCTS)
    cosmos_client.assert_called_once_with("https://example.documents.azure.com:443/", credential)

    await db.close_client()
    cosmos_client.return_value.close.assert_awaited_once()
    credential.close.assert_awaited_once()
    assert db._client is None

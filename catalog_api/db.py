from typing import Optional
from azure.cosmos.aio import CosmosClient, ContainerProxy
from azure.identity.aio import DefaultAzureCredential

from enum import Enum

from catalog_api.config import get_cosmos_settings
from catalog_api.logging_config import get_child_logger

logger = get_child_logger("db")


class ContainerType(str, Enum):
    PRODUCTS = "products"


_client: Optional[CosmosClient] = None
_credential: Optional[DefaultAzureCredential] = None


async def _ensure_client() -> CosmosClient:
    global _client, _credential
    if _client is None:
        settings = get_cosmos_settings()
        if settings.key:
            logger.info("Creating Cosmos DB client with account key")
            _client = CosmosClient(settings.endpoint, credential=settings.key)
        else:
            logger.info("Creating Cosmos DB client with DefaultAzureCredential")
            _credential = DefaultAzureCredential()
            _client = CosmosClient(settings.endpoint, _credential)
    return _client


async def get_container(container_type: ContainerType) -> ContainerProxy:
    settings = get_cosmos_settings()
    containers = {
        ContainerType.PRODUCTS: settings.products_container,
    }
    container_name = containers[container_type]

    client = await _ensure_client()
    database = client.get_database_client(settings.database)
    return database.get_container_client(container_name)


async def close_client() -> None:
    """Close the shared client and credential, if they were created."""
    global _client, _credential
    if _client is not None:
        await _client.close()
        _client = None
    if _credential is not None:
        await _credential.close()
        _credential = None

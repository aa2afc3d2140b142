import pytest

from catalog_api.models.product import ProductFields
from tests.fakes import InMemoryProductStore


@pytest.fixture
def cerveja() -> dict:
    """A complete, valid product body."""
    return {
        "name": "Cerveja",
        "description": "Cerveja artesanal",
        "color": "Amarela",
        "weight": 0.5,
        "category": "Bebida",
        "price": 10.0,
        "registrationDate": "2023-06-01",
    }


@pytest.fixture
def camiseta() -> dict:
    return {
        "name": "Camiseta",
        "description": "Camiseta de algodao",
        "color": "Azul",
        "weight": 0.2,
        "category": "Vestuario",
        "price": 49.9,
        "registrationDate": "2024-01-15",
    }


@pytest.fixture
def cerveja_fields(cerveja) -> ProductFields:
    return ProductFields(**cerveja)


@pytest.fixture
def store() -> InMemoryProductStore:
    return InMemoryProductStore()

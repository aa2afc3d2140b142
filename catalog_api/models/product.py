from pydantic import BaseModel, ConfigDict
from typing import Optional


REQUIRED_FIELDS = (
    "name",
    "description",
    "color",
    "weight",
    "category",
    "price",
    "registrationDate",
)


class ProductFields(BaseModel):
    """
    Request body for create and full-replacement update.

    Every field is optional at the schema level so that a missing field is
    reported by the service as a required-field failure instead of a
    schema error.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    weight: Optional[float] = None
    category: Optional[str] = None
    price: Optional[float] = None
    registrationDate: Optional[str] = None  # Free text, no format enforced

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "name": "Cerveja",
                "description": "Cerveja artesanal",
                "color": "Amarela",
                "weight": 0.5,
                "category": "Bebida",
                "price": 10.0,
                "registrationDate": "2023-06-01",
            }
        },
    )


class ProductBase(BaseModel):
    """
    The seven catalog fields, all populated.
    """

    name: str
    description: str
    color: str
    weight: float
    category: str
    price: float
    registrationDate: str

    model_config = ConfigDict(extra="forbid")


class Product(ProductBase):
    """
    A stored product. This is what clients receive when reading products.
    """

    id: str  # Assigned on insert, also the Cosmos DB partition key

    # Cosmos DB system fields (_rid, _etag, _ts, ...) are dropped
    model_config = ConfigDict(extra="ignore")


class MessageResponse(BaseModel):
    message: str


class ProductUpdateResponse(BaseModel):
    message: str
    produto: Product


class ErrorResponse(BaseModel):
    error: str

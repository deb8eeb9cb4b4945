# product_api/models.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Dict, List, Union


class ApiModel(BaseModel):
    # snake_case in Python, camelCase on the wire
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProductIn(ApiModel):
    name: str
    description: str
    price: Union[int, float]
    category: str
    in_stock: bool


class Product(ApiModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: int
    name: str
    description: str
    price: Union[int, float]
    category: str
    in_stock: bool

    @classmethod
    def from_input(cls, product_id: int, p: ProductIn) -> "Product":
        return cls(id=product_id, **p.model_dump())


class ProductPage(ApiModel):
    total: int
    page: int
    limit: int
    total_pages: int
    data: List[Product]


class SearchResult(ApiModel):
    total: int
    data: List[Product]


class CategoryStats(ApiModel):
    count: int = 0
    total_value: Union[int, float] = 0
    in_stock: int = 0


class Statistics(ApiModel):
    total_products: int
    category_counts: Dict[str, CategoryStats]


class ProductMessage(ApiModel):
    message: str
    product: Product


class Message(BaseModel):
    message: str


class ErrorBody(ApiModel):
    name: str
    message: str
    status_code: int


class ErrorResponse(BaseModel):
    error: ErrorBody

from pydantic import Field, field_validator
from datetime import datetime
from typing import List, Optional

from app.schemas.base import CamelModel, reject_null


class ProductBase(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    description: str
    price: float = Field(ge=0)
    tags: List[str] = []
    favorite_count: int = Field(default=0, ge=0)


class ProductCreate(ProductBase):
    pass


class ProductUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    tags: Optional[List[str]] = None
    favorite_count: Optional[int] = Field(default=None, ge=0)

    @field_validator('name', 'description', 'price', 'tags', 'favorite_count')
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class ProductSummary(ProductBase):
    """一覧・詳細用"""
    id: int
    created_at: datetime


class Product(ProductSummary):
    updated_at: datetime


# レスポンス用のスキーマ
class ProductList(CamelModel):
    total_count: int
    products: List[ProductSummary] = []

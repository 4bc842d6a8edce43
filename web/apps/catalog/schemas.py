"""Pydantic schemas for the catalog API.

Input schemas validate request bodies before they reach the service layer;
output schemas are built from ORM instances (``from_attributes``) and
dumped in JSON mode so decimals and ids serialize consistently.
"""

from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CategoryIn(BaseModel):
    """Body accepted by category create and update.

    Attributes:
        name: Display name, stripped of surrounding whitespace.
    """

    name: str = Field(min_length=1, max_length=120)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("Category name must not be blank")
        return v2


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class ProductOut(BaseModel):
    """Product as returned by the catalog and embedded in order items."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str = ""
    price: Decimal
    img_url: str = ""
    categories: list[CategoryOut] = []

"""Product Schemas — payloads for create/replace and the public product shape.

Invariants:
    - ProductCreate.price > 0, name 1-100 chars; availability defaults to true
    - ProductReplace requires availability
    - ProductOut serializes createdAt/updatedAt in camelCase

Design Decisions:
    - coerce_numbers_to_str: the field validator accepts numeric names, so the
      schema must too
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ProductCreate(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str = Field(min_length=1, max_length=100)
    price: float = Field(gt=0)
    availability: bool = True


class ProductReplace(ProductCreate):
    availability: bool


class ProductOut(BaseModel):
    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True,
    )

    id: int
    name: str
    price: float
    availability: bool
    created_at: datetime
    updated_at: datetime


class ProductEnvelope(BaseModel):
    data: ProductOut


class ProductListEnvelope(BaseModel):
    data: list[ProductOut]


class DeletedEnvelope(BaseModel):
    data: str

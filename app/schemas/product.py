"""Product request/response schemas - REST API contract."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ProductCreate(BaseModel):
    # Raw values; ProductService sanitizes and validates each one
    name: Any = None
    price: Any = None
    image: Any = None


class ProductUpdate(BaseModel):
    name: Any = None
    price: Any = None
    image: Any = None


class ProductResponse(BaseModel):
    id: str
    name: str
    price: float
    image: str
    created_at: datetime | None = Field(default=None, serialization_alias="createdAt")
    updated_at: datetime | None = Field(default=None, serialization_alias="updatedAt")

    model_config = {"from_attributes": True}


class ProductEnvelope(BaseModel):
    success: bool = True
    data: ProductResponse


class ProductListEnvelope(BaseModel):
    success: bool = True
    data: list[ProductResponse]


class MessageResponse(BaseModel):
    success: bool = True
    message: str

"""
Product CRUD endpoints - RESTful resource (GET/POST/PUT/DELETE).
Reads are public; every mutation depends on the admin gate.
"""

from fastapi import APIRouter, status

from app.core.dependencies import AdminIdentity
from app.db.session import DbSession
from app.db.repositories.product_repository import ProductRepository
from app.schemas.product import (
    MessageResponse,
    ProductCreate,
    ProductEnvelope,
    ProductListEnvelope,
    ProductResponse,
    ProductUpdate,
)
from app.services.product_service import ProductService

router = APIRouter()


def _get_product_service(session: DbSession) -> ProductService:
    """Factory for service with repository injection."""
    return ProductService(ProductRepository(session))


@router.get("", response_model=ProductListEnvelope)
async def list_products(session: DbSession):
    products = await _get_product_service(session).list_products()
    return ProductListEnvelope(data=[ProductResponse.model_validate(p) for p in products])


@router.get("/{product_id}", response_model=ProductEnvelope)
async def get_product(session: DbSession, product_id: str):
    product = await _get_product_service(session).get_product(product_id)
    return ProductEnvelope(data=ProductResponse.model_validate(product))


@router.post("", response_model=ProductEnvelope, status_code=status.HTTP_201_CREATED)
async def create_product(session: DbSession, data: ProductCreate, admin: AdminIdentity):
    product = await _get_product_service(session).create_product(data.name, data.price, data.image)
    return ProductEnvelope(data=ProductResponse.model_validate(product))


@router.put("/{product_id}", response_model=ProductEnvelope)
async def update_product(session: DbSession, product_id: str, data: ProductUpdate, admin: AdminIdentity):
    """Partial update: only supplied fields change."""
    product = await _get_product_service(session).update_product(
        product_id, name=data.name, price=data.price, image=data.image
    )
    return ProductEnvelope(data=ProductResponse.model_validate(product))


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(session: DbSession, product_id: str, admin: AdminIdentity):
    await _get_product_service(session).delete_product(product_id)
    return MessageResponse(message="Product deleted")

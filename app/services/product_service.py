"""
Product service - catalog CRUD with sanitization on every write.
Create requires all fields; update applies the same per-field rules to
whichever fields were supplied and leaves the rest untouched.
"""

import logging
import uuid
from typing import Any

from app.core.errors import NotFoundError, ValidationError
from app.core.sanitize import is_url, parse_number, sanitize_string, sanitize_url
from app.db.models.product import Product
from app.db.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 100
MAX_PRICE = 1_000_000
# Matches the products.image column width
MAX_IMAGE_URL_LENGTH = 2048


def clean_name(value: Any) -> str:
    name = sanitize_string(value)
    if len(name) < NAME_MIN_LENGTH:
        raise ValidationError("Product name must be at least 3 characters long")
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError("Product name must not exceed 100 characters")
    # Catches an image link pasted into the name field
    if is_url(name):
        raise ValidationError("Product name must not be a URL")
    return name


def clean_price(value: Any) -> float:
    price = parse_number(value)
    if price is None:
        raise ValidationError("Price must be a valid number")
    if price <= 0:
        raise ValidationError("Price must be greater than 0")
    if price > MAX_PRICE:
        raise ValidationError("Price exceeds maximum allowed value")
    return price


def clean_image(value: Any) -> str:
    image = sanitize_url(value)
    if not image:
        raise ValidationError("Image must be a valid URL")
    if len(image) > MAX_IMAGE_URL_LENGTH:
        raise ValidationError("Image URL must not exceed 2048 characters")
    return image


def is_valid_product_id(product_id: str) -> bool:
    try:
        uuid.UUID(str(product_id))
    except ValueError:
        return False
    return True


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


class ProductService:
    """Handles all product use cases. Authorization is enforced before these run."""

    def __init__(self, product_repo: ProductRepository):
        self.product_repo = product_repo

    async def list_products(self) -> list[Product]:
        return await self.product_repo.get_all()

    async def get_product(self, product_id: str) -> Product:
        return await self._get_or_404(product_id)

    async def create_product(self, name: Any, price: Any, image: Any) -> Product:
        if _is_missing(name) or _is_missing(price) or _is_missing(image):
            raise ValidationError("Please provide all fields (name, price, image)")
        product = Product(name=clean_name(name), price=clean_price(price), image=clean_image(image))
        product = await self.product_repo.add(product)
        logger.info("Created product id=%s", product.id)
        return product

    async def update_product(
        self, product_id: str, name: Any = None, price: Any = None, image: Any = None
    ) -> Product:
        """Partial update. Every supplied field is validated before the store is touched."""
        if not is_valid_product_id(product_id):
            raise NotFoundError("Invalid product id")
        if name is None and price is None and image is None:
            raise ValidationError("Please provide at least one field to update")

        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = clean_name(name)
        if price is not None:
            changes["price"] = clean_price(price)
        if image is not None:
            changes["image"] = clean_image(image)

        product = await self._get_or_404(product_id)
        for field, value in changes.items():
            setattr(product, field, value)
        product = await self.product_repo.save(product)
        logger.info("Updated product id=%s fields=%s", product.id, sorted(changes))
        return product

    async def delete_product(self, product_id: str) -> None:
        product = await self._get_or_404(product_id)
        await self.product_repo.delete(product)
        logger.info("Deleted product id=%s", product_id)

    async def _get_or_404(self, product_id: str) -> Product:
        if not is_valid_product_id(product_id):
            raise NotFoundError("Invalid product id")
        product = await self.product_repo.get_by_id(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

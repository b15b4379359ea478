"""
Product repository - catalog data access.
"""

from app.db.models.product import Product
from app.db.repositories.base_repository import BaseRepository


class ProductRepository(BaseRepository[Product]):
    def __init__(self, session):
        super().__init__(session, Product)

# Repository pattern: abstract data access behind small async classes

from app.db.repositories.product_repository import ProductRepository
from app.db.repositories.user_repository import UserRepository

__all__ = ["UserRepository", "ProductRepository"]

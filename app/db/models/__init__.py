from app.db.models.product import Product
from app.db.models.user import User

__all__ = ["User", "Product"]
